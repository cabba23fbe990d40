"""
Unit tests for grain property sampling and derived quantities
"""

import math

import numpy as np
import pytest

from dust_simulation import (
    EARTH_GRAVITY,
    MARTIAN_GRAVITY,
    DustPhysicsParams,
    adhesion_force,
    build_hex_panel,
    grain_mass,
    polygon_contains,
    sample_charge,
    sample_radius,
    visual_scale,
)
from dust_simulation.core.kinematics import vertical_lift_force
from dust_simulation.core.sampling import sample_spawn_position, sample_spawn_velocity


@pytest.fixture
def params():
    return DustPhysicsParams()


class TestRadiusSampling:
    """Skewed radius distribution"""

    def test_radius_within_bounds(self, params):
        radii = sample_radius(params, np.random.default_rng(0), size=10000)
        assert radii.shape == (10000,)
        assert np.all(radii >= params.radius_min)
        assert np.all(radii <= params.radius_max)

    def test_radius_skewed_small(self, params):
        """u**k with k > 1 puts the median below the midpoint"""
        radii = sample_radius(params, np.random.default_rng(1), size=20000)
        expected_median = params.radius_min + (params.radius_max - params.radius_min) * 0.5 ** params.radius_skew_exponent
        assert np.median(radii) == pytest.approx(expected_median, rel=0.03)
        assert np.median(radii) < 0.5 * (params.radius_min + params.radius_max)

    def test_scalar_draw(self, params):
        radius = sample_radius(params, np.random.default_rng(2))
        assert isinstance(radius, float)
        assert params.radius_min <= radius <= params.radius_max

    def test_degenerate_range(self):
        params = DustPhysicsParams(radius_min=2e-5, radius_max=2e-5)
        radii = sample_radius(params, np.random.default_rng(3), size=100)
        np.testing.assert_allclose(radii, 2e-5)


class TestChargeSampling:
    """Uniform charge distribution"""

    def test_charge_within_bounds(self, params):
        charges = sample_charge(params, np.random.default_rng(0), size=10000)
        assert np.all(charges >= params.charge_min)
        assert np.all(charges <= params.charge_max)

    def test_charge_mean(self, params):
        charges = sample_charge(params, np.random.default_rng(5), size=20000)
        assert np.mean(charges) == pytest.approx(0.5 * (params.charge_min + params.charge_max), rel=0.02)

    def test_scalar_draw(self, params):
        assert isinstance(sample_charge(params, np.random.default_rng(6)), float)


class TestSpawn:
    """Spawn position and velocity"""

    def test_spawn_on_surface_inside_region(self, params):
        hex_panel = build_hex_panel()
        rng = np.random.default_rng(7)
        for _ in range(200):
            pos = sample_spawn_position(hex_panel, params, rng)
            assert pos.shape == (3,)
            assert pos[1] == params.surface_height
            assert polygon_contains(hex_panel, pos, params.spawn_scale)

    def test_spawn_velocity_jitter(self, params):
        rng = np.random.default_rng(8)
        half = 0.5 * params.spawn_velocity_jitter
        for _ in range(200):
            vel = sample_spawn_velocity(params, rng)
            assert vel[1] == 0.0
            assert abs(vel[0]) <= half
            assert abs(vel[2]) <= half

    def test_zero_jitter(self):
        params = DustPhysicsParams(spawn_velocity_jitter=0.0)
        np.testing.assert_array_equal(sample_spawn_velocity(params, np.random.default_rng(9)), 0.0)


class TestKinematics:
    """Mass, adhesion, lift and visual stretch"""

    def test_gravity_constants(self):
        assert EARTH_GRAVITY == pytest.approx(9.80665)
        assert DustPhysicsParams().gravity == MARTIAN_GRAVITY

    def test_grain_mass(self):
        r, rho = 38e-6, 3100.0
        assert grain_mass(r, rho) == pytest.approx(4.0 / 3.0 * math.pi * r ** 3 * rho)

    def test_grain_mass_vectorized(self):
        radii = np.array([8e-6, 20e-6, 38e-6])
        masses = grain_mass(radii, 3100.0)
        assert masses.shape == (3,)
        assert np.all(masses > 0.0)
        assert np.all(np.diff(masses) > 0.0)

    def test_adhesion_force(self):
        assert adhesion_force(38e-6, 50.0) == pytest.approx(50.0 * math.pi * (38e-6) ** 2)

    def test_vertical_lift(self):
        assert vertical_lift_force(1e-13, 2e5, 1e-9, 3.71) == pytest.approx(2e-8 - 3.71e-9)

    def test_visual_scale_at_rest(self):
        assert visual_scale(np.zeros(3)) == pytest.approx(1.0)

    def test_visual_scale_linear(self):
        assert visual_scale(np.array([0.06, 0.0, 0.08])) == pytest.approx(1.0 + 12.0 * 0.1)

    def test_visual_scale_clamped(self):
        scales = visual_scale(np.array([[10.0, 0.0, 0.0], [0.0, -0.01, 0.0]]))
        np.testing.assert_allclose(scales, [3.8, 1.12])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
