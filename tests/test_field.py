"""
Unit tests for the travelling-wave field model
"""

import math

import numpy as np
import pytest

from dust_simulation import DustPhysicsParams, build_hex_panel, compute_field_at
from dust_simulation.core.field import sector_index, wave_phase
from dust_simulation.testing import create_offset_hex_panel


@pytest.fixture
def params():
    return DustPhysicsParams()


@pytest.fixture
def hex_panel():
    return build_hex_panel()


class TestSectors:
    """Angular sector assignment"""

    def test_sector_boundaries(self):
        angles = np.array([-math.pi, -math.pi + 1e-9, 0.0, math.pi - 1e-9, math.pi])
        np.testing.assert_array_equal(sector_index(angles, 6), [0, 0, 3, 5, 5])

    def test_sectors_within_range(self):
        angles = np.linspace(-math.pi, math.pi, 1001)
        sectors = sector_index(angles, 6)
        assert sectors.min() == 0
        assert sectors.max() == 5
        assert np.all(np.diff(sectors) >= 0)

    def test_phase_lag_between_sectors(self, params):
        phases = wave_phase(0.0, np.arange(6), params)
        np.testing.assert_allclose(np.diff(phases), params.phase_shift)


class TestFieldValues:
    """Field components at known points"""

    def test_centre_peak_lift(self, params, hex_panel):
        """At the centroid (sector 3) the quarter-period phase gives maximal lift"""
        t = 1.0 / (4.0 * params.wave_frequency)
        field = compute_field_at(np.array([0.0, params.surface_height, 0.0]), t, params, hex_panel)
        assert field.shape == (3,)
        assert field[1] == pytest.approx(params.field_base + params.field_travel, rel=1e-9)

    def test_centre_follows_middle_sector(self, params, hex_panel):
        """The panel centre takes sector 3's phase at every time"""
        centre = np.array([0.0, params.surface_height, 0.0])
        for t in np.linspace(0.0, 1.0 / params.wave_frequency, 9):
            field = compute_field_at(centre, t, params, hex_panel)
            expected = params.field_base + params.field_travel * math.sin(wave_phase(t, 3, params))
            assert field[1] == pytest.approx(expected, rel=1e-9, abs=1e-6)

    def test_centre_horizontal_components(self, params, hex_panel):
        """At the centroid the radial direction is +x and the tangent is +z"""
        t = 1.0 / (4.0 * params.wave_frequency)
        field = compute_field_at(np.array([0.0, 0.0, 0.0]), t, params, hex_panel)

        phase = wave_phase(t, 3, params)
        kick = params.field_lateral * params.radial_kick_fraction * math.sin(phase + params.radial_kick_phase)
        tangential = params.field_lateral * math.cos(phase) * 0.4
        bias = params.directional_bias
        np.testing.assert_allclose(field[0], kick + bias[0], rtol=1e-9)
        np.testing.assert_allclose(field[2], tangential + bias[2], atol=1e-6)

    def test_lift_damped_at_edge(self, params, hex_panel):
        """Lift modulation is reduced by the edge damping at r = apothem"""
        t = 0.013
        a = hex_panel.apothem
        field = compute_field_at(np.array([a, 0.0, 0.0]), t, params, hex_panel)
        phase = wave_phase(t, 3, params)
        expected = params.field_base + params.field_travel * math.sin(phase) * (1.0 - params.lift_edge_damping)
        assert field[1] == pytest.approx(expected, rel=1e-12)

    def test_radius_normalization_clipped(self, params, hex_panel):
        """Beyond the apothem the field no longer depends on radius"""
        t = 0.021
        a = hex_panel.apothem
        inner = compute_field_at(np.array([1.0 * a, 0.0, 0.0]), t, params, hex_panel)
        outer = compute_field_at(np.array([1.1 * a, 0.0, 0.0]), t, params, hex_panel)
        np.testing.assert_allclose(inner, outer)

    def test_bias_is_horizontal(self, hex_panel):
        """With all drive amplitudes off only the x and z bias remain"""
        params = DustPhysicsParams(
            field_base=0.0,
            field_travel=0.0,
            field_lateral=0.0,
            directional_bias=(1.0, 5.0, 2.0),
        )
        points = np.array([[0.05, 0.01, -0.02], [-0.1, 0.3, 0.1]])
        field = compute_field_at(points, 0.37, params, hex_panel)
        np.testing.assert_allclose(field, [[1.0, 0.0, 2.0], [1.0, 0.0, 2.0]])

    def test_tangential_orthogonal_to_radius(self, hex_panel):
        """Without the radial kick and bias the horizontal field is azimuthal"""
        params = DustPhysicsParams(radial_kick_fraction=0.0, directional_bias=(0.0, 0.0, 0.0))
        rng = np.random.default_rng(4)
        points = rng.uniform(-0.2, 0.2, size=(50, 3))
        field = compute_field_at(points, 0.05, params, hex_panel)
        radial_component = field[:, 0] * points[:, 0] + field[:, 2] * points[:, 2]
        np.testing.assert_allclose(radial_component, 0.0, atol=1e-9)


class TestFieldProperties:
    """Purity, shape handling and symmetry"""

    def test_batch_matches_single(self, params, hex_panel):
        rng = np.random.default_rng(8)
        points = rng.uniform(-0.25, 0.25, size=(40, 3))
        batch = compute_field_at(points, 0.2, params, hex_panel)
        assert batch.shape == (40, 3)
        for p, f in zip(points, batch):
            np.testing.assert_allclose(compute_field_at(p, 0.2, params, hex_panel), f)

    def test_pure_function(self, params, hex_panel):
        points = np.array([[0.03, 0.01, 0.04], [-0.12, 0.02, 0.05]])
        before = points.copy()
        a = compute_field_at(points, 0.77, params, hex_panel)
        b = compute_field_at(points, 0.77, params, hex_panel)
        np.testing.assert_array_equal(a, b)
        np.testing.assert_array_equal(points, before)

    def test_periodic_in_time(self, params, hex_panel):
        points = np.array([[0.03, 0.01, 0.04], [-0.12, 0.02, 0.05]])
        period = 1.0 / params.wave_frequency
        np.testing.assert_allclose(
            compute_field_at(points, 0.1, params, hex_panel),
            compute_field_at(points, 0.1 + period, params, hex_panel),
            rtol=1e-9,
            atol=1e-6,
        )

    def test_independent_of_height(self, params, hex_panel):
        low = compute_field_at(np.array([0.07, 0.0, -0.03]), 0.4, params, hex_panel)
        high = compute_field_at(np.array([0.07, 1.5, -0.03]), 0.4, params, hex_panel)
        np.testing.assert_array_equal(low, high)

    def test_measured_from_centroid(self, params, hex_panel):
        """Shifting the panel shifts the field pattern with it"""
        offset = create_offset_hex_panel(center=(0.5, -0.3))
        local = np.array([0.06, 0.0, 0.02])
        shifted = local + np.array([0.5, 0.0, -0.3])
        np.testing.assert_allclose(
            compute_field_at(shifted, 0.3, params, offset),
            compute_field_at(local, 0.3, params, hex_panel),
            rtol=1e-9,
            atol=1e-6,
        )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
