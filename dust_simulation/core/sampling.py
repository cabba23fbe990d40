"""
Random sampling utilities for dust grain generation.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .data_classes import BoundaryPolygon, DustPhysicsParams
from .geometry import sample_point_in_polygon


def sample_radius(
    params: DustPhysicsParams,
    rng: np.random.Generator,
    size: Optional[int] = None,
):
    """Sample grain radii skewed toward small grains.

    ``r = r_min + (r_max - r_min) * u**k`` with ``u ~ U[0, 1)`` and
    ``k = params.radius_skew_exponent``. Always within
    ``[radius_min, radius_max]``, hence strictly positive.

    Returns
    -------
    float or np.ndarray
        A float when ``size`` is None, otherwise an array of ``size`` radii (m).
    """
    u = rng.random(size)
    radius = params.radius_min + (params.radius_max - params.radius_min) * np.power(u, params.radius_skew_exponent)
    if size is None:
        return float(radius)
    return radius


def sample_charge(
    params: DustPhysicsParams,
    rng: np.random.Generator,
    size: Optional[int] = None,
):
    """Sample grain charges uniformly over ``[charge_min, charge_max]`` (C)."""
    charge = rng.uniform(params.charge_min, params.charge_max, size)
    if size is None:
        return float(charge)
    return charge


def sample_spawn_position(
    polygon: BoundaryPolygon,
    params: DustPhysicsParams,
    rng: np.random.Generator,
) -> np.ndarray:
    """Uniform point on the panel surface inside the spawn region.

    Returns
    -------
    np.ndarray, shape (3,)
        ``(x, surface_height, z)`` in metres.
    """
    x, z = sample_point_in_polygon(
        polygon,
        scale=params.spawn_scale,
        rng=rng,
        max_retries=params.sample_retry_cap,
    )
    return np.array([x, params.surface_height, z], dtype=float)


def sample_spawn_velocity(params: DustPhysicsParams, rng: np.random.Generator) -> np.ndarray:
    """Small horizontal velocity jitter for a freshly spawned grain (m/s)."""
    half = 0.5 * params.spawn_velocity_jitter
    vx, vz = rng.uniform(-half, half, size=2)
    return np.array([vx, 0.0, vz], dtype=float)
