"""
Electric field model of the sectored travelling-wave electrode drive.

The panel is divided into ``segment_count`` equal angular sectors. Each
sector is driven with the same waveform lagged by ``phase_shift``, which
gives a rotating pattern that lofts charged grains and pushes them toward
the collector trench.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .data_classes import BoundaryPolygon, DustPhysicsParams


def sector_index(angle: np.ndarray, segment_count: int) -> np.ndarray:
    """Map polar angles in [-pi, pi] to sector indices in [0, segment_count)."""
    sector = np.floor((np.asarray(angle) + math.pi) / (2.0 * math.pi) * segment_count)
    return np.clip(sector, 0, segment_count - 1).astype(int)


def wave_phase(time: float, sector: np.ndarray, params: DustPhysicsParams) -> np.ndarray:
    """Travelling-wave phase ``2 pi f t + sector * phase_shift``."""
    return 2.0 * math.pi * params.wave_frequency * time + sector * params.phase_shift


def compute_field_at(
    positions: np.ndarray,
    time: float,
    params: DustPhysicsParams,
    polygon: Optional[BoundaryPolygon] = None,
) -> np.ndarray:
    """Evaluate the electric field at one or many positions.

    Pure function of its inputs. Angles and radii are measured from the
    polygon centroid in the (x, z) plane.

    Parameters
    ----------
    positions : np.ndarray
        Shape (3,) or (n, 3), metres.
    time : float
        Simulation time (s).
    params : DustPhysicsParams
        Field amplitudes and drive settings.
    polygon : BoundaryPolygon, optional
        Panel footprint. Its apothem normalizes the radius; without it the
        field is evaluated as if the panel had unit apothem at the origin.

    Returns
    -------
    np.ndarray
        Field vector(s) (V/m), same shape as ``positions``.
    """
    pos = np.asarray(positions, dtype=float)
    single = pos.ndim == 1
    pos = np.atleast_2d(pos)

    if polygon is not None:
        cx, cz = polygon.centroid
        apothem = polygon.apothem
    else:
        cx, cz = 0.0, 0.0
        apothem = 1.0

    dx = pos[:, 0] - cx
    dz = pos[:, 2] - cz
    angle = np.arctan2(dz, dx)
    r_norm = np.clip(np.hypot(dx, dz) / apothem, 0.0, 1.0)

    sector = sector_index(angle, params.segment_count)
    phase = wave_phase(time, sector, params)

    # Lift, weakening toward the edge
    ey = params.field_base + params.field_travel * np.sin(phase) * (1.0 - params.lift_edge_damping * r_norm)

    # Azimuthal push, strengthening toward the edge
    tangential = params.field_lateral * np.cos(phase) * (0.4 + 0.6 * r_norm)

    # Radial pulse out of phase with the tangential term
    radial_kick = (
        params.field_lateral * params.radial_kick_fraction * np.sin(phase + params.radial_kick_phase)
    )

    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    bias = params.bias_vector

    field = np.empty_like(pos)
    # radial dir = (cos, 0, sin), tangent dir = (-sin, 0, cos)
    field[:, 0] = cos_a * radial_kick - sin_a * tangential + bias[0]
    field[:, 1] = ey
    field[:, 2] = sin_a * radial_kick + cos_a * tangential + bias[2]

    if single:
        return field[0]
    return field
