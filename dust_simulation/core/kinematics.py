"""
Derived grain quantities: mass, adhesion and net lift.
"""

from __future__ import annotations

import math

import numpy as np

from .constants import SPHERE_VOLUME_FACTOR
from .. import config


def grain_mass(radius, density: float):
    """Mass of a spherical grain.

    Parameters
    ----------
    radius : float or np.ndarray
        Grain radius (m).
    density : float
        Material density (kg/m^3).

    Returns
    -------
    float or np.ndarray
        Mass in kilograms, ``4/3 pi r^3 rho``.
    """
    return SPHERE_VOLUME_FACTOR * math.pi * np.power(radius, 3) * density


def adhesion_force(radius, adhesion_per_area: float):
    """Force needed to lift a grain off the surface, ``stress * pi * r^2`` (N)."""
    return adhesion_per_area * math.pi * np.power(radius, 2)


def vertical_lift_force(charge, field_y, mass, gravity: float):
    """Net upward force ``q E_y - m g`` on a grain (N)."""
    return charge * field_y - mass * gravity


def visual_scale(
    velocity: np.ndarray,
    gain: float = config.VISUAL_STRETCH_GAIN,
    max_scale: float = config.VISUAL_STRETCH_MAX,
) -> np.ndarray:
    """Speed-based stretch factor used by renderers, ``clip(1 + gain |v|, 1, max)``.

    Accepts one velocity (3,) or many (n, 3).
    """
    speed = np.linalg.norm(np.asarray(velocity, dtype=float), axis=-1)
    return np.clip(1.0 + gain * speed, 1.0, max_scale)
