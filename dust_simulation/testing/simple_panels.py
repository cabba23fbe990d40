"""
Simple Panel Generators for Testing and Debugging
==================================================

This module provides simple analytic panel footprints and ready-made
simulations with hand-placed grains. They are useful for:
- Checking containment and sampling on shapes with known answers
- Driving one grain through a specific state transition
- Quick sanity runs without the full 260-grain population

Every panel function returns a :class:`BoundaryPolygon`, so they can be used
wherever the default hex panel is.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from ..core.data_classes import (
    BoundaryPolygon,
    DustParticle,
    DustPhysicsParams,
    ParticleState,
)
from ..core.geometry import build_boundary_polygon, regular_polygon_vertices
from ..core.kinematics import adhesion_force, grain_mass
from ..core.simulation import DustSimulation


def create_square_panel(half_width: float = 0.2) -> BoundaryPolygon:
    """Axis-aligned square centred on the origin, counter-clockwise.

    Parameters
    ----------
    half_width : float, optional
        Half of the side length in metres, by default 0.2
    """
    h = half_width
    return build_boundary_polygon([(-h, -h), (h, -h), (h, h), (-h, h)])


def create_triangle_panel(radius: float = 0.2, clockwise: bool = False) -> BoundaryPolygon:
    """Equilateral triangle centred on the origin.

    Parameters
    ----------
    radius : float, optional
        Circumradius in metres, by default 0.2
    clockwise : bool, optional
        Reverse the winding, by default False
    """
    verts = regular_polygon_vertices(3, radius, rotation=math.pi / 2)
    if clockwise:
        verts = verts[::-1]
    return build_boundary_polygon(verts)


def create_offset_hex_panel(center=(0.5, -0.3), radius: float = 0.22) -> BoundaryPolygon:
    """Hexagon whose centroid is away from the origin."""
    verts = regular_polygon_vertices(6, radius, rotation=math.pi / 6) + np.asarray(center, dtype=float)
    return build_boundary_polygon(verts)


def make_particle(
    params: DustPhysicsParams,
    radius: float,
    charge: float,
    position=(0.0, None, 0.0),
    velocity=(0.0, 0.0, 0.0),
    state: ParticleState = ParticleState.ATTACHED,
    collect_timer: float = 0.0,
) -> DustParticle:
    """Build a grain with mass and adhesion derived from ``radius``.

    A ``None`` height places the grain on the panel surface.
    """
    x, y, z = position
    if y is None:
        y = params.surface_height
    return DustParticle(
        radius=radius,
        mass=float(grain_mass(radius, params.density)),
        charge=charge,
        adhesion_force=float(adhesion_force(radius, params.adhesion_per_area)),
        position=np.array([x, y, z], dtype=float),
        velocity=np.asarray(velocity, dtype=float),
        state=state,
        collect_timer=collect_timer,
    )


def create_single_particle_simulation(
    particle: Optional[DustParticle] = None,
    polygon: Optional[BoundaryPolygon] = None,
    params: Optional[DustPhysicsParams] = None,
    seed: int = 0,
) -> DustSimulation:
    """A one-slot simulation, optionally with slot 0 overwritten by ``particle``."""
    simulation = DustSimulation(polygon=polygon, params=params, n_particles=1, seed=seed)
    if particle is not None:
        simulation.ensemble.set_particle(0, particle)
    return simulation


def print_panel_info(polygon: BoundaryPolygon, name: str = "Panel"):
    """Print basic information about a panel footprint."""
    verts = polygon.vertices
    print(f"\n{name} Information:")
    print(f"  Vertices: {verts.shape[0]}")
    print(f"  Centroid: ({polygon.centroid[0]:.4f}, {polygon.centroid[1]:.4f}) m")
    print(f"  Circumradius: {polygon.circumradius:.4f} m")
    print(f"  Apothem: {polygon.apothem:.4f} m")
    print(f"  X range: [{verts[:, 0].min():.4f}, {verts[:, 0].max():.4f}] m")
    print(f"  Z range: [{verts[:, 1].min():.4f}, {verts[:, 1].max():.4f}] m")
