"""
Electrodynamic Dust Shield Simulation Package
=============================================

This package simulates charged regolith grains on an electrodynamic dust
shield panel: a sectored travelling-wave field lifts grains off the surface
and drives them into a collector trench around the panel edge.

Modules:
--------
- config: Configurable default parameters
- constants: Physical constants and sampling diagnostics
- data_classes: Data structures (DustPhysicsParams, BoundaryPolygon, DustEnsemble, ...)
- geometry: Polygon containment and spawn-point sampling
- field: Travelling-wave electric field model
- kinematics: Grain mass, adhesion and lift
- sampling: Grain property sampling
- transport: Per-step integration and grain state machine
- simulation: Simulation driver and headless run loop
- io_utils: Data export utilities
"""

from .core.constants import *
from . import config
from .core.data_classes import (
    ConfigurationError,
    ParticleState,
    DustPhysicsParams,
    BoundaryPolygon,
    DustParticle,
    DustEnsemble,
    ParticleSnapshot,
    DustStatistics,
    TrajectoryHistory,
)
from .core.geometry import (
    regular_polygon_vertices,
    build_boundary_polygon,
    build_hex_panel,
    polygon_contains,
    sample_point_in_polygon,
)
from .core.field import compute_field_at
from .core.kinematics import (
    grain_mass,
    adhesion_force,
    visual_scale,
)
from .core.sampling import (
    sample_radius,
    sample_charge,
)
from .core.transport import (
    respawn_particles,
    advance_particles,
)
from .core.simulation import (
    DustSimulation,
    initialize_simulation,
    step_simulation,
    snapshot,
    run_simulation,
)
from .core.io_utils import (
    export_trajectories_to_csv,
    export_statistics_to_csv,
)

__version__ = "1.0.0"
__all__ = [
    # Config module
    "config",
    # Constants
    "MARTIAN_GRAVITY",
    "EARTH_GRAVITY",
    "DEBUG",
    "reset_sampling_stats",
    "get_sampling_stats",
    "print_sampling_stats",
    # Data classes
    "ConfigurationError",
    "ParticleState",
    "DustPhysicsParams",
    "BoundaryPolygon",
    "DustParticle",
    "DustEnsemble",
    "ParticleSnapshot",
    "DustStatistics",
    "TrajectoryHistory",
    # Geometry
    "regular_polygon_vertices",
    "build_boundary_polygon",
    "build_hex_panel",
    "polygon_contains",
    "sample_point_in_polygon",
    # Field
    "compute_field_at",
    # Kinematics
    "grain_mass",
    "adhesion_force",
    "visual_scale",
    # Sampling
    "sample_radius",
    "sample_charge",
    # Transport
    "respawn_particles",
    "advance_particles",
    # Simulation
    "DustSimulation",
    "initialize_simulation",
    "step_simulation",
    "snapshot",
    "run_simulation",
    # IO
    "export_trajectories_to_csv",
    "export_statistics_to_csv",
]
