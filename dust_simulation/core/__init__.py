"""
Dust simulation core modules

This subpackage holds the physics of the simulation:
- constants: physical constants and debug flag
- data_classes: data structures (DustPhysicsParams, BoundaryPolygon, DustEnsemble, ...)
- geometry: polygon containment and spawn-point sampling
- field: travelling-wave electric field model
- kinematics: derived grain quantities
- sampling: grain property sampling
- transport: per-step integration and state machine
- simulation: simulation driver
- io_utils: export of recorded runs
"""

# Constants
from .constants import (
    MARTIAN_GRAVITY,
    EARTH_GRAVITY,
    DEBUG,
    reset_sampling_stats,
    get_sampling_stats,
    print_sampling_stats,
)

# Data classes
from .data_classes import (
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

# Geometry
from .geometry import (
    regular_polygon_vertices,
    build_boundary_polygon,
    build_hex_panel,
    scaled_vertices,
    polygon_contains,
    horizontal_distance,
    sample_point_in_polygon,
)

# Field
from .field import (
    sector_index,
    wave_phase,
    compute_field_at,
)

# Kinematics
from .kinematics import (
    grain_mass,
    adhesion_force,
    vertical_lift_force,
    visual_scale,
)

# Sampling
from .sampling import (
    sample_radius,
    sample_charge,
    sample_spawn_position,
    sample_spawn_velocity,
)

# Transport
from .transport import (
    respawn_particles,
    advance_particles,
)

# Simulation
from .simulation import (
    DustSimulation,
    initialize_simulation,
    step_simulation,
    snapshot,
    run_simulation,
)

# IO
from .io_utils import (
    export_trajectories_to_csv,
    export_statistics_to_csv,
    load_statistics_footer,
)

__all__ = [
    # Constants
    'MARTIAN_GRAVITY',
    'EARTH_GRAVITY',
    'DEBUG',
    'reset_sampling_stats',
    'get_sampling_stats',
    'print_sampling_stats',
    # Data classes
    'ConfigurationError',
    'ParticleState',
    'DustPhysicsParams',
    'BoundaryPolygon',
    'DustParticle',
    'DustEnsemble',
    'ParticleSnapshot',
    'DustStatistics',
    'TrajectoryHistory',
    # Geometry
    'regular_polygon_vertices',
    'build_boundary_polygon',
    'build_hex_panel',
    'scaled_vertices',
    'polygon_contains',
    'horizontal_distance',
    'sample_point_in_polygon',
    # Field
    'sector_index',
    'wave_phase',
    'compute_field_at',
    # Kinematics
    'grain_mass',
    'adhesion_force',
    'vertical_lift_force',
    'visual_scale',
    # Sampling
    'sample_radius',
    'sample_charge',
    'sample_spawn_position',
    'sample_spawn_velocity',
    # Transport
    'respawn_particles',
    'advance_particles',
    # Simulation
    'DustSimulation',
    'initialize_simulation',
    'step_simulation',
    'snapshot',
    'run_simulation',
    # IO
    'export_trajectories_to_csv',
    'export_statistics_to_csv',
    'load_statistics_footer',
]
