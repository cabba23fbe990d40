"""
Configuration settings for the electrodynamic dust shield simulation.

This module contains all configurable default values. Users can modify these
values to customize the simulation without changing the core code; at run time
they are collected into a :class:`~dust_simulation.core.data_classes.DustPhysicsParams`
instance, which is what the integrator actually reads.
"""

from __future__ import annotations

import math

# =============================================================================
# Panel Geometry (hexagonal footprint, metres)
# =============================================================================

# Point-to-point width of the hex panel
HEX_POINT_WIDTH = 0.44

# Circumradius (centre to vertex)
HEX_RADIUS = HEX_POINT_WIDTH / 2

# Flat-top orientation: first vertex at 30 degrees
HEX_ROTATION_RAD = math.pi / 6

# Panel stack, bottom to top
BASE_THICKNESS = 0.004  # carbon fibre / anodized aluminium
SUBSTRATE_THICKNESS = 0.0016  # fused silica / borosilicate
PANEL_THICKNESS = 0.0025  # electrode mesh encapsulation

# Height of the active surface the dust rests on
PANEL_SURFACE_Y = BASE_THICKNESS / 2 + SUBSTRATE_THICKNESS + PANEL_THICKNESS / 2

# Collector trench (ring between inner and outer scale of the hex)
TRENCH_INNER_SCALE = 1.02
TRENCH_OUTER_SCALE = 1.12
CARTRIDGE_HEIGHT = 0.012

# Escape boundary is slightly larger than the trench
ESCAPE_MARGIN = 1.05

# =============================================================================
# Dust Grains
# =============================================================================

NUM_DUST_PARTICLES = 260

DUST_RADIUS_MIN = 8e-6  # m
DUST_RADIUS_MAX = 38e-6  # m
RADIUS_SKEW_EXPONENT = 1.8  # >1 favours small grains

DUST_DENSITY = 3100.0  # kg/m^3 (basaltic regolith simulant)

DUST_CHARGE_MIN = 2e-15  # C
DUST_CHARGE_MAX = 9e-14  # C

# Reaches ~1e-7 N at 30 um
ADHESION_PER_AREA = 50.0  # N/m^2

# Spawn region (fraction of the hex) and horizontal velocity jitter (m/s)
SPAWN_SCALE = 0.88
SPAWN_VELOCITY_JITTER = 0.01

# =============================================================================
# Electric Field (traveling wave drive)
# =============================================================================

ELECTRODE_SEGMENTS = 6

FIELD_BASE = 1.2e5  # V/m static lift component
FIELD_TRAVEL = 6.5e4  # V/m travelling wave component
FIELD_LATERAL = 3.1e4  # V/m lateral push along the lanes

WAVE_FREQUENCY = 42.0  # Hz, scaled for visual legibility
PHASE_SHIFT = 2 * math.pi / 3  # three-phase drive between adjacent sectors

# Lift weakens toward the edge by this fraction of r_norm
LIFT_EDGE_DAMPING = 0.35

# Radial pulse, as a fraction of FIELD_LATERAL, leading the wave by RADIAL_KICK_PHASE
RADIAL_KICK_FRACTION = 0.25
RADIAL_KICK_PHASE = math.pi / 4

# Bias dust toward a collector edge (V/m, only x/z are used)
DIRECTIONAL_DRIFT = (0.15, 0.0, -0.08)

# =============================================================================
# Integrator
# =============================================================================

DRAG_COEFF = 0.45  # 1/s

# Inelastic bounce on the panel surface
RESTITUTION = 0.22
BOUNCE_FRICTION = 0.92

# Seconds a collected grain stays in the trench before respawning
COLLECT_DWELL_TIME = 1.2

# Grains above this height (m) are considered lost
MAX_ESCAPE_HEIGHT = 2.5

# Rejection sampling gives up after this many draws and returns the centroid
SAMPLE_RETRY_CAP = 1000

# =============================================================================
# Headless Runs
# =============================================================================

DEFAULT_TIME_STEP = 1.0 / 60.0  # s, one display frame
DEFAULT_N_STEPS = 600

# Output directories (user working directory)
DATA_OUTPUT_DIR = "Data"
FIGURES_OUTPUT_DIR = "Figures"

# Output file names
TRAJECTORY_DATA_CSV = "dust_trajectories.csv"
STATISTICS_CSV = "dust_statistics.csv"
SNAPSHOT_FIGURE_BASE = "dust_panel"
TRAJECTORY_FIGURE_BASE = "dust"

# =============================================================================
# Visualization Settings
# =============================================================================

# Speed-based stretch of the rendered grain
VISUAL_STRETCH_GAIN = 12.0
VISUAL_STRETCH_MAX = 3.8

MAX_TRAJECTORIES_TO_PLOT = 60

PLOT_DPI = 300

SNAPSHOT_FIGSIZE = (15, 7)
TRAJECTORY_FIGSIZE = (16, 7)

PANEL_EDGE_COLOR = "dimgray"
TRENCH_COLOR = "sienna"
ESCAPE_COLOR = "lightcoral"
STATE_COLORS = {
    "attached": "goldenrod",
    "free": "steelblue",
    "collected": "seagreen",
}
