"""
Data classes for the electrodynamic dust shield simulation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple

import math

import numpy as np

from .. import config
from .constants import MARTIAN_GRAVITY


class ConfigurationError(ValueError):
    """Raised when the simulation is configured with unusable values."""


class ParticleState(IntEnum):
    """Lifecycle state of a dust grain.

    ATTACHED -> FREE -> COLLECTED, and back to ATTACHED on respawn.
    """

    ATTACHED = 0
    FREE = 1
    COLLECTED = 2

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class DustPhysicsParams:
    """Physical constants, field drive and boundary settings for one panel.

    Defaults are taken from :mod:`dust_simulation.config`. All values are SI.

    Attributes
    ----------
    radius_min, radius_max : float
        Grain radius bounds (m). ``radius_min`` must be strictly positive.
    radius_skew_exponent : float
        Exponent of the radius distribution ``rmin + (rmax - rmin) * u**k``.
    density : float
        Grain material density (kg/m^3).
    charge_min, charge_max : float
        Uniform charge bounds (C).
    adhesion_per_area : float
        Adhesion stress (N/m^2); adhesion force is ``stress * pi * r^2``.
    gravity : float
        Gravitational acceleration magnitude (m/s^2).
    field_base, field_travel, field_lateral : float
        Static lift, travelling-wave and lateral field amplitudes (V/m).
    wave_frequency : float
        Drive frequency (Hz).
    phase_shift : float
        Phase lag between adjacent sectors (rad).
    segment_count : int
        Number of angular electrode sectors.
    directional_bias : tuple of float
        Constant field bias (V/m). Only the x and z components are used.
    trench_inner_scale, trench_outer_scale : float
        Polygon scales bounding the collector trench.
    escape_margin : float
        Escape boundary scale relative to ``trench_outer_scale``.
    collect_dwell_time : float
        Time (s) a collected grain waits in the trench before respawning.
    max_escape_height : float
        Height (m) above which a free grain is respawned.
    """

    radius_min: float = config.DUST_RADIUS_MIN
    radius_max: float = config.DUST_RADIUS_MAX
    radius_skew_exponent: float = config.RADIUS_SKEW_EXPONENT
    density: float = config.DUST_DENSITY
    charge_min: float = config.DUST_CHARGE_MIN
    charge_max: float = config.DUST_CHARGE_MAX
    adhesion_per_area: float = config.ADHESION_PER_AREA
    gravity: float = MARTIAN_GRAVITY

    field_base: float = config.FIELD_BASE
    field_travel: float = config.FIELD_TRAVEL
    field_lateral: float = config.FIELD_LATERAL
    wave_frequency: float = config.WAVE_FREQUENCY
    phase_shift: float = config.PHASE_SHIFT
    segment_count: int = config.ELECTRODE_SEGMENTS
    lift_edge_damping: float = config.LIFT_EDGE_DAMPING
    radial_kick_fraction: float = config.RADIAL_KICK_FRACTION
    radial_kick_phase: float = config.RADIAL_KICK_PHASE
    directional_bias: Tuple[float, float, float] = config.DIRECTIONAL_DRIFT

    drag_coeff: float = config.DRAG_COEFF
    restitution: float = config.RESTITUTION
    bounce_friction: float = config.BOUNCE_FRICTION

    surface_height: float = config.PANEL_SURFACE_Y
    base_thickness: float = config.BASE_THICKNESS
    cartridge_height: float = config.CARTRIDGE_HEIGHT
    trench_inner_scale: float = config.TRENCH_INNER_SCALE
    trench_outer_scale: float = config.TRENCH_OUTER_SCALE
    escape_margin: float = config.ESCAPE_MARGIN
    spawn_scale: float = config.SPAWN_SCALE
    spawn_velocity_jitter: float = config.SPAWN_VELOCITY_JITTER

    collect_dwell_time: float = config.COLLECT_DWELL_TIME
    max_escape_height: float = config.MAX_ESCAPE_HEIGHT
    sample_retry_cap: int = config.SAMPLE_RETRY_CAP

    @property
    def escape_scale(self) -> float:
        """Polygon scale beyond which a free grain has escaped."""
        return self.trench_outer_scale * self.escape_margin

    @property
    def collect_height(self) -> float:
        """Grains below this height inside the trench ring are collected."""
        return self.base_thickness + 2.0 * self.cartridge_height

    @property
    def collect_snap_height(self) -> float:
        """Trench mid-depth where collected grains rest."""
        return self.base_thickness + 0.5 * self.cartridge_height

    @property
    def bias_vector(self) -> np.ndarray:
        return np.asarray(self.directional_bias, dtype=float)

    def validate(self) -> "DustPhysicsParams":
        """Check the parameter set, raising :class:`ConfigurationError` on failure.

        Returns ``self`` so it can be chained.
        """
        errors = []

        if not self.radius_min > 0.0:
            errors.append(f"radius_min must be > 0, got {self.radius_min}")
        if self.radius_max < self.radius_min:
            errors.append("radius_max must be >= radius_min")
        if not self.radius_skew_exponent > 0.0:
            errors.append("radius_skew_exponent must be > 0")
        if not self.density > 0.0:
            errors.append("density must be > 0")
        if self.charge_max < self.charge_min:
            errors.append("charge_max must be >= charge_min")
        if self.adhesion_per_area < 0.0:
            errors.append("adhesion_per_area must be >= 0")
        if self.gravity < 0.0:
            errors.append("gravity is a magnitude and must be >= 0")
        if self.segment_count < 1:
            errors.append("segment_count must be >= 1")
        if not self.wave_frequency > 0.0:
            errors.append("wave_frequency must be > 0")
        if self.drag_coeff < 0.0:
            errors.append("drag_coeff must be >= 0")
        if not 0.0 <= self.restitution <= 1.0:
            errors.append("restitution must be within [0, 1]")
        if not 0.0 <= self.bounce_friction <= 1.0:
            errors.append("bounce_friction must be within [0, 1]")
        if len(self.directional_bias) != 3 or not all(math.isfinite(b) for b in self.directional_bias):
            errors.append("directional_bias must be three finite numbers")
        if not 0.0 < self.spawn_scale <= 1.0:
            errors.append("spawn_scale must be within (0, 1]")
        if not 1.0 <= self.trench_inner_scale < self.trench_outer_scale:
            errors.append("trench scales must satisfy 1 <= inner < outer")
        if not self.escape_margin > 1.0:
            errors.append("escape_margin must be > 1")
        if self.cartridge_height <= 0.0:
            errors.append("cartridge_height must be > 0")
        if self.collect_dwell_time < 0.0:
            errors.append("collect_dwell_time must be >= 0")
        if not self.max_escape_height > self.surface_height:
            errors.append("max_escape_height must be above the panel surface")
        if self.spawn_velocity_jitter < 0.0:
            errors.append("spawn_velocity_jitter must be >= 0")
        if self.sample_retry_cap < 1:
            errors.append("sample_retry_cap must be >= 1")

        if errors:
            raise ConfigurationError("Invalid dust physics parameters: " + "; ".join(errors))
        return self


@dataclass
class BoundaryPolygon:
    """Convex panel footprint in the horizontal (x, z) plane.

    ``vertices`` keeps insertion order, which is also the winding order.
    Nested regions (spawn area, trench, escape boundary) are this polygon
    scaled uniformly about ``centroid``.
    """

    vertices: np.ndarray  # (n, 2) as (x, z)
    centroid: np.ndarray  # (2,)
    circumradius: float  # largest centroid-vertex distance (m)
    apothem: float  # smallest centroid-edge distance (m)


@dataclass
class DustParticle:
    """Full state of one dust grain, detached from the ensemble arrays."""

    radius: float  # m
    mass: float  # kg
    charge: float  # C
    adhesion_force: float  # N
    position: np.ndarray  # (3,) m
    velocity: np.ndarray  # (3,) m/s
    state: ParticleState = ParticleState.ATTACHED
    collect_timer: float = 0.0  # s since entering COLLECTED
    generation: int = 0  # number of respawns of this slot


@dataclass
class DustEnsemble:
    """Physical state of every dust slot, stored as parallel arrays.

    Slot ``i`` is row ``i`` of every array. Slots are never added or removed;
    respawn overwrites a row in place.
    """

    position: np.ndarray  # (n, 3) m
    velocity: np.ndarray  # (n, 3) m/s
    radius: np.ndarray  # (n,) m
    mass: np.ndarray  # (n,) kg
    charge: np.ndarray  # (n,) C
    adhesion: np.ndarray  # (n,) N
    state: np.ndarray  # (n,) int8, ParticleState values
    collect_timer: np.ndarray  # (n,) s
    generation: np.ndarray  # (n,) respawn count

    @classmethod
    def empty(cls, n_particles: int) -> "DustEnsemble":
        return cls(
            position=np.zeros((n_particles, 3), dtype=float),
            velocity=np.zeros((n_particles, 3), dtype=float),
            radius=np.zeros(n_particles, dtype=float),
            mass=np.zeros(n_particles, dtype=float),
            charge=np.zeros(n_particles, dtype=float),
            adhesion=np.zeros(n_particles, dtype=float),
            state=np.full(n_particles, ParticleState.ATTACHED, dtype=np.int8),
            collect_timer=np.zeros(n_particles, dtype=float),
            generation=np.zeros(n_particles, dtype=np.int64),
        )

    def __len__(self) -> int:
        return self.radius.shape[0]

    def get_particle(self, index: int) -> DustParticle:
        """Return a copy of slot ``index`` as a :class:`DustParticle`."""
        return DustParticle(
            radius=float(self.radius[index]),
            mass=float(self.mass[index]),
            charge=float(self.charge[index]),
            adhesion_force=float(self.adhesion[index]),
            position=self.position[index].copy(),
            velocity=self.velocity[index].copy(),
            state=ParticleState(int(self.state[index])),
            collect_timer=float(self.collect_timer[index]),
            generation=int(self.generation[index]),
        )

    def set_particle(self, index: int, particle: DustParticle):
        """Overwrite slot ``index`` with the values of ``particle``."""
        self.radius[index] = particle.radius
        self.mass[index] = particle.mass
        self.charge[index] = particle.charge
        self.adhesion[index] = particle.adhesion_force
        self.position[index] = particle.position
        self.velocity[index] = particle.velocity
        self.state[index] = int(particle.state)
        self.collect_timer[index] = particle.collect_timer
        self.generation[index] = particle.generation


@dataclass(frozen=True)
class ParticleSnapshot:
    """Read-only view of one slot handed to the rendering layer."""

    index: int
    position: np.ndarray  # (3,) m
    velocity: np.ndarray  # (3,) m/s
    state: ParticleState
    visual_scale: float  # speed-based stretch, >= 1
    generation: int = 0


@dataclass
class DustStatistics:
    """Cumulative fate counters of a simulation run."""

    steps: int = 0
    simulated_time: float = 0.0  # s
    detached: int = 0
    collected: int = 0
    escaped: int = 0
    respawned: int = 0


@dataclass
class TrajectoryHistory:
    """Recorded particle states, one frame per recorded step.

    Attributes
    ----------
    times : np.ndarray, shape (n_frames,)
        Elapsed simulation time of each frame (s).
    positions, velocities : np.ndarray, shape (n_frames, n_particles, 3)
    states, generations : np.ndarray, shape (n_frames, n_particles)
    """

    times: np.ndarray
    positions: np.ndarray
    velocities: np.ndarray
    states: np.ndarray
    generations: np.ndarray
    statistics: Optional[DustStatistics] = field(default=None)

    @property
    def n_frames(self) -> int:
        return self.times.shape[0]

    @property
    def n_particles(self) -> int:
        return self.positions.shape[1]
