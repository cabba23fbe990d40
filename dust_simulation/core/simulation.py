"""
High-level simulation driver.

:class:`DustSimulation` owns the grain ensemble and advances it once per
frame. The rendering layer only reads :meth:`DustSimulation.snapshot`; it keeps
its own per-slot render handles keyed by ``ParticleSnapshot.index``.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from .. import config
from .constants import DEBUG
from .data_classes import (
    BoundaryPolygon,
    ConfigurationError,
    DustEnsemble,
    DustPhysicsParams,
    DustStatistics,
    ParticleSnapshot,
    ParticleState,
    TrajectoryHistory,
)
from .geometry import build_boundary_polygon, build_hex_panel
from .kinematics import visual_scale
from .transport import advance_particles, respawn_particles


class DustSimulation:
    """Driver for a fixed-size population of dust grains on one panel.

    Parameters
    ----------
    polygon : BoundaryPolygon, optional
        Panel footprint. Defaults to the flat-top hex panel.
    params : DustPhysicsParams, optional
        Physical constants; validated on construction.
    n_particles : int, optional
        Number of grain slots. Defaults to ``config.NUM_DUST_PARTICLES``.
    seed : int, optional
        Seed for the grain sampling generator.
    rng : np.random.Generator, optional
        Explicit generator; takes precedence over ``seed``.
    """

    def __init__(
        self,
        polygon: Optional[BoundaryPolygon] = None,
        params: Optional[DustPhysicsParams] = None,
        n_particles: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.polygon = polygon if polygon is not None else build_hex_panel()
        self.params = (params if params is not None else DustPhysicsParams()).validate()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.statistics = DustStatistics()
        self._enabled = True
        self.ensemble = DustEnsemble.empty(0)
        self.initialize(config.NUM_DUST_PARTICLES if n_particles is None else n_particles)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, count: int):
        """Create ``count`` freshly spawned grains, replacing any existing ones."""
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count < 0:
            raise ConfigurationError(f"Particle count must be a non-negative integer, got {count!r}")

        self.ensemble = DustEnsemble.empty(int(count))
        respawn_particles(self.ensemble, np.arange(count), self.polygon, self.params, self.rng, fresh=True)
        self.statistics = DustStatistics()

        if DEBUG and count:
            print(f"[debug] Spawned {count} grains; radius range "
                  f"{self.ensemble.radius.min():.2e}-{self.ensemble.radius.max():.2e} m")

    @property
    def n_particles(self) -> int:
        return len(self.ensemble)

    # ------------------------------------------------------------------
    # Enable toggle
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        """When False, :meth:`step` leaves every grain untouched."""
        return self._enabled

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False

    def toggle(self) -> bool:
        self._enabled = not self._enabled
        return self._enabled

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self, dt: float, elapsed_time: float):
        """Advance every grain by exactly one step.

        Parameters
        ----------
        dt : float
            Frame time step (s), finite and non-negative.
        elapsed_time : float
            Simulation clock used for the travelling-wave phase (s).
        """
        if not math.isfinite(dt) or dt < 0.0:
            raise ValueError(f"dt must be finite and non-negative, got {dt}")
        if not math.isfinite(elapsed_time):
            raise ValueError(f"elapsed_time must be finite, got {elapsed_time}")
        if not self._enabled:
            return

        advance_particles(
            self.ensemble,
            dt,
            elapsed_time,
            self.polygon,
            self.params,
            self.rng,
            statistics=self.statistics,
        )
        self.statistics.steps += 1
        self.statistics.simulated_time += dt

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def snapshot(self) -> List[ParticleSnapshot]:
        """Per-slot state for the rendering layer, ordered by slot index."""
        ens = self.ensemble
        scales = visual_scale(ens.velocity) if len(ens) else np.zeros(0)
        return [
            ParticleSnapshot(
                index=i,
                position=ens.position[i].copy(),
                velocity=ens.velocity[i].copy(),
                state=ParticleState(int(ens.state[i])),
                visual_scale=float(scales[i]),
                generation=int(ens.generation[i]),
            )
            for i in range(len(ens))
        ]

    particles = snapshot

    def state_counts(self) -> Dict[str, int]:
        """Number of grains currently in each state, keyed by state label."""
        return {
            s.label: int(np.sum(self.ensemble.state == s))
            for s in ParticleState
        }


# ----------------------------------------------------------------------
# Handle-style API for rendering hosts
# ----------------------------------------------------------------------

def initialize_simulation(
    particle_count: int = config.NUM_DUST_PARTICLES,
    boundary_polygon=None,
    params: Optional[DustPhysicsParams] = None,
    seed: Optional[int] = None,
) -> DustSimulation:
    """Build a simulation handle.

    ``boundary_polygon`` may be a :class:`BoundaryPolygon` or a raw sequence
    of (x, z) vertices. Raises :class:`ConfigurationError` on bad input.
    """
    if boundary_polygon is not None and not isinstance(boundary_polygon, BoundaryPolygon):
        boundary_polygon = build_boundary_polygon(boundary_polygon)
    return DustSimulation(
        polygon=boundary_polygon,
        params=params,
        n_particles=particle_count,
        seed=seed,
    )


def step_simulation(handle: DustSimulation, dt: float, elapsed_time: float):
    """Advance ``handle`` by one frame."""
    handle.step(dt, elapsed_time)


def snapshot(handle: DustSimulation) -> List[ParticleSnapshot]:
    """Read-only per-slot state of ``handle``."""
    return handle.snapshot()


# ----------------------------------------------------------------------
# Headless runs
# ----------------------------------------------------------------------

def run_simulation(
    n_steps: int = config.DEFAULT_N_STEPS,
    dt: float = config.DEFAULT_TIME_STEP,
    n_particles: int = config.NUM_DUST_PARTICLES,
    polygon: Optional[BoundaryPolygon] = None,
    params: Optional[DustPhysicsParams] = None,
    seed: Optional[int] = None,
    record_every: int = 1,
    show_progress: bool = True,
    simulation: Optional[DustSimulation] = None,
) -> Tuple[DustSimulation, TrajectoryHistory]:
    """Run a fixed number of steps and record the grain states.

    Parameters
    ----------
    n_steps : int
        Number of steps to run.
    dt : float
        Fixed time step (s).
    record_every : int
        Record one frame every ``record_every`` steps. The initial state is
        always recorded.
    simulation : DustSimulation, optional
        Continue an existing simulation instead of creating one.

    Returns
    -------
    simulation : DustSimulation
        The driver after the run.
    history : TrajectoryHistory
        Recorded frames plus the final statistics.
    """
    if n_steps < 0:
        raise ConfigurationError(f"n_steps must be >= 0, got {n_steps}")
    if record_every < 1:
        raise ConfigurationError(f"record_every must be >= 1, got {record_every}")

    if simulation is None:
        simulation = DustSimulation(polygon=polygon, params=params, n_particles=n_particles, seed=seed)

    ens = simulation.ensemble
    elapsed = simulation.statistics.simulated_time

    times: List[float] = [elapsed]
    positions = [ens.position.copy()]
    velocities = [ens.velocity.copy()]
    states = [ens.state.copy()]
    generations = [ens.generation.copy()]

    steps = range(1, n_steps + 1)
    if show_progress:
        steps = tqdm(steps, desc="Simulating Dust", unit="step")

    for k in steps:
        elapsed += dt
        simulation.step(dt, elapsed)
        if k % record_every == 0:
            times.append(elapsed)
            positions.append(ens.position.copy())
            velocities.append(ens.velocity.copy())
            states.append(ens.state.copy())
            generations.append(ens.generation.copy())

    history = TrajectoryHistory(
        times=np.asarray(times, dtype=float),
        positions=np.stack(positions),
        velocities=np.stack(velocities),
        states=np.stack(states),
        generations=np.stack(generations),
        statistics=simulation.statistics,
    )

    stats = simulation.statistics
    counts = simulation.state_counts()
    print(f"[debug] Dust fate statistics after {stats.steps} steps ({stats.simulated_time:.3f} s):")
    print(f"  - Detachments: {stats.detached}")
    print(f"  - Collected in trench: {stats.collected}")
    print(f"  - Escaped boundary: {stats.escaped}")
    print(f"  - Respawns: {stats.respawned}")
    print(f"  - Now attached/free/collected: "
          f"{counts['attached']}/{counts['free']}/{counts['collected']}")

    return simulation, history
