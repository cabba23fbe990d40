"""
Dust transport: per-step force integration and the grain state machine.

States and transitions, evaluated once per grain per step:

- ATTACHED -> FREE when the net lift ``q E_y - m g`` exceeds the adhesion
  force. The excess is applied as an upward impulse and the grain is
  integrated in the same step. Otherwise it is pinned to the surface.
- FREE: explicit Euler with linear drag and an inelastic surface bounce.
- FREE -> COLLECTED when it settles inside the trench ring.
- FREE -> respawn when it leaves the escape boundary or rises too high.
- COLLECTED -> respawn once it has dwelt in the trench long enough.

Grains never interact, so all of this is done with array masks over the
whole ensemble.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .constants import DEBUG
from .data_classes import (
    BoundaryPolygon,
    DustEnsemble,
    DustPhysicsParams,
    DustStatistics,
    ParticleState,
)
from .field import compute_field_at
from .geometry import polygon_contains
from .kinematics import adhesion_force, grain_mass, vertical_lift_force
from .sampling import (
    sample_charge,
    sample_radius,
    sample_spawn_position,
    sample_spawn_velocity,
)


def respawn_particles(
    ensemble: DustEnsemble,
    indices: Sequence[int],
    polygon: BoundaryPolygon,
    params: DustPhysicsParams,
    rng: np.random.Generator,
    fresh: bool = False,
):
    """Re-create the grains in ``indices`` in place.

    Radius, mass, charge and adhesion are redrawn, the grain is placed on
    the panel surface inside the spawn region and reset to ATTACHED with a
    zero collect timer. ``fresh`` marks the initial spawn, which does not
    count toward the slot's generation.
    """
    for i in np.atleast_1d(np.asarray(indices, dtype=int)):
        radius = sample_radius(params, rng)
        ensemble.radius[i] = radius
        ensemble.mass[i] = grain_mass(radius, params.density)
        ensemble.charge[i] = sample_charge(params, rng)
        ensemble.adhesion[i] = adhesion_force(radius, params.adhesion_per_area)
        ensemble.position[i] = sample_spawn_position(polygon, params, rng)
        ensemble.velocity[i] = sample_spawn_velocity(params, rng)
        ensemble.state[i] = ParticleState.ATTACHED
        ensemble.collect_timer[i] = 0.0
        if not fresh:
            ensemble.generation[i] += 1


def advance_particles(
    ensemble: DustEnsemble,
    dt: float,
    time: float,
    polygon: BoundaryPolygon,
    params: DustPhysicsParams,
    rng: np.random.Generator,
    statistics: Optional[DustStatistics] = None,
    indices: Optional[Sequence[int]] = None,
):
    """Advance grains by one time step.

    Parameters
    ----------
    ensemble : DustEnsemble
        Grain state, modified in place.
    dt : float
        Time step (s).
    time : float
        Simulation time used to evaluate the field (s).
    polygon : BoundaryPolygon
        Panel footprint; trench and escape regions are scaled copies.
    params : DustPhysicsParams
        Physical and boundary settings.
    rng : np.random.Generator
        Used only when a grain respawns.
    statistics : DustStatistics, optional
        Fate counters to update.
    indices : sequence of int, optional
        Restrict the step to these slots. Defaults to every slot.
    """
    n = len(ensemble)
    selected = np.ones(n, dtype=bool)
    if indices is not None:
        selected[:] = False
        selected[np.asarray(indices, dtype=int)] = True

    state = ensemble.state
    attached = selected & (state == ParticleState.ATTACHED)
    free = selected & (state == ParticleState.FREE)
    collected = selected & (state == ParticleState.COLLECTED)

    # 1. Collected grains wait in the trench, then respawn
    n_dwell_respawn = 0
    if np.any(collected):
        ensemble.collect_timer[collected] += dt
        due = np.flatnonzero(collected & (ensemble.collect_timer > params.collect_dwell_time))
        if due.size:
            respawn_particles(ensemble, due, polygon, params, rng)
            n_dwell_respawn = due.size

    active = np.flatnonzero(attached | free)
    if active.size == 0:
        if statistics is not None:
            statistics.respawned += n_dwell_respawn
        return

    pos = ensemble.position[active]
    vel = ensemble.velocity[active]
    mass = ensemble.mass[active]
    charge = ensemble.charge[active]
    adhesion = ensemble.adhesion[active]
    was_attached = attached[active]

    # 2. Field and net vertical force
    field = compute_field_at(pos, time, params, polygon)
    fy = vertical_lift_force(charge, field[:, 1], mass, params.gravity)

    # 3. Detachment or surface clamp
    detach = was_attached & (fy > adhesion)
    hold = was_attached & ~detach

    vel[detach, 1] += (fy[detach] - adhesion[detach]) / mass[detach] * dt
    vel[hold] = 0.0
    pos[hold, 1] = params.surface_height

    moving = ~hold

    # 4. Force integration (explicit Euler) with linear drag
    accel = charge[:, np.newaxis] * field / mass[:, np.newaxis]
    accel[:, 1] -= params.gravity
    vel[moving] += accel[moving] * dt
    vel[moving] *= 1.0 - params.drag_coeff * dt
    pos[moving] += vel[moving] * dt

    # 5. Inelastic bounce on the panel surface
    below = moving & (pos[:, 1] < params.surface_height)
    pos[below, 1] = params.surface_height
    vel[below, 1] *= -params.restitution
    vel[below, 0] *= params.bounce_friction
    vel[below, 2] *= params.bounce_friction

    # 6. Trench collection
    in_inner = polygon_contains(polygon, pos, params.trench_inner_scale)
    in_outer = polygon_contains(polygon, pos, params.trench_outer_scale)
    collect = moving & ~in_inner & in_outer & (pos[:, 1] < params.collect_height)
    pos[collect, 1] = params.collect_snap_height
    vel[collect] = 0.0

    # 7. Escape beyond the outer boundary or above the ceiling
    in_bounds = polygon_contains(polygon, pos, params.escape_scale)
    escape = moving & ~collect & (~in_bounds | (pos[:, 1] > params.max_escape_height))

    ensemble.position[active] = pos
    ensemble.velocity[active] = vel
    ensemble.state[active[moving]] = ParticleState.FREE
    ensemble.state[active[collect]] = ParticleState.COLLECTED
    ensemble.collect_timer[active[collect]] = 0.0

    escaped = active[escape]
    if escaped.size:
        respawn_particles(ensemble, escaped, polygon, params, rng)

    if DEBUG and (np.any(detach) or np.any(collect) or escaped.size):
        print(f"[debug] t={time:.4f}s detached={int(np.sum(detach))} "
              f"collected={int(np.sum(collect))} escaped={escaped.size} "
              f"dwell_respawn={n_dwell_respawn}")

    if statistics is not None:
        statistics.detached += int(np.sum(detach))
        statistics.collected += int(np.sum(collect))
        statistics.escaped += int(escaped.size)
        statistics.respawned += int(escaped.size) + n_dwell_respawn
