"""
Data export utilities for recorded dust runs.
"""

from __future__ import annotations

import csv
from dataclasses import asdict
from pathlib import Path

import numpy as np

from .data_classes import DustStatistics, ParticleState, TrajectoryHistory


TRAJECTORY_HEADERS = [
    'particle_id',
    'generation',
    'frame_id',
    'time_s',
    'state',
    'position_x_m',
    'position_y_m',
    'position_z_m',
    'velocity_x_m_s',
    'velocity_y_m_s',
    'velocity_z_m_s',
]


def export_trajectories_to_csv(history: TrajectoryHistory, filename: str = "dust_trajectories.csv"):
    """Export recorded grain trajectories to a CSV file.

    One row per grain per recorded frame, grouped by particle slot.

    Parameters
    ----------
    history : TrajectoryHistory
        Frames recorded by :func:`~dust_simulation.core.simulation.run_simulation`.
    filename : str
        Output CSV filename.
    """
    if history is None or history.n_frames == 0 or history.n_particles == 0:
        print("[warning] No trajectory frames to export.")
        return

    output_path = Path(filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    labels = {int(s): s.label for s in ParticleState}

    with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(TRAJECTORY_HEADERS)

        for particle_id in range(history.n_particles):
            for frame_id in range(history.n_frames):
                pos = history.positions[frame_id, particle_id]
                vel = history.velocities[frame_id, particle_id]
                writer.writerow([
                    particle_id,
                    int(history.generations[frame_id, particle_id]),
                    frame_id,
                    float(history.times[frame_id]),
                    labels[int(history.states[frame_id, particle_id])],
                    pos[0],
                    pos[1],
                    pos[2],
                    vel[0],
                    vel[1],
                    vel[2],
                ])

    print(f"[info] Dust trajectories exported to {filename}")
    print(f"[info] Total particles: {history.n_particles}")
    print(f"[info] Total frames: {history.n_frames}")


def export_statistics_to_csv(history: TrajectoryHistory, filename: str = "dust_statistics.csv"):
    """Export per-frame state populations and the final fate counters.

    The file holds one row per frame with the number of attached, free and
    collected grains; the cumulative counters are appended as
    ``# key=value`` comment lines when ``history.statistics`` is set.
    """
    if history is None or history.n_frames == 0:
        print("[warning] No trajectory frames to export.")
        return

    output_path = Path(filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(['frame_id', 'time_s'] + [f'n_{s.label}' for s in ParticleState])

        for frame_id in range(history.n_frames):
            frame_states = history.states[frame_id]
            writer.writerow(
                [frame_id, float(history.times[frame_id])]
                + [int(np.sum(frame_states == s)) for s in ParticleState]
            )

        if history.statistics is not None:
            for key, value in asdict(history.statistics).items():
                csvfile.write(f"# {key}={value}\n")

    print(f"[info] Dust statistics exported to {filename}")


def load_statistics_footer(filename: str) -> DustStatistics:
    """Read the ``# key=value`` fate counters written by :func:`export_statistics_to_csv`."""
    values = {}
    with open(filename, 'r', encoding='utf-8') as f:
        for line in f:
            if not line.startswith('# '):
                continue
            key, _, raw = line[2:].strip().partition('=')
            values[key] = raw

    return DustStatistics(
        steps=int(values.get('steps', 0)),
        simulated_time=float(values.get('simulated_time', 0.0)),
        detached=int(values.get('detached', 0)),
        collected=int(values.get('collected', 0)),
        escaped=int(values.get('escaped', 0)),
        respawned=int(values.get('respawned', 0)),
    )
