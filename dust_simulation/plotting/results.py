"""
Simulation results visualization.

This module provides plots of the panel with its dust population and of the
state populations over a recorded run, plus a printed statistical summary.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as PolygonPatch

from .. import config
from ..core.data_classes import BoundaryPolygon, DustPhysicsParams, ParticleState, TrajectoryHistory
from ..core.geometry import scaled_vertices
from ..core.simulation import DustSimulation


def draw_panel_outline(ax, polygon: BoundaryPolygon, params: DustPhysicsParams):
    """Draw the panel edge, the trench ring and the escape boundary on ``ax`` (x, z axes)."""
    outlines = [
        (1.0, config.PANEL_EDGE_COLOR, '-', 'Panel edge'),
        (params.trench_inner_scale, config.TRENCH_COLOR, '--', 'Trench inner'),
        (params.trench_outer_scale, config.TRENCH_COLOR, '-', 'Trench outer'),
        (params.escape_scale, config.ESCAPE_COLOR, ':', 'Escape boundary'),
    ]
    for scale, color, style, label in outlines:
        patch = PolygonPatch(scaled_vertices(polygon, scale), closed=True, fill=False,
                             edgecolor=color, linestyle=style, linewidth=1.5, label=label)
        ax.add_patch(patch)

    extent = polygon.circumradius * params.escape_scale * 1.05
    cx, cz = polygon.centroid
    ax.set_xlim(cx - extent, cx + extent)
    ax.set_ylim(cz - extent, cz + extent)
    ax.set_aspect('equal')


def plot_panel_snapshot(
    simulation: DustSimulation,
    save_path: Optional[str] = None,
    show: bool = True,
):
    """Top and side view of the current dust population, coloured by state.

    Parameters
    ----------
    simulation : DustSimulation
        Simulation to draw.
    save_path : str, optional
        Base path for saving the figure (``_snapshot.png`` is appended).
    show : bool
        Whether to call ``plt.show()``.

    Returns
    -------
    matplotlib.figure.Figure or None
    """
    if simulation.n_particles == 0:
        print("[warning] No dust particles to visualize.")
        return None

    ens = simulation.ensemble
    fig, (ax_top, ax_side) = plt.subplots(1, 2, figsize=config.SNAPSHOT_FIGSIZE,
                                          gridspec_kw={'width_ratios': [1.4, 1]})

    draw_panel_outline(ax_top, simulation.polygon, simulation.params)
    for state in ParticleState:
        mask = ens.state == state
        if not np.any(mask):
            continue
        color = config.STATE_COLORS[state.label]
        ax_top.scatter(ens.position[mask, 0], ens.position[mask, 2], s=8, c=color,
                       alpha=0.8, label=f'{state.label} ({int(np.sum(mask))})')
        ax_side.scatter(ens.position[mask, 0], ens.position[mask, 1] * 1e3, s=8, c=color, alpha=0.8)

    ax_top.set_xlabel('x (m)')
    ax_top.set_ylabel('z (m)')
    ax_top.set_title('Panel Top View')
    ax_top.legend(loc='upper right', fontsize=8)
    ax_top.grid(True, alpha=0.3)

    ax_side.axhline(simulation.params.surface_height * 1e3, color=config.PANEL_EDGE_COLOR,
                    linestyle='-', linewidth=1, label='Panel surface')
    ax_side.axhline(simulation.params.collect_height * 1e3, color=config.TRENCH_COLOR,
                    linestyle='--', linewidth=1, label='Collection height')
    ax_side.set_xlabel('x (m)')
    ax_side.set_ylabel('Height (mm)')
    ax_side.set_title('Side View')
    ax_side.legend(fontsize=8)
    ax_side.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(f"{save_path}_snapshot.png", dpi=config.PLOT_DPI, bbox_inches='tight')
        print(f"[info] Saved panel snapshot to {save_path}_snapshot.png")

    if show:
        plt.show()
    return fig


def plot_state_populations(
    history: TrajectoryHistory,
    save_path: Optional[str] = None,
    show: bool = True,
):
    """Number of attached, free and collected grains over a recorded run."""
    if history is None or history.n_frames == 0:
        print("[warning] No trajectory frames to visualize.")
        return None

    fig, ax = plt.subplots(figsize=(10, 5))
    for state in ParticleState:
        counts = np.sum(history.states == state, axis=1)
        ax.plot(history.times, counts, color=config.STATE_COLORS[state.label],
                linewidth=2, label=state.label)

    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Grains')
    ax.set_title('Dust State Populations')
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(f"{save_path}_populations.png", dpi=config.PLOT_DPI, bbox_inches='tight')
        print(f"[info] Saved state populations to {save_path}_populations.png")

    if show:
        plt.show()
    return fig


def print_statistics(simulation: DustSimulation):
    """Print a summary of the grain population and the cumulative fate counters."""
    ens = simulation.ensemble
    stats = simulation.statistics
    n = simulation.n_particles

    print("\n" + "="*70)
    print("DUST SIMULATION STATISTICS")
    print("="*70)
    print(f"Grain slots: {n}")
    print(f"Steps run: {stats.steps}  (simulated {stats.simulated_time:.3f} s)")
    print(f"Simulation enabled: {simulation.enabled}")

    if n > 0:
        for label, count in simulation.state_counts().items():
            print(f"  - {label:<10}: {count} ({count / n * 100:.2f}%)")

        print("\nGrain properties:")
        print(f"  Radius: {np.mean(ens.radius)*1e6:.2f} ± {np.std(ens.radius)*1e6:.2f} µm "
              f"(min {np.min(ens.radius)*1e6:.2f}, max {np.max(ens.radius)*1e6:.2f})")
        print(f"  Charge: {np.mean(ens.charge):.3e} ± {np.std(ens.charge):.3e} C")
        print(f"  Mass: {np.mean(ens.mass):.3e} kg")
        print(f"  Adhesion: {np.mean(ens.adhesion):.3e} N")
        speeds = np.linalg.norm(ens.velocity, axis=1)
        print(f"  Speed: mean {np.mean(speeds):.4f} m/s, max {np.max(speeds):.4f} m/s")

    print("\nCumulative events:")
    print(f"  Detachments: {stats.detached}")
    print(f"  Collected in trench: {stats.collected}")
    print(f"  Escaped boundary: {stats.escaped}")
    print(f"  Respawns: {stats.respawned}")
    if stats.simulated_time > 0:
        print(f"  Collection rate: {stats.collected / stats.simulated_time:.2f} grains/s")
    print("="*70 + "\n")
