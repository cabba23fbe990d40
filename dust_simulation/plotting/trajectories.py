"""
Dust trajectory visualization module.

Loads trajectories exported by
:func:`~dust_simulation.core.io_utils.export_trajectories_to_csv` and plots
them over the panel outline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .. import config
from ..core.data_classes import BoundaryPolygon, DustPhysicsParams
from ..core.geometry import build_hex_panel
from .results import draw_panel_outline


# Type alias for trajectory data
TrajectoryDict = Dict[int, pd.DataFrame]


def load_trajectory_data(csv_file: Union[str, Path]) -> TrajectoryDict:
    """Load dust trajectory data from CSV file.

    Parameters
    ----------
    csv_file : str or Path
        Path to the dust trajectory CSV file.

    Returns
    -------
    dict
        Mapping ``particle_id`` -> DataFrame of that slot's frames, sorted by
        ``frame_id``.

    Example
    -------
    >>> trajectories = load_trajectory_data('Data/dust_trajectories.csv')
    >>> print(f"Loaded {len(trajectories)} trajectories")
    """
    df = pd.read_csv(csv_file)
    df.columns = [c.strip() for c in df.columns]
    return {
        int(pid): group.sort_values('frame_id').reset_index(drop=True)
        for pid, group in df.groupby('particle_id')
    }


def _split_lifetimes(track: pd.DataFrame):
    """Yield one DataFrame per lifetime (generation) of a slot."""
    for _, segment in track.groupby('generation', sort=True):
        yield segment


def plot_trajectories(
    trajectories: TrajectoryDict,
    polygon: Optional[BoundaryPolygon] = None,
    params: Optional[DustPhysicsParams] = None,
    max_trajectories: int = config.MAX_TRAJECTORIES_TO_PLOT,
    save_path: Optional[str] = None,
    show: bool = True,
):
    """Plot trajectories in top view and height over time.

    Each respawn starts a new line segment so teleports back to the spawn
    region are not drawn.

    Parameters
    ----------
    trajectories : dict
        Output of :func:`load_trajectory_data`.
    polygon, params : optional
        Panel geometry for the outline; defaults to the hex panel.
    max_trajectories : int
        Plot at most this many particle slots.
    save_path : str, optional
        Base path for saving the figure (``_trajectories.png`` is appended).
    show : bool
        Whether to call ``plt.show()``.
    """
    if not trajectories:
        print("[warning] No trajectories to visualize.")
        return None

    polygon = polygon if polygon is not None else build_hex_panel()
    params = params if params is not None else DustPhysicsParams()

    fig, (ax_top, ax_height) = plt.subplots(1, 2, figsize=config.TRAJECTORY_FIGSIZE)
    draw_panel_outline(ax_top, polygon, params)

    ids = sorted(trajectories)[:max_trajectories]
    cmap = plt.get_cmap('viridis')
    for k, pid in enumerate(ids):
        color = cmap(k / max(len(ids) - 1, 1))
        for segment in _split_lifetimes(trajectories[pid]):
            ax_top.plot(segment['position_x_m'], segment['position_z_m'],
                        color=color, linewidth=0.8, alpha=0.7)
            ax_height.plot(segment['time_s'], segment['position_y_m'] * 1e3,
                           color=color, linewidth=0.8, alpha=0.7)

        collected = trajectories[pid][trajectories[pid]['state'] == 'collected']
        if not collected.empty:
            ax_top.scatter(collected['position_x_m'], collected['position_z_m'],
                           color=config.STATE_COLORS['collected'], s=6, zorder=3)

    ax_top.set_xlabel('x (m)')
    ax_top.set_ylabel('z (m)')
    ax_top.set_title(f'Dust Trajectories (Top View, {len(ids)} grains)')
    ax_top.legend(loc='upper right', fontsize=8)
    ax_top.grid(True, alpha=0.3)

    ax_height.axhline(params.surface_height * 1e3, color=config.PANEL_EDGE_COLOR, linewidth=1)
    ax_height.set_xlabel('Time (s)')
    ax_height.set_ylabel('Height (mm)')
    ax_height.set_title('Grain Height')
    ax_height.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(f"{save_path}_trajectories.png", dpi=config.PLOT_DPI, bbox_inches='tight')
        print(f"[info] Saved trajectory plot to {save_path}_trajectories.png")

    if show:
        plt.show()
    return fig


def summarize_trajectories(
    trajectories: TrajectoryDict,
    polygon: Optional[BoundaryPolygon] = None,
) -> Dict[str, float]:
    """Aggregate numbers over loaded trajectories.

    Parameters
    ----------
    trajectories : dict
        Per-slot DataFrames from :func:`load_trajectory_data`.
    polygon : BoundaryPolygon, optional
        Panel the run used. Defaults to the hex panel.

    Returns
    -------
    dict
        ``n_particles``, ``n_frames``, ``n_lifetimes``, ``max_height_m`` and
        ``max_radial_distance_m`` (from the panel centroid in the x-z plane).
    """
    if not trajectories:
        return {'n_particles': 0, 'n_frames': 0, 'n_lifetimes': 0,
                'max_height_m': 0.0, 'max_radial_distance_m': 0.0}

    if polygon is None:
        polygon = build_hex_panel()
    cx, cz = polygon.centroid

    frames = pd.concat(trajectories.values(), ignore_index=True)
    radial = np.hypot(frames['position_x_m'] - cx, frames['position_z_m'] - cz)
    return {
        'n_particles': len(trajectories),
        'n_frames': int(frames['frame_id'].nunique()),
        'n_lifetimes': int(sum(t['generation'].nunique() for t in trajectories.values())),
        'max_height_m': float(frames['position_y_m'].max()),
        'max_radial_distance_m': float(radial.max()),
    }
