"""
Plotting subpackage for dust simulation visualization.

This subpackage provides visualization tools for:
- Panel snapshots (top and side view, coloured by grain state)
- State populations over a recorded run
- Recorded grain trajectories

Example usage:
    from dust_simulation.plotting import load_trajectory_data, plot_trajectories

    trajectories = load_trajectory_data('Data/dust_trajectories.csv')
    plot_trajectories(trajectories, max_trajectories=40)

    # Visualize the live population
    from dust_simulation.plotting import plot_panel_snapshot, print_statistics
    plot_panel_snapshot(simulation, save_path='Figures/dust_panel')
"""

from .results import (
    draw_panel_outline,
    plot_panel_snapshot,
    plot_state_populations,
    print_statistics,
)

from .trajectories import (
    load_trajectory_data,
    plot_trajectories,
    summarize_trajectories,
)

__all__ = [
    # Simulation results
    "draw_panel_outline",
    "plot_panel_snapshot",
    "plot_state_populations",
    "print_statistics",
    # Trajectory plotting
    "load_trajectory_data",
    "plot_trajectories",
    "summarize_trajectories",
]
