"""
Dust Shield Simulation Runner Module

This module provides the main simulation runner function that can be called
from scripts or imported directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from . import config
from .core.constants import EARTH_GRAVITY, print_sampling_stats
from .core.data_classes import DustPhysicsParams, TrajectoryHistory
from .core.geometry import build_hex_panel
from .core.io_utils import export_statistics_to_csv, export_trajectories_to_csv
from .core.simulation import DustSimulation, run_simulation
from .plotting import (
    load_trajectory_data,
    plot_panel_snapshot,
    plot_state_populations,
    plot_trajectories,
    print_statistics,
)


def run_full_simulation(
    output_dir: Optional[Path] = None,
    n_particles: Optional[int] = None,
    n_steps: Optional[int] = None,
    dt: Optional[float] = None,
    seed: Optional[int] = None,
    save_results: bool = True,
    generate_plots: bool = True,
    show_plots: bool = True,
) -> tuple[DustSimulation, TrajectoryHistory]:
    """Run the complete dust shield simulation.

    This is the main entry point for headless runs. It handles:
    1. Building the hex panel and the physics parameters
    2. Running the fixed-step simulation
    3. Exporting trajectories and statistics
    4. Generating visualization plots

    Parameters
    ----------
    output_dir : Path, optional
        Directory for output files (Data/, Figures/). If None, uses current working directory.
    n_particles : int, optional
        Number of dust grains. If None, uses config default.
    n_steps : int, optional
        Number of steps. If None, uses config default.
    dt : float, optional
        Time step in seconds. If None, uses config default.
    seed : int, optional
        Seed for grain sampling.
    save_results : bool
        Whether to save results to CSV files.
    generate_plots : bool
        Whether to generate visualization plots.
    show_plots : bool
        Whether to open plot windows.

    Returns
    -------
    simulation : DustSimulation
    history : TrajectoryHistory
    """
    output_dir = Path.cwd() if output_dir is None else Path(output_dir)
    n_particles = config.NUM_DUST_PARTICLES if n_particles is None else n_particles
    n_steps = config.DEFAULT_N_STEPS if n_steps is None else n_steps
    dt = config.DEFAULT_TIME_STEP if dt is None else dt

    polygon = build_hex_panel()
    params = DustPhysicsParams()

    print("\n" + "="*70)
    print("PANEL CONFIGURATION")
    print("="*70)
    print(f"Panel: hexagon, circumradius {polygon.circumradius:.4f} m, apothem {polygon.apothem:.4f} m")
    print(f"Surface height: {params.surface_height*1e3:.2f} mm")
    print(f"Trench ring: scale {params.trench_inner_scale:.2f} to {params.trench_outer_scale:.2f}")
    print(f"Escape boundary: scale {params.escape_scale:.3f}, ceiling {params.max_escape_height:.2f} m")
    print(f"Drive: {params.segment_count} sectors, {params.wave_frequency:.1f} Hz, "
          f"phase shift {params.phase_shift:.4f} rad")
    print(f"Gravity: {params.gravity:.2f} m/s^2 ({params.gravity / EARTH_GRAVITY:.3f} g)")
    print("="*70 + "\n")

    print(f"[info] Starting simulation with {n_particles} grains, {n_steps} steps of {dt:.4f} s...")

    simulation, history = run_simulation(
        n_steps=n_steps,
        dt=dt,
        n_particles=n_particles,
        polygon=polygon,
        params=params,
        seed=seed,
    )

    print_statistics(simulation)
    print_sampling_stats()

    trajectory_filename = output_dir / config.DATA_OUTPUT_DIR / config.TRAJECTORY_DATA_CSV
    if save_results:
        export_trajectories_to_csv(history, filename=str(trajectory_filename))
        statistics_filename = output_dir / config.DATA_OUTPUT_DIR / config.STATISTICS_CSV
        export_statistics_to_csv(history, filename=str(statistics_filename))

    if generate_plots:
        print("[info] Generating visualizations...")
        figures_dir = output_dir / config.FIGURES_OUTPUT_DIR
        figures_dir.mkdir(parents=True, exist_ok=True)
        save_base = str(figures_dir / config.SNAPSHOT_FIGURE_BASE)
        plot_panel_snapshot(simulation, save_path=save_base, show=show_plots)
        plot_state_populations(history, save_path=save_base, show=show_plots)
        if save_results and trajectory_filename.exists():
            trajectories = load_trajectory_data(trajectory_filename)
            plot_trajectories(
                trajectories,
                polygon=polygon,
                params=params,
                save_path=str(figures_dir / config.TRAJECTORY_FIGURE_BASE),
                show=show_plots,
            )
        print("[info] Visualization complete!")

    return simulation, history


def main(argv=None):
    """Command-line entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Run electrodynamic dust shield simulation")
    parser.add_argument("-n", "--particles", type=int, default=None,
                        help="Number of dust grains to simulate")
    parser.add_argument("--steps", type=int, default=None,
                        help="Number of time steps")
    parser.add_argument("--dt", type=float, default=None,
                        help="Time step in seconds")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for grain sampling")
    parser.add_argument("--no-save", action="store_true",
                        help="Don't save results to CSV")
    parser.add_argument("--no-plot", action="store_true",
                        help="Don't generate visualization plots")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Output directory for results and figures")

    args = parser.parse_args(argv)

    run_full_simulation(
        output_dir=args.output_dir,
        n_particles=args.particles,
        n_steps=args.steps,
        dt=args.dt,
        seed=args.seed,
        save_results=not args.no_save,
        generate_plots=not args.no_plot,
    )


if __name__ == "__main__":
    main()
