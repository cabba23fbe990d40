#!/usr/bin/env python
"""
Plot recorded dust trajectories from a previous run.

Usage:
    python plot_trajectories.py
    python plot_trajectories.py Data/dust_trajectories.csv --max 20
"""

from pathlib import Path
import argparse
import sys

project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from dust_simulation import config
from dust_simulation.plotting import load_trajectory_data, plot_trajectories, summarize_trajectories


def main():
    parser = argparse.ArgumentParser(description="Plot recorded dust trajectories")
    parser.add_argument("csv_file", nargs="?", type=Path,
                        default=project_dir / config.DATA_OUTPUT_DIR / config.TRAJECTORY_DATA_CSV,
                        help="Trajectory CSV written by the runner")
    parser.add_argument("--max", type=int, default=config.MAX_TRAJECTORIES_TO_PLOT,
                        help="Maximum number of grains to draw")
    parser.add_argument("--save", type=str, default=None,
                        help="Base path for the saved figure")
    args = parser.parse_args()

    if not args.csv_file.exists():
        print(f"[error] Trajectory file not found: {args.csv_file}")
        print("[info] Run scripts/run_simulation.py first.")
        sys.exit(1)

    trajectories = load_trajectory_data(args.csv_file)
    summary = summarize_trajectories(trajectories)
    print(f"[info] Loaded {summary['n_particles']} grains over {summary['n_frames']} frames "
          f"({summary['n_lifetimes']} lifetimes)")
    print(f"[info] Max height {summary['max_height_m']*1e3:.2f} mm, "
          f"max radial distance {summary['max_radial_distance_m']:.4f} m")

    plot_trajectories(trajectories, max_trajectories=args.max, save_path=args.save)


if __name__ == "__main__":
    main()
