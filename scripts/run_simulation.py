#!/usr/bin/env python
"""
Electrodynamic Dust Shield Simulation - Main Runner Script

This script runs a headless dust shield simulation.

Usage:
    python run_simulation.py
    python run_simulation.py -n 500 --steps 1200
    python run_simulation.py --seed 3 --no-plot

Output files (Data/, Figures/) will be saved in the project directory by
default, or in the directory given with --output-dir.
"""

from pathlib import Path
import sys

# Make dust_simulation importable without installing the project
project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from dust_simulation.runner import run_full_simulation, main as runner_main


def main():
    """Script entry point"""
    if len(sys.argv) > 1:
        runner_main()
    else:
        run_full_simulation(output_dir=project_dir)


if __name__ == "__main__":
    main()
