"""
Main simulation runner script.

Usage:
    python scripts/run_simulation.py [configs/solar_system.yaml] [--ticks N]

This script:
1. Loads configuration from YAML file (built-in defaults if omitted)
2. Initializes the solar system state
3. Runs the simulation headless with a progress bar, or in real time with
   a fixed-rate render loop (--realtime)
4. Optionally saves the last frame and a trajectory plot
"""

import sys
import argparse
import time
from pathlib import Path

# Add src to path so we can import orrery package
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from orrery.config import SimulationParameters
from orrery.evolution import Simulation, evolve_system
from orrery.scheduler import run_fixed_rate
from orrery.visualization import CanvasRenderer, plot_trajectories


def main():
    parser = argparse.ArgumentParser(
        description='Run the solar system gravity simulation'
    )
    parser.add_argument(
        'config',
        type=str,
        nargs='?',
        default=None,
        help='Path to YAML configuration file (default: built-in values)'
    )
    parser.add_argument(
        '--ticks',
        type=int,
        default=None,
        help='Number of ticks to run (default: one simulated year, '
             'or until Ctrl+C with --realtime)'
    )
    parser.add_argument(
        '--realtime',
        action='store_true',
        help='Render every tick at the configured tick interval'
    )
    parser.add_argument(
        '--frames-dir',
        type=str,
        default=None,
        help='Write every rendered frame as PNG into this directory'
    )
    parser.add_argument(
        '--show-track',
        action='store_true',
        help='Record and draw position history'
    )
    parser.add_argument(
        '--include-moon',
        action='store_true',
        help='Add the Moon to the active bodies'
    )
    parser.add_argument(
        '--frame',
        type=str,
        default=None,
        help='Save the final frame as PNG'
    )
    parser.add_argument(
        '--trajectories',
        type=str,
        default=None,
        help='Save a trajectory plot as PNG (implies --show-track)'
    )

    args = parser.parse_args()

    # Load configuration
    if args.config:
        print(f"Loading configuration from {args.config}...")
        params = SimulationParameters.from_yaml(args.config)
    else:
        params = SimulationParameters()

    if args.show_track or args.trajectories:
        params.show_track = True
    if args.include_moon:
        params.excluded_bodies = [name for name in params.excluded_bodies if name != 'Moon']

    problems = params.validate()
    errors = [p for p in problems if p.startswith("ERROR")]
    for problem in problems:
        print(f"  {problem}")
    if errors:
        print("Configuration has ERRORS, aborting.")
        sys.exit(1)

    # Print configuration summary
    print("=" * 70)
    print(params)
    print("=" * 70)
    print()

    simulation = Simulation.from_params(params)
    print(f"Active bodies: {', '.join(simulation.state.names)}")

    renderer = None
    if args.realtime or args.frame or args.frames_dir:
        renderer = CanvasRenderer(
            width=params.canvas_width,
            height=params.canvas_height,
            zoom=params.zoom,
            show_track=params.show_track,
            frames_dir=args.frames_dir,
        )

    start_time = time.time()

    if args.realtime:
        # Without --ticks the loop runs until interrupted
        if args.ticks is None:
            print("Running in real time (Ctrl+C to stop)...")
        else:
            print(f"Running {args.ticks} ticks in real time (Ctrl+C to stop)...")
        if args.frames_dir:
            print(f"Writing frames to {args.frames_dir}")
        try:
            run_fixed_rate(simulation, renderer, params.tick_interval_seconds,
                           max_ticks=args.ticks)
        except KeyboardInterrupt:
            print("\nStopped.")
        print(f"Rendered {renderer.frame_count} frames")
    else:
        if args.ticks is not None:
            n_ticks = args.ticks
        else:
            n_ticks = int(round(params.year_duration * 1000.0 / params.tick_interval))
        if args.frames_dir:
            print("Note: --frames-dir only applies with --realtime")
        evolve_system(simulation, n_ticks, show_progress=True)

    elapsed_time = time.time() - start_time

    print()
    print("=" * 70)
    print(f"{simulation.tick_count} ticks in {elapsed_time:.1f} seconds")
    print(simulation.state)
    print("=" * 70)

    if args.frame:
        renderer.render(simulation.snapshot())
        renderer.save_frame(args.frame)
        print(f"  [OK] {args.frame}")

    if args.trajectories:
        plot_trajectories(simulation.snapshot(), args.trajectories)
        print(f"  [OK] {args.trajectories}")

    print()
    print("Done!")


if __name__ == '__main__':
    main()
