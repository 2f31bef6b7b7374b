"""
Time evolution engine for the gravitational N-body simulator.

The Simulation class owns one SimulationState and advances it one fixed
timestep at a time. It is the only writer of the state; renderers read
immutable snapshots.

INTEGRATION SCHEME:
Semi-implicit Euler with a fixed dt. All pairwise kicks use the positions
from the start of the tick, then every body drifts with its new velocity.
When trail recording is on, each body's position is appended to its history
before the drift.
"""

import math

from tqdm import tqdm

from orrery import constants as const
from orrery.config import SimulationParameters
from orrery.initialization import initialize_simulation
from orrery.physics import step_semi_implicit_euler
from orrery.state import SimulationState


class Simulation:
    """
    Controller owning the simulation state.

    Args:
        state: SimulationState to evolve (modified in place)
        dt: Fixed timestep [s]
        G: Gravitational constant [m³/(kg·s²)]
        show_track: Record position history every tick
    """

    def __init__(self, state: SimulationState, dt: float, G: float = const.G,
                 show_track: bool = False):
        if not (dt > 0 and math.isfinite(dt)):
            raise ValueError(f"timestep dt must be positive and finite, got {dt}")
        if not (G > 0 and math.isfinite(G)):
            raise ValueError(f"gravitational constant must be positive and finite, got {G}")

        self.state = state
        self.dt = float(dt)
        self.G = float(G)
        self.show_track = show_track

    @classmethod
    def from_params(cls, params: SimulationParameters) -> 'Simulation':
        """Build the configured solar system simulation."""
        state = initialize_simulation(params)
        return cls(state, params.dt, G=params.G, show_track=params.show_track)

    @property
    def time(self) -> float:
        """Simulated time [s]."""
        return self.state.time

    @property
    def tick_count(self) -> int:
        """Ticks advanced so far."""
        return self.state.timestep_count

    def advance(self):
        """Advance every body by exactly one timestep."""
        state = self.state

        if self.show_track:
            state.record_history()

        step_semi_implicit_euler(state.positions, state.velocities, state.masses, self.G, self.dt)

        state.time += self.dt
        state.timestep_count += 1

    def snapshot(self):
        """Read-only per-body view for renderers."""
        return self.state.snapshot()


def evolve_system(simulation: Simulation, n_steps: int, show_progress: bool = True) -> dict:
    """
    Advance the simulation a fixed number of ticks without rendering.

    Args:
        simulation: Simulation to advance (modified in place)
        n_steps: Number of ticks
        show_progress: Whether to show progress bar (tqdm)

    Returns:
        Dictionary with simulation statistics:
        - final_time: Final simulation time [s]
        - final_timestep: Final timestep number
    """
    if n_steps < 0:
        raise ValueError(f"n_steps must be non-negative, got {n_steps}")

    if show_progress:
        pbar = tqdm(total=n_steps, desc="Evolving system", unit="ticks")

    for _ in range(n_steps):
        simulation.advance()

        if show_progress:
            pbar.update(1)

    if show_progress:
        pbar.close()

    return {
        'final_time': simulation.time,
        'final_timestep': simulation.tick_count
    }
