"""
Fixed-rate scheduling loop.

The caller owns the loop: each iteration advances the simulation by one
tick, renders the new snapshot, then sleeps for whatever is left of the tick
interval. A tick always finishes before the next one starts.
"""

import time
from typing import Callable, Optional


def run_fixed_rate(simulation, renderer, tick_interval: float,
                   max_ticks: Optional[int] = None,
                   should_stop: Optional[Callable[[], bool]] = None,
                   sleep: Callable[[float], None] = time.sleep,
                   clock: Callable[[], float] = time.monotonic) -> int:
    """
    Advance, render, sleep until stopped.

    Args:
        simulation: Object with advance() and snapshot()
        renderer: Object with render(snapshot)
        tick_interval: Real seconds per tick (> 0)
        max_ticks: Stop after this many ticks (None runs until should_stop)
        should_stop: Predicate checked before every tick
        sleep: Sleep function, injectable for tests
        clock: Monotonic clock, injectable for tests

    Returns:
        Number of ticks executed

    Notes:
        - The initial state is rendered once before the first tick
        - A tick that overruns the interval is followed immediately by the next
    """
    if tick_interval <= 0:
        raise ValueError(f"tick_interval must be positive, got {tick_interval}")
    if max_ticks is not None and max_ticks < 0:
        raise ValueError(f"max_ticks must be non-negative, got {max_ticks}")

    renderer.render(simulation.snapshot())

    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        if should_stop is not None and should_stop():
            break

        started = clock()

        simulation.advance()
        renderer.render(simulation.snapshot())
        ticks += 1

        remaining = tick_interval - (clock() - started)
        if remaining > 0:
            sleep(remaining)

    return ticks
