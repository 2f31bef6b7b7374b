"""
Initialization functions for the gravitational N-body simulator.

This module builds the initial conditions: the named solar system scenario
(Sun, four planets, Jupiter, Halley's Comet and an optional Moon) and a
two-body circular orbit used for verification.

All values are SI (kg, m, m/s). The scenario values are real-world derived
and are kept as literal constants.
"""

from typing import Iterable, List, Sequence

from orrery import constants as const
from orrery.config import SimulationParameters
from orrery.physics import circular_orbit_velocity
from orrery.state import Body, DisplayScale, SimulationState, DEFAULT_DISPLAY_SCALE

# Bodies left out of the active list unless asked for
DEFAULT_EXCLUDED = ('Moon',)


def solar_system_bodies(scale: DisplayScale = DEFAULT_DISPLAY_SCALE) -> List[Body]:
    """
    Build the full solar system scenario in display order.

    Args:
        scale: Display mapping used for every body's display radius

    Returns:
        List of Body records: Sun, Mercury, Venus, Earth, Moon, Mars,
        Jupiter, Halley's Comet

    Notes:
        - Planets start on the +x axis moving in +y (counterclockwise)
        - The Moon is placed relative to Earth; afterwards it is an
          independent body
        - The comet starts on an eccentric trajectory that passes close to
          the Sun
    """
    sun = Body('Sun', '#FFE900', 1.98847e30, 1.392700e9, 0.0, 0.0, 0.0, 0.0, scale)
    mercury = Body('Mercury', '#ddbbcc', 3.285e23, 4.879e6, 6.9818e10, 0.0, 0.0, 38860.0, scale)
    venus = Body('Venus', '#3A8D2F', 4.867e24, 1.2104e7, 1.0756e11, 0.0, 0.0, 35020.0, scale)
    earth = Body('Earth', '#008AD8', 5.9722e24, 1.2742e7, 1.49e11, 0.0, 0.0, 29780.0, scale)
    moon = Body.satellite_of(
        earth, 'Moon', '#ffffff', 7.346e22, 1.7381e3,
        offset_x=4.055e8, offset_y=0.0,
        delta_vx=0.0, delta_vy=970.0,
        scale=scale,
    )
    mars = Body('Mars', '#aa0000', 6.39e23, 6.779e6, 2.493e11, 0.0, 0.0, 21970.0, scale)
    jupiter = Body('Jupiter', '#E2C0B8', 1.89813e27, 1.3982e8, 7.4186e11, 0.0, 0.0, 13070.0, scale)
    comet = Body(
        "Halley's Comet", '#EFCFFA', 2.2e14, 1.0e4,
        -9.2633543328e10, 2.55365362125e11,
        26151.38065026183, -16758.86041256348,
        scale,
    )

    return [sun, mercury, venus, earth, moon, mars, jupiter, comet]


def select_active(bodies: Sequence[Body], exclude: Iterable[str] = DEFAULT_EXCLUDED) -> List[Body]:
    """
    Drop bodies by name, keeping the order of the rest.

    Raises:
        ValueError: If a name in exclude does not match any body
    """
    excluded = set(exclude)
    known = {body.name for body in bodies}

    unknown = excluded - known
    if unknown:
        raise ValueError(f"Cannot exclude unknown bodies: {', '.join(sorted(unknown))}")

    return [body for body in bodies if body.name not in excluded]


def two_body_system(central_mass: float, satellite_mass: float, radius: float,
                    G: float = const.G) -> List[Body]:
    """
    Star at rest at the origin and a satellite on a circular orbit.

    The satellite starts at (radius, 0) with v_y = sqrt(G × M / r).
    """
    v_orbital = circular_orbit_velocity(central_mass, radius, G)

    star = Body('Star', '#FFE900', central_mass, 1.0e9, 0.0, 0.0, 0.0, 0.0)
    satellite = Body('Satellite', '#008AD8', satellite_mass, 1.0e4, radius, 0.0, 0.0, v_orbital)

    return [star, satellite]


def initialize_simulation(params: SimulationParameters) -> SimulationState:
    """
    Initialize the active solar system state from configuration.

    Args:
        params: SimulationParameters (display mapping and excluded bodies)

    Returns:
        SimulationState with every non-excluded body
    """
    bodies = solar_system_bodies(params.display_scale)
    active = select_active(bodies, params.excluded_bodies)

    return SimulationState.from_bodies(active)
