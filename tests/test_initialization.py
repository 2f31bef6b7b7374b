"""
Unit tests for initialization functions.

Tests cover:
- Solar system scenario contents and order
- Moon placement relative to Earth
- Active body selection
- Two-body circular orbit setup
- Complete simulation initialization from parameters
"""

import math

import pytest
import numpy as np

from orrery.initialization import (
    solar_system_bodies,
    select_active,
    two_body_system,
    initialize_simulation,
    DEFAULT_EXCLUDED
)
from orrery.config import SimulationParameters
from orrery.state import DisplayScale
from orrery import constants as const


class TestSolarSystemScenario:
    """Tests for the named scenario."""

    def test_body_order(self):
        names = [body.name for body in solar_system_bodies()]
        assert names == ['Sun', 'Mercury', 'Venus', 'Earth', 'Moon', 'Mars',
                         'Jupiter', "Halley's Comet"]

    def test_names_match_known_bodies(self):
        """Config validation checks exclusions against the same names."""
        names = [body.name for body in solar_system_bodies()]
        assert names == list(const.SCENARIO_BODY_NAMES)

    def test_sun_at_rest_at_origin(self):
        sun = solar_system_bodies()[0]
        assert (sun.x, sun.y, sun.velocity_x, sun.velocity_y) == (0.0, 0.0, 0.0, 0.0)
        assert sun.mass == 1.98847e30
        assert sun.color == '#FFE900'

    def test_planets_start_on_x_axis(self):
        """Planets start at y=0 moving in +y."""
        bodies = {body.name: body for body in solar_system_bodies()}
        for name in ['Mercury', 'Venus', 'Earth', 'Mars', 'Jupiter']:
            body = bodies[name]
            assert body.x > 0
            assert body.y == 0.0
            assert body.velocity_x == 0.0
            assert body.velocity_y > 0

    def test_planets_ordered_by_distance(self):
        bodies = {body.name: body for body in solar_system_bodies()}
        distances = [bodies[n].x for n in ['Mercury', 'Venus', 'Earth', 'Mars', 'Jupiter']]
        assert distances == sorted(distances)

    def test_moon_relative_to_earth(self):
        bodies = {body.name: body for body in solar_system_bodies()}
        earth, moon = bodies['Earth'], bodies['Moon']

        assert moon.x == earth.x + 4.055e8
        assert moon.y == earth.y
        assert moon.velocity_x == earth.velocity_x
        assert moon.velocity_y == earth.velocity_y + 970.0

    def test_comet_initial_conditions(self):
        comet = solar_system_bodies()[-1]
        assert comet.name == "Halley's Comet"
        assert comet.x == -9.2633543328e10
        assert comet.y == 2.55365362125e11
        assert comet.velocity_x == 26151.38065026183
        assert comet.velocity_y == -16758.86041256348

    def test_small_bodies_get_minimum_radius(self):
        bodies = {body.name: body for body in solar_system_bodies()}
        assert bodies["Halley's Comet"].display_radius == const.MIN_DISPLAY_RADIUS
        assert bodies['Moon'].display_radius == const.MIN_DISPLAY_RADIUS
        assert bodies['Sun'].display_radius > bodies['Jupiter'].display_radius

    def test_scale_applied_to_every_body(self):
        scale = DisplayScale(multiplier=1.0, intercept=0.0, anti_zoom=1.0)
        for body in solar_system_bodies(scale):
            assert body.scale is scale
            assert body.display_radius == pytest.approx(max(math.log10(body.diameter), 1.0))


class TestSelectActive:
    """Tests for excluding bodies from the active list."""

    def test_moon_excluded_by_default(self):
        names = [body.name for body in select_active(solar_system_bodies())]
        assert 'Moon' not in names
        assert len(names) == 7
        assert DEFAULT_EXCLUDED == ('Moon',)

    def test_keeps_order(self):
        active = select_active(solar_system_bodies(), exclude=['Venus', 'Mars'])
        assert [b.name for b in active] == ['Sun', 'Mercury', 'Earth', 'Moon',
                                            'Jupiter', "Halley's Comet"]

    def test_exclude_nothing(self):
        assert len(select_active(solar_system_bodies(), exclude=[])) == 8

    def test_unknown_name_rejected(self):
        with pytest.raises(ValueError, match="Pluto"):
            select_active(solar_system_bodies(), exclude=['Pluto'])

    def test_excluded_body_does_not_change_others(self):
        """Dropping the Moon leaves Earth's initial conditions alone."""
        with_moon = {b.name: b for b in solar_system_bodies()}
        without_moon = {b.name: b for b in select_active(solar_system_bodies())}

        assert without_moon['Earth'] == with_moon['Earth']


class TestTwoBodySystem:
    """Tests for the circular orbit scenario."""

    def test_layout(self):
        star, satellite = two_body_system(1.0e30, 1.0e10, 1.0e11)

        assert (star.x, star.y) == (0.0, 0.0)
        assert (star.velocity_x, star.velocity_y) == (0.0, 0.0)
        assert (satellite.x, satellite.y) == (1.0e11, 0.0)
        assert satellite.velocity_x == 0.0

    def test_circular_velocity(self):
        _, satellite = two_body_system(1.0e30, 1.0e10, 1.0e11)
        expected = math.sqrt(const.G * 1.0e30 / 1.0e11)
        assert satellite.velocity_y == pytest.approx(expected)


class TestInitializeSimulation:
    """Tests for building the state from parameters."""

    def test_default_parameters(self):
        state = initialize_simulation(SimulationParameters())

        assert state.n_total == 7
        assert 'Moon' not in state.names
        assert state.names[0] == 'Sun'
        assert state.time == 0.0

    def test_include_moon(self):
        params = SimulationParameters(excluded_bodies=[])
        state = initialize_simulation(params)

        assert state.n_total == 8
        moon = state.index_of('Moon')
        earth = state.index_of('Earth')
        assert state.positions[moon, 0] - state.positions[earth, 0] == pytest.approx(4.055e8)

    def test_display_scale_from_params(self):
        params = SimulationParameters(diameter_anti_zoom=1.0)
        state = initialize_simulation(params)

        sun = state.index_of('Sun')
        expected = math.log10(1.392700e9) * 50.0 - 300.0
        assert state.display_radii[sun] == pytest.approx(expected)

    def test_all_finite(self):
        state = initialize_simulation(SimulationParameters())
        assert np.all(np.isfinite(state.positions))
        assert np.all(np.isfinite(state.velocities))
        assert np.all(state.masses > 0)
