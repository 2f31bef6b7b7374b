"""
Unit tests for orbit analysis helpers.
"""

import math

import pytest
import numpy as np

from orrery.analysis import separation, orbital_angle_history, angular_displacement, radius_history
from orrery.state import Body, SimulationState


class TestSeparation:

    def test_distance(self):
        state = SimulationState.from_bodies([
            Body('A', '#fff', 1.0, 1.0, 0.0, 0.0, 0.0, 0.0),
            Body('B', '#fff', 1.0, 1.0, 3.0, 4.0, 0.0, 0.0),
        ])
        assert separation(state, 0, 1) == pytest.approx(5.0)


class TestAngles:

    def test_quarter_turn(self):
        track = [(1.0, 0.0), (0.0, 1.0)]
        assert angular_displacement(track) == pytest.approx(math.pi / 2)

    def test_unwrapped_across_pi(self):
        """Full circle sampled finely sweeps 2π, not 0."""
        theta = np.linspace(0.0, 2.0 * math.pi, 100)
        track = np.column_stack([np.cos(theta), np.sin(theta)])

        angles = orbital_angle_history(track)

        assert np.all(np.diff(angles) > 0)
        assert angular_displacement(track) == pytest.approx(2.0 * math.pi)

    def test_clockwise_is_negative(self):
        track = [(0.0, 1.0), (1.0, 0.0)]
        assert angular_displacement(track) == pytest.approx(-math.pi / 2)

    def test_moving_center(self):
        centers = [(10.0, 10.0), (20.0, 10.0)]
        track = [(11.0, 10.0), (20.0, 11.0)]
        assert angular_displacement(track, centers) == pytest.approx(math.pi / 2)

    def test_single_point(self):
        assert angular_displacement([(1.0, 0.0)]) == 0.0


class TestRadius:

    def test_radius_history(self):
        track = [(3.0, 4.0), (6.0, 8.0)]
        np.testing.assert_allclose(radius_history(track), [5.0, 10.0])

    def test_radius_about_center(self):
        np.testing.assert_allclose(radius_history([(2.0, 1.0)], (1.0, 1.0)), [1.0])
