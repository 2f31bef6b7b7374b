"""
Physics functions for the gravitational N-body simulator.

All per-tick kernels are JIT-compiled with Numba. They must stay
Numba-compatible (NumPy arrays and scalars, no Python objects).

Kernels compile with error_model='numpy': a zero distance between two bodies
produces inf/NaN instead of raising, and those values propagate into the
velocities and positions of the affected bodies. Nothing here guards against
that case.
"""

import math

import numpy as np
from numba import jit

from orrery import constants as const


@jit(nopython=True, error_model='numpy')
def force_and_distance(x0, y0, x1, y1, mass0, mass1, G):
    """
    Scalar gravitational force between two bodies and their distance.

    F = G × m0 × m1 / d²

    Args:
        x0, y0: Position of body 0 [m]
        x1, y1: Position of body 1 [m]
        mass0, mass1: Masses [kg]
        G: Gravitational constant [m³/(kg·s²)]

    Returns:
        (force, distance) in newtons and meters
    """
    distance_squared = (x1 - x0) ** 2 + (y1 - y0) ** 2
    distance = np.sqrt(distance_squared)
    force = (G * mass0 * mass1) / distance_squared

    return force, distance


@jit(nopython=True, error_model='numpy')
def velocity_delta(force, mass, distance, distance_x, distance_y, dt):
    """
    Velocity change of one body from one signed pair force.

    The caller passes -F for the body the displacement points away from and
    +F for the other one, so the two deltas of a pair are equal and opposite
    in momentum.

    Returns:
        (dvx, dvy) [m/s]
    """
    acceleration = force / mass  # [m/s²]

    acceleration_x = -acceleration * distance_x / distance
    acceleration_y = -acceleration * distance_y / distance

    return acceleration_x * dt, acceleration_y * dt


@jit(nopython=True, error_model='numpy')
def pair_velocity_deltas(positions, masses, i, j, G, dt):
    """
    Velocity deltas applied to bodies i and j by their mutual attraction.

    Args:
        positions: Body positions [m] (shape: (N, 2))
        masses: Body masses [kg] (shape: (N,))
        i, j: Indices of the pair
        G: Gravitational constant
        dt: Timestep [s]

    Returns:
        (dvx_i, dvy_i, dvx_j, dvy_j) [m/s]
    """
    force, distance = force_and_distance(
        positions[i, 0], positions[i, 1],
        positions[j, 0], positions[j, 1],
        masses[i], masses[j], G
    )

    distance_x = positions[j, 0] - positions[i, 0]
    distance_y = positions[j, 1] - positions[i, 1]

    dvx_i, dvy_i = velocity_delta(-force, masses[i], distance, distance_x, distance_y, dt)
    dvx_j, dvy_j = velocity_delta(force, masses[j], distance, distance_x, distance_y, dt)

    return dvx_i, dvy_i, dvx_j, dvy_j


@jit(nopython=True, error_model='numpy')
def update_velocities(positions, velocities, masses, G, dt):
    """
    Apply all pairwise gravitational kicks for one tick.

    Every unordered pair (i < j) interacts, in index order, with no cutoff.
    Positions are only read here, so every pair sees the positions from the
    start of the tick.

    Notes:
        - velocities is modified IN PLACE
        - O(N²) direct summation
    """
    n_total = len(positions)

    for i in range(n_total):
        for j in range(i + 1, n_total):
            dvx_i, dvy_i, dvx_j, dvy_j = pair_velocity_deltas(positions, masses, i, j, G, dt)

            velocities[i, 0] += dvx_i
            velocities[i, 1] += dvy_i
            velocities[j, 0] += dvx_j
            velocities[j, 1] += dvy_j


@jit(nopython=True)
def update_positions(positions, velocities, dt):
    """Drift every body: x(t + dt) = x(t) + v(t + dt) × dt (in place)."""
    n_total = len(positions)

    for i in range(n_total):
        positions[i, 0] += velocities[i, 0] * dt
        positions[i, 1] += velocities[i, 1] * dt


@jit(nopython=True, error_model='numpy')
def step_semi_implicit_euler(positions, velocities, masses, G, dt):
    """
    Advance all bodies by one fixed timestep.

    Semi-implicit (symplectic) Euler:
    1. KICK: v(t + dt) = v(t) + a(x(t)) × dt, for all pairs
    2. DRIFT: x(t + dt) = x(t) + v(t + dt) × dt

    Args:
        positions: Body positions [m] (shape: (N, 2))
        velocities: Body velocities [m/s] (shape: (N, 2))
        masses: Body masses [kg] (shape: (N,))
        G: Gravitational constant
        dt: Timestep [s]

    Notes:
        - Arrays are modified IN PLACE
        - No softening, no adaptive substeps
    """
    update_velocities(positions, velocities, masses, G, dt)
    update_positions(positions, velocities, dt)


def circular_orbit_velocity(central_mass: float, orbital_radius: float,
                            G: float = const.G) -> float:
    """
    Speed needed for a circular orbit around a much heavier body.

    G × M / r = v² / r  →  v = sqrt(G × M / r)

    Returns:
        Orbital speed in m/s (0.0 for a non-positive radius)
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(G * central_mass / orbital_radius)


def orbital_period(central_mass: float, orbital_radius: float,
                   G: float = const.G) -> float:
    """Period of a circular orbit [s]: T = 2π r / v."""
    v = circular_orbit_velocity(central_mass, orbital_radius, G)
    if v == 0.0:
        return 0.0

    return 2.0 * math.pi * orbital_radius / v
