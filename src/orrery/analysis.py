"""
Orbit analysis helpers.

Small numpy functions used to check orbital behaviour from a simulation
state or a recorded trail.
"""

import numpy as np


def separation(state, i: int, j: int) -> float:
    """Distance between bodies i and j [m]."""
    return float(np.linalg.norm(state.positions[j] - state.positions[i]))


def orbital_angle_history(track, center=(0.0, 0.0)) -> np.ndarray:
    """
    Unwrapped polar angle of each trail point around a center.

    Args:
        track: Sequence of (x, y) positions [m]
        center: (x, y) of the orbited point, or a sequence of centers with
            the same length as track

    Returns:
        Angles in radians (shape: (len(track),)), continuous across ±π
    """
    points = np.asarray(track, dtype=np.float64).reshape(-1, 2)
    centers = np.broadcast_to(np.asarray(center, dtype=np.float64), points.shape)

    offsets = points - centers
    angles = np.arctan2(offsets[:, 1], offsets[:, 0])

    return np.unwrap(angles)


def angular_displacement(track, center=(0.0, 0.0)) -> float:
    """Total swept angle from the first to the last trail point [rad]."""
    angles = orbital_angle_history(track, center)
    if len(angles) < 2:
        return 0.0

    return float(angles[-1] - angles[0])


def radius_history(track, center=(0.0, 0.0)) -> np.ndarray:
    """Distance of each trail point from a center [m]."""
    points = np.asarray(track, dtype=np.float64).reshape(-1, 2)
    centers = np.broadcast_to(np.asarray(center, dtype=np.float64), points.shape)

    return np.sqrt(np.sum((points - centers) ** 2, axis=1))
