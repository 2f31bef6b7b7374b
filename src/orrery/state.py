"""
Simulation state management for the gravitational N-body simulator.

This module defines the Body record used to describe initial conditions and
the SimulationState class that stores all ACTIVE bodies in flat numpy arrays.
The arrays are what the integrator mutates every tick; Body records are only
used at setup time and when rebuilding a view of a single body.

Renderers never read the arrays directly. They receive a tuple of
BodySnapshot objects produced by SimulationState.snapshot().

All physics arrays use SI units:
- positions: meters (m)
- velocities: meters per second (m/s)
- masses: kilograms (kg)
- diameters: meters (m)
"""

import math
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from orrery import constants as const


class InvalidBodyError(ValueError):
    """Raised when a body is constructed with unusable physical values."""


@dataclass(frozen=True)
class DisplayScale:
    """
    Logarithmic mapping from physical diameter to display radius.

    radius = (log10(diameter) × multiplier + intercept) × anti_zoom

    The result is clamped to MIN_DISPLAY_RADIUS, so it is never zero or
    negative and never decreases as the diameter grows.
    """

    multiplier: float = const.DIAMETER_MULTIPLIER
    intercept: float = const.DIAMETER_INTERCEPT
    anti_zoom: float = const.DIAMETER_ANTI_ZOOM

    def radius(self, diameter: float) -> float:
        value = (math.log10(diameter) * self.multiplier + self.intercept) * self.anti_zoom
        return max(value, const.MIN_DISPLAY_RADIUS)


DEFAULT_DISPLAY_SCALE = DisplayScale()


@dataclass
class Body:
    """
    One celestial body with its initial conditions.

    Fields:
    - name: Display name
    - color: Display colour (any matplotlib colour string)
    - mass: Mass in kilograms
    - diameter: Physical diameter in meters
    - x, y: Position in meters
    - velocity_x, velocity_y: Velocity in meters/second
    - scale: Display mapping used to derive display_radius

    display_radius is computed once in __post_init__ and never changes.
    """

    name: str
    color: str
    mass: float
    diameter: float
    x: float
    y: float
    velocity_x: float
    velocity_y: float
    scale: DisplayScale = field(default=DEFAULT_DISPLAY_SCALE, repr=False)
    display_radius: float = field(init=False)

    def __post_init__(self):
        if not (self.mass > 0 and math.isfinite(self.mass)):
            raise InvalidBodyError(
                f"Body '{self.name}': mass must be positive and finite, got {self.mass}"
            )
        if not (self.diameter > 0 and math.isfinite(self.diameter)):
            raise InvalidBodyError(
                f"Body '{self.name}': diameter must be positive and finite, got {self.diameter}"
            )
        for attr in ('x', 'y', 'velocity_x', 'velocity_y'):
            value = getattr(self, attr)
            if not math.isfinite(value):
                raise InvalidBodyError(f"Body '{self.name}': {attr} must be finite, got {value}")

        self.display_radius = self.scale.radius(self.diameter)

    @classmethod
    def satellite_of(cls, parent: 'Body', name: str, color: str, mass: float,
                     diameter: float, offset_x: float, offset_y: float,
                     delta_vx: float, delta_vy: float,
                     scale: DisplayScale = DEFAULT_DISPLAY_SCALE) -> 'Body':
        """
        Create a body placed relative to an already constructed parent.

        Position is parent position + offset, velocity is parent velocity + delta.
        The returned body keeps no reference to the parent.
        """
        return cls(
            name=name,
            color=color,
            mass=mass,
            diameter=diameter,
            x=parent.x + offset_x,
            y=parent.y + offset_y,
            velocity_x=parent.velocity_x + delta_vx,
            velocity_y=parent.velocity_y + delta_vy,
            scale=scale,
        )


class TrackView(SequenceABC):
    """
    Read-only view of the first `length` points of an append-only trail.

    Taking a view costs O(1); points appended to the trail afterwards are
    not visible through it.
    """

    __slots__ = ('_points', '_length')

    def __init__(self, points: List[Tuple[float, float]], length: int = None):
        self._points = points
        self._length = len(points) if length is None else length

    def __len__(self):
        return self._length

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._points[i] for i in range(*index.indices(self._length)))
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("track index out of range")
        return self._points[index]

    def __iter__(self):
        for index in range(self._length):
            yield self._points[index]

    def __eq__(self, other):
        if isinstance(other, SequenceABC) and not isinstance(other, str):
            return len(self) == len(other) and all(a == b for a, b in zip(self, other))
        return NotImplemented

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self):
        return f"TrackView({list(self)!r})"


@dataclass(frozen=True)
class BodySnapshot:
    """Read-only view of one body at a tick boundary, handed to renderers."""

    name: str
    color: str
    x: float
    y: float
    display_radius: float
    history: Sequence[Tuple[float, float]] = ()


class SimulationState:
    """
    Flat, fixed-size collection of active bodies.

    Body count and identity are fixed at construction. Masses, diameters and
    display radii never change afterwards; only positions, velocities and
    histories are mutated by the integrator.
    """

    def __init__(self, n_total: int):
        """
        Initialize empty arrays for n_total bodies.

        Args:
            n_total: Number of active bodies
        """
        # Core physics arrays - used by integration
        self.positions = np.zeros((n_total, 2), dtype=np.float64)  # [m]
        self.velocities = np.zeros((n_total, 2), dtype=np.float64)  # [m/s]
        self.masses = np.zeros(n_total, dtype=np.float64)  # [kg]

        # Display metadata
        self.diameters = np.zeros(n_total, dtype=np.float64)  # [m]
        self.display_radii = np.zeros(n_total, dtype=np.float64)  # [m]
        self.names: List[str] = [''] * n_total
        self.colors: List[str] = [''] * n_total
        self.scales: List[DisplayScale] = [DEFAULT_DISPLAY_SCALE] * n_total

        # Trail history, one append-only list of (x, y) per body
        self.history: List[List[Tuple[float, float]]] = [[] for _ in range(n_total)]

        # Simulation metadata
        self.time = 0.0  # [s]
        self.timestep_count = 0

    @classmethod
    def from_bodies(cls, bodies: Sequence[Body]) -> 'SimulationState':
        """Copy a sequence of Body records into a new state, preserving order."""
        state = cls(n_total=len(bodies))
        for idx, body in enumerate(bodies):
            state.positions[idx] = (body.x, body.y)
            state.velocities[idx] = (body.velocity_x, body.velocity_y)
            state.masses[idx] = body.mass
            state.diameters[idx] = body.diameter
            state.display_radii[idx] = body.display_radius
            state.names[idx] = body.name
            state.colors[idx] = body.color
            state.scales[idx] = body.scale
        return state

    @property
    def n_total(self) -> int:
        """Number of bodies."""
        return len(self.positions)

    def index_of(self, name: str) -> int:
        """Index of the body with the given name."""
        try:
            return self.names.index(name)
        except ValueError:
            raise KeyError(f"No body named '{name}' in simulation") from None

    def body(self, idx: int) -> Body:
        """Rebuild a Body record from the current array values."""
        return Body(
            name=self.names[idx],
            color=self.colors[idx],
            mass=float(self.masses[idx]),
            diameter=float(self.diameters[idx]),
            x=float(self.positions[idx, 0]),
            y=float(self.positions[idx, 1]),
            velocity_x=float(self.velocities[idx, 0]),
            velocity_y=float(self.velocities[idx, 1]),
            scale=self.scales[idx],
        )

    def record_history(self):
        """Append every body's current position to its trail."""
        for idx in range(self.n_total):
            self.history[idx].append((float(self.positions[idx, 0]),
                                      float(self.positions[idx, 1])))

    def snapshot(self) -> Tuple[BodySnapshot, ...]:
        """Read-only per-body view of the current state, in body order."""
        return tuple(
            BodySnapshot(
                name=self.names[idx],
                color=self.colors[idx],
                x=float(self.positions[idx, 0]),
                y=float(self.positions[idx, 1]),
                display_radius=float(self.display_radii[idx]),
                history=TrackView(self.history[idx]),
            )
            for idx in range(self.n_total)
        )

    def __repr__(self) -> str:
        """String representation of simulation state."""
        days = self.time / 86400.0
        lines = [
            f"SimulationState(time={days:.2f} days, step={self.timestep_count})",
            f"  Bodies: {self.n_total}",
        ]
        for idx in range(self.n_total):
            x, y = self.positions[idx]
            lines.append(f"    {self.names[idx]}: x={x:.4e} m, y={y:.4e} m")
        return "\n".join(lines)
