"""
Configuration management for the gravitational N-body simulator.

This module handles loading and parsing YAML configuration files.
Every field has a default equal to the built-in solar system setup, so an
empty or partial file is valid.
"""

from dataclasses import dataclass, field
from typing import Any, List
import math
import yaml
from pathlib import Path

from orrery import constants as const
from orrery.state import DisplayScale


@dataclass
class SimulationParameters:
    """
    Container for all simulation parameters.

    Units:
    - G: m³/(kg·s²)
    - year_duration: real seconds per simulated year
    - tick_interval: real milliseconds per tick
    - zoom: screen units per meter (applied before the /2 projection)
    - canvas_width, canvas_height: pixels
    """

    # Metadata
    simulation_name: str = "solar_system"

    # Physics
    G: float = const.G

    # Timing
    year_duration: float = const.YEAR_DURATION  # s
    tick_interval: float = const.TICK_INTERVAL_MS  # ms

    # Display
    zoom: float = const.ZOOM
    diameter_multiplier: float = const.DIAMETER_MULTIPLIER
    diameter_intercept: float = const.DIAMETER_INTERCEPT
    diameter_anti_zoom: float = const.DIAMETER_ANTI_ZOOM
    show_track: bool = False
    canvas_width: int = const.CANVAS_WIDTH
    canvas_height: int = const.CANVAS_HEIGHT

    # Scenario
    excluded_bodies: List[str] = field(default_factory=lambda: ['Moon'])

    # Diagnostics
    log_level: str = "INFO"

    @property
    def dt(self) -> float:
        """
        Simulated seconds per tick.

        Raises:
            ValueError: If year_duration or tick_interval is not positive
        """
        if self.year_duration <= 0 or self.tick_interval <= 0:
            raise ValueError(
                f"year_duration ({self.year_duration}) and tick_interval "
                f"({self.tick_interval}) must both be positive"
            )
        return const.SECONDS_PER_YEAR / 1000.0 * self.tick_interval / self.year_duration

    @property
    def tick_interval_seconds(self) -> float:
        """Real seconds between ticks."""
        return self.tick_interval / 1000.0

    @property
    def display_scale(self) -> DisplayScale:
        """Diameter to display radius mapping."""
        return DisplayScale(
            multiplier=self.diameter_multiplier,
            intercept=self.diameter_intercept,
            anti_zoom=self.diameter_anti_zoom,
        )

    def validate(self) -> list:
        """
        Perform sanity checks on configuration parameters.

        Returns:
            List of warning/error messages. Empty list if all checks pass.
        """
        warnings = []

        if not (self.G > 0 and math.isfinite(self.G)):
            warnings.append(f"ERROR: gravitational constant must be positive, got {self.G}")

        if self.year_duration <= 0:
            warnings.append(f"ERROR: year_duration must be positive, got {self.year_duration}")

        if self.tick_interval <= 0:
            warnings.append(f"ERROR: tick_interval must be positive, got {self.tick_interval}")

        if self.zoom <= 0:
            warnings.append(f"ERROR: zoom must be positive, got {self.zoom}")

        if self.diameter_anti_zoom <= 0:
            warnings.append(
                f"ERROR: diameter_anti_zoom must be positive, got {self.diameter_anti_zoom}"
            )

        if self.canvas_width <= 0 or self.canvas_height <= 0:
            warnings.append(
                f"ERROR: canvas size must be positive, got "
                f"{self.canvas_width}x{self.canvas_height}"
            )

        unknown = [name for name in self.excluded_bodies
                   if name not in const.SCENARIO_BODY_NAMES]
        if unknown:
            warnings.append(
                f"ERROR: excluded_bodies names unknown bodies: {', '.join(unknown)} "
                f"(known: {', '.join(const.SCENARIO_BODY_NAMES)})"
            )

        if self.diameter_multiplier < 0:
            warnings.append(
                "WARNING: negative diameter_multiplier draws larger bodies smaller"
            )

        # A day per tick already smears the inner planets' orbits
        if self.year_duration > 0 and self.tick_interval > 0 and self.dt > 86400.0:
            warnings.append(
                f"WARNING: timestep ({self.dt:.0f} s) exceeds one day. "
                f"Inner orbits will drift noticeably."
            )

        if self.show_track:
            warnings.append("INFO: show_track keeps every past position in memory")

        return warnings

    @classmethod
    def from_yaml(cls, filepath: str) -> 'SimulationParameters':
        """
        Load configuration from YAML file.

        Args:
            filepath: Path to YAML configuration file

        Returns:
            SimulationParameters object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        def to_float(value: Any) -> float:
            """Convert value to float, handling YAML quirks with scientific notation."""
            return float(value)

        def to_int(value: Any) -> int:
            """Convert value to int."""
            return int(value)

        def to_bool(value: Any) -> bool:
            """Convert value to bool."""
            if isinstance(value, str):
                return value.lower() in ('true', 'yes', '1')
            return bool(value)

        config_path = Path(filepath)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"{filepath}: top level must be a mapping")

        defaults = cls()
        physics = config.get('physics', {}) or {}
        timing = config.get('timing', {}) or {}
        display = config.get('display', {}) or {}
        scenario = config.get('scenario', {}) or {}
        diagnostics = config.get('diagnostics', {}) or {}

        try:
            excluded = scenario.get('excluded_bodies', defaults.excluded_bodies)
            if excluded is None:
                excluded = []
            if isinstance(excluded, str):
                raise ValueError("scenario.excluded_bodies must be a list of names")

            return cls(
                simulation_name=str(config.get('simulation_name', defaults.simulation_name)),
                G=to_float(physics.get('gravitational_constant', defaults.G)),
                year_duration=to_float(timing.get('year_duration_seconds', defaults.year_duration)),
                tick_interval=to_float(timing.get('tick_interval_ms', defaults.tick_interval)),
                zoom=to_float(display.get('zoom', defaults.zoom)),
                diameter_multiplier=to_float(
                    display.get('diameter_multiplier', defaults.diameter_multiplier)),
                diameter_intercept=to_float(
                    display.get('diameter_intercept', defaults.diameter_intercept)),
                diameter_anti_zoom=to_float(
                    display.get('diameter_anti_zoom', defaults.diameter_anti_zoom)),
                show_track=to_bool(display.get('show_track', defaults.show_track)),
                canvas_width=to_int(display.get('canvas_width', defaults.canvas_width)),
                canvas_height=to_int(display.get('canvas_height', defaults.canvas_height)),
                excluded_bodies=[str(name) for name in excluded],
                log_level=str(diagnostics.get('log_level', defaults.log_level)),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid configuration in {filepath}: {e}") from e

    def __repr__(self):
        """Human-readable representation."""
        if self.year_duration > 0 and self.tick_interval > 0:
            timestep = f"{self.dt:.1f} s ({self.dt / 3600.0:.2f} h)"
        else:
            timestep = "undefined"

        lines = [
            f"Simulation: {self.simulation_name}",
            f"G: {self.G:.5e} m^3 kg^-1 s^-2",
            f"Year duration: {self.year_duration:.1f} s per simulated year",
            f"Tick interval: {self.tick_interval:.1f} ms",
            f"Timestep: {timestep}",
            f"Zoom: {self.zoom:.2e}",
            f"Canvas: {self.canvas_width}x{self.canvas_height} px",
            f"Show track: {self.show_track}",
            f"Excluded bodies: {', '.join(self.excluded_bodies) or 'none'}",
        ]
        return "\n".join(lines)
