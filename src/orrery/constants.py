"""
Physical constants and display defaults used throughout the simulation.

SI UNITS SYSTEM:
- Distance: meters (m)
- Velocity: meters per second (m/s)
- Mass: kilograms (kg)
- Time: seconds (s)
"""

# Gravitational constant [m³/(kg·s²)]
G = 6.67408e-11

# Length of a Julian year [s]
SECONDS_PER_YEAR = 365.25 * 24 * 60 * 60

# Real seconds that one simulated year takes on screen
YEAR_DURATION = 30.0  # s

# Real time between two ticks of the scheduler
TICK_INTERVAL_MS = 10.0  # ms

# Display mapping (screen = (size + coordinate * zoom) / 2)
ZOOM = 2.0e-9
DIAMETER_MULTIPLIER = 50.0
DIAMETER_INTERCEPT = -300.0
DIAMETER_ANTI_ZOOM = 2.0e7

# Smallest display radius a body can get [m before zoom]
MIN_DISPLAY_RADIUS = 1.0

# Canvas defaults [px]
CANVAS_WIDTH = 1280
CANVAS_HEIGHT = 800
BACKGROUND_COLOR = '#000000'
TRACK_COLOR = '#555555'

# Names of the bodies in the built-in solar system scenario, in display order
SCENARIO_BODY_NAMES = ('Sun', 'Mercury', 'Venus', 'Earth', 'Moon', 'Mars',
                       'Jupiter', "Halley's Comet")
