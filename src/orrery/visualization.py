"""
Rendering functions for the gravitational N-body simulator.

This module draws simulation snapshots:
- CanvasRenderer: per-tick frame of filled disks (and optional trails) on an
  offscreen canvas, projected with screen = (size + coordinate × zoom) / 2
- plot_trajectories: static PNG of every body's recorded trail

Renderers only consume BodySnapshot tuples; they never touch the
simulation arrays.
"""

from pathlib import Path
from typing import Sequence

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend for saving files
import matplotlib.pyplot as plt
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from orrery import constants as const
from orrery.state import BodySnapshot

# Astronomical unit, only used to label trajectory plots
AU = 1.495978707e11  # m


class RenderSurfaceError(RuntimeError):
    """Raised when the drawing surface cannot be acquired."""


class CanvasRenderer:
    """
    Draws bodies as filled disks on a width × height pixel canvas.

    Screen y grows downward, as on a browser canvas.

    Every render() rasterizes the frame into the Agg buffer. With frames_dir
    set, each frame is also written there as frame_NNNNNN.png.
    """

    def __init__(self, width: int = const.CANVAS_WIDTH, height: int = const.CANVAS_HEIGHT,
                 zoom: float = const.ZOOM, show_track: bool = False,
                 background: str = const.BACKGROUND_COLOR, dpi: int = 100,
                 frames_dir: str = None):
        if width <= 0 or height <= 0:
            raise RenderSurfaceError(f"Canvas size must be positive, got {width}x{height}")
        if dpi <= 0:
            raise RenderSurfaceError(f"Canvas dpi must be positive, got {dpi}")

        self.width = int(width)
        self.height = int(height)
        self.zoom = zoom
        self.show_track = show_track
        self.background = background
        self.frames_dir = Path(frames_dir) if frames_dir is not None else None
        self.frame_count = 0

        if self.frames_dir is not None:
            self.frames_dir.mkdir(parents=True, exist_ok=True)

        try:
            self.figure = Figure(figsize=(self.width / dpi, self.height / dpi), dpi=dpi)
            self.canvas = FigureCanvasAgg(self.figure)
            self.ax = self.figure.add_axes([0.0, 0.0, 1.0, 1.0])
        except (ValueError, RuntimeError, MemoryError) as e:
            raise RenderSurfaceError(f"Could not create {width}x{height} canvas: {e}") from e

        self.clear()

    def clear(self):
        """Erase everything drawn so far."""
        self.ax.clear()
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_aspect('equal')
        self.ax.set_facecolor(self.background)
        self.ax.set_axis_off()
        self.figure.set_facecolor(self.background)

    def draw_circle(self, x: float, y: float, radius: float, fill: str) -> Circle:
        """
        Filled disk centred on zoomed coordinates (x, y).

        Radii below one pixel are drawn as one pixel.
        """
        sx = (self.width + x) / 2
        sy = (self.height + y) / 2

        circle = Circle((sx, sy), radius if radius >= 1 else 1,
                        facecolor=fill, edgecolor='none')
        self.ax.add_patch(circle)
        return circle

    def draw_point(self, x: float, y: float, size: float = 1) -> Rectangle:
        """Filled square of size pixels at zoomed coordinates (x, y)."""
        sx = (self.width + x) / 2
        sy = (self.height + y) / 2

        point = Rectangle((sx, sy), size, size, facecolor=const.TRACK_COLOR, edgecolor='none')
        self.ax.add_patch(point)
        return point

    def draw_track(self, body: BodySnapshot):
        for x, y in body.history:
            self.draw_point(x * self.zoom, y * self.zoom, 1)

    def draw_body(self, body: BodySnapshot) -> Circle:
        return self.draw_circle(body.x * self.zoom, body.y * self.zoom,
                                body.display_radius * self.zoom, body.color)

    def render(self, snapshot: Sequence[BodySnapshot]):
        """Clear the canvas, draw one frame and rasterize it."""
        self.clear()

        for body in snapshot:
            if self.show_track:
                self.draw_track(body)
            self.draw_body(body)

        self.canvas.draw()
        self.frame_count += 1

        if self.frames_dir is not None:
            self.save_frame(self.frames_dir / f"frame_{self.frame_count:06d}.png")

    def to_array(self) -> np.ndarray:
        """RGBA pixels of the current frame (shape: (height, width, 4))."""
        self.canvas.draw()
        return np.asarray(self.canvas.buffer_rgba()).copy()

    def save_frame(self, output_path: str):
        """Write the current frame as PNG."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(str(output_path), dpi=self.figure.dpi,
                            facecolor=self.background)


def plot_trajectories(snapshot: Sequence[BodySnapshot], output_path: str,
                      title: str = 'Body Trajectories'):
    """
    Create a plot of every body's recorded trail.

    Args:
        snapshot: Bodies with history (from a run with show_track on)
        output_path: Path to save PNG plot

    Creates a plot showing:
    - Trails as lines in the body colour
    - Final positions as markers
    - Axes in AU
    """
    fig, ax = plt.subplots(figsize=(10, 10))

    for body in snapshot:
        if body.history:
            track = np.asarray(list(body.history)) / AU
            ax.plot(track[:, 0], track[:, 1], '-', color=body.color,
                    linewidth=1.0, alpha=0.8)

        ax.scatter([body.x / AU], [body.y / AU], c=[body.color], s=40,
                   edgecolors='black', linewidths=0.5, label=body.name, zorder=3)

    ax.set_xlabel('X (AU)')
    ax.set_ylabel('Y (AU)')
    ax.set_title(title)
    ax.set_aspect('equal')
    ax.grid(True, alpha=0.3)
    if snapshot:
        ax.legend(loc='upper right')

    # Save
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(str(output_path), dpi=150, bbox_inches='tight')
    plt.close(fig)
