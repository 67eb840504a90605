#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Real-Time Visualization Module
================================================================================

Project:        Water Phase Canvas
Module:         visualization.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

This module provides the drawing side of the simulation:
- RasterSurface: an RGBA NumPy buffer that executes particle draw commands
- Beaker rendering (liquid, ice, bubbles, steam, thermometer) with Matplotlib
- PNG export for Streamlit
- Temperature history plots
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.patches import Rectangle
from typing import Tuple, Optional, List, Iterable
from dataclasses import dataclass
from PIL import Image
import io

from .physics import PhysicsConstants, DEFAULT_CONSTANTS
from .particles import CircleCommand, GradientCommand

RGBA = Tuple[float, float, float, float]


def create_temperature_colormap():
    """
    Colormap matching the thermometer fill.

    Blue (cold) -> Cyan -> Green -> Yellow -> Red (hot)
    """
    colors = [
        (0.0, 0.0, 1.0),
        (0.0, 1.0, 1.0),
        (0.0, 1.0, 0.0),
        (1.0, 1.0, 0.0),
        (1.0, 0.0, 0.0),
    ]
    return LinearSegmentedColormap.from_list("thermometer", colors, N=256)


TEMPERATURE_CMAP = create_temperature_colormap()


@dataclass
class VisualizationConfig:
    """Configuration for visualization."""
    background_color: str = "#1a1a2e"
    beaker_color: str = "#cbd5e1"
    water_color: str = "#3b82f6"
    ice_color: str = "#e0f2fe"
    figsize: Tuple[int, int] = (6, 7)
    show_thermometer: bool = True
    dpi: int = 100


class RasterSurface:
    """
    A 2D RGBA raster with the drawing operations the particle systems need.

    Pixels are stored as floats in [0, 1] with straight (non-premultiplied)
    alpha; shapes are composited with the "over" operator. A surface of
    zero width or height accepts every call and draws nothing.
    """

    def __init__(self, width: int, height: int):
        self.pixels = np.zeros((0, 0, 4))
        self.resize(width, height)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def resize(self, width: float, height: float):
        """Resize and clear the surface."""
        if width < 0 or height < 0:
            raise ValueError(f"Surface size must be non-negative, got {(width, height)}")
        self.pixels = np.zeros((int(round(height)), int(round(width)), 4))

    def clear(self):
        self.pixels[...] = 0.0

    def _disc(self, x: float, y: float, radius: float):
        """
        Pixel window and distances for a disc.

        Returns:
            (rows, cols, dist) or None if nothing is covered
        """
        if radius <= 0 or self.width == 0 or self.height == 0:
            return None

        x0 = max(0, int(np.floor(x - radius)))
        x1 = min(self.width, int(np.ceil(x + radius)) + 1)
        y0 = max(0, int(np.floor(y - radius)))
        y1 = min(self.height, int(np.ceil(y + radius)) + 1)
        if x0 >= x1 or y0 >= y1:
            return None

        # Distance from each pixel centre to the disc centre
        yy, xx = np.mgrid[y0:y1, x0:x1]
        dist = np.hypot(xx + 0.5 - x, yy + 0.5 - y)
        return slice(y0, y1), slice(x0, x1), dist

    def _blend(self, rows: slice, cols: slice, src: np.ndarray, mask: np.ndarray):
        """Composite ``src`` (h x w x 4) over the window where ``mask`` holds."""
        dst = self.pixels[rows, cols]
        src_a = np.where(mask, src[..., 3], 0.0)
        dst_a = dst[..., 3]

        out_a = src_a + dst_a * (1.0 - src_a)
        safe = np.where(out_a > 0, out_a, 1.0)
        out_rgb = (src[..., :3] * src_a[..., None] +
                   dst[..., :3] * (dst_a * (1.0 - src_a))[..., None]) / safe[..., None]

        dst[..., :3] = np.where((out_a > 0)[..., None], out_rgb, 0.0)
        dst[..., 3] = out_a

    def fill_circle(self, x: float, y: float, radius: float, color: RGBA):
        """Fill a disc with a single colour."""
        disc = self._disc(x, y, radius)
        if disc is None:
            return
        rows, cols, dist = disc
        src = np.empty(dist.shape + (4,))
        src[...] = np.clip(color, 0.0, 1.0)
        self._blend(rows, cols, src, dist <= radius)

    def fill_radial_gradient(self, x: float, y: float, radius: float, inner: RGBA, outer: RGBA):
        """Fill a disc fading linearly from ``inner`` at the centre to ``outer`` at the rim."""
        disc = self._disc(x, y, radius)
        if disc is None:
            return
        rows, cols, dist = disc
        t = np.clip(dist / radius, 0.0, 1.0)[..., None]
        inner = np.clip(np.asarray(inner, dtype=float), 0.0, 1.0)
        outer = np.clip(np.asarray(outer, dtype=float), 0.0, 1.0)
        src = inner + (outer - inner) * t
        self._blend(rows, cols, src, dist <= radius)

    def draw(self, commands: Iterable, clear: bool = True):
        """Execute particle draw commands, clearing first by default."""
        if clear:
            self.clear()
        for cmd in commands:
            if isinstance(cmd, GradientCommand):
                self.fill_radial_gradient(cmd.x, cmd.y, cmd.radius, cmd.inner, cmd.outer)
            elif isinstance(cmd, CircleCommand):
                self.fill_circle(cmd.x, cmd.y, cmd.radius, cmd.color)
            else:
                raise TypeError(f"Unknown draw command: {cmd!r}")

    def to_array(self) -> np.ndarray:
        """RGBA uint8 copy of the surface."""
        return (np.clip(self.pixels, 0.0, 1.0) * 255).round().astype(np.uint8)

    def to_image(self) -> Image.Image:
        """Pillow RGBA image of the surface."""
        if self.width == 0 or self.height == 0:
            return Image.new("RGBA", (self.width, self.height))
        return Image.fromarray(self.to_array())


def render_frame_matplotlib(
    frame,
    canvas_size: Tuple[float, float],
    config: Optional[VisualizationConfig] = None,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
    fig: Optional[plt.Figure] = None
) -> plt.Figure:
    """
    Render a beaker frame with Matplotlib.

    The beaker uses canvas coordinates (y grows downward) so particle draw
    commands can be shown unchanged.

    Args:
        frame: Frame produced by ``WaterSimulation.step``
        canvas_size: (width, height) of the drawing surfaces
        config: Visualization configuration
        constants: Physical constants (thermometer scale)
        fig: Optional existing figure to draw into

    Returns:
        Matplotlib figure
    """
    if config is None:
        config = VisualizationConfig()

    width, height = canvas_size

    if fig is None:
        fig = plt.figure(figsize=config.figsize)
    fig.clear()
    fig.patch.set_facecolor(config.background_color)

    if config.show_thermometer:
        ax = fig.add_axes([0.05, 0.05, 0.72, 0.9])
        ax_thermo = fig.add_axes([0.84, 0.05, 0.08, 0.9])
    else:
        ax = fig.add_axes([0.05, 0.05, 0.9, 0.9])
        ax_thermo = None

    ax.set_facecolor(config.background_color)
    visual = frame.visual

    # Liquid rises from the bottom of the beaker
    liquid_height = min(visual.liquid_height, height)
    ax.add_patch(Rectangle(
        (0, height - liquid_height), width, liquid_height,
        facecolor=config.water_color, alpha=visual.liquid_opacity, linewidth=0
    ))
    ice_height = min(visual.ice_height, height)
    ax.add_patch(Rectangle(
        (0, height - ice_height), width, ice_height,
        facecolor=config.ice_color, alpha=visual.ice_opacity, linewidth=0
    ))

    if width > 0 and height > 0:
        surface = RasterSurface(width, height)
        surface.draw(frame.steam_commands)
        surface.draw(frame.bubble_commands, clear=False)
        ax.imshow(surface.to_array(), extent=(0, width, height, 0), interpolation="bilinear")

    # Beaker outline
    ax.plot([0, 0, width, width], [0, height, height, 0],
            color=config.beaker_color, linewidth=2)

    ax.set_xlim(-0.02 * width, 1.02 * width)
    ax.set_ylim(height, -0.05 * height)
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(f"{frame.display.celsius} °C  ({frame.phase.value})", color="white")

    if ax_thermo is not None:
        render_thermometer(frame.thermometer, ax_thermo, config, constants)

    return fig


def render_thermometer(
    reading,
    ax: plt.Axes,
    config: Optional[VisualizationConfig] = None,
    constants: PhysicsConstants = DEFAULT_CONSTANTS
):
    """Draw the thermometer column on ``ax``."""
    if config is None:
        config = VisualizationConfig()

    ax.clear()
    ax.set_facecolor(config.background_color)
    ax.add_patch(Rectangle((0, 0), 1, 100, facecolor="#334155", linewidth=0))
    ax.add_patch(Rectangle((0, 0), 1, reading.percent, facecolor=reading.rgb, linewidth=0))

    # Freezing and boiling marks
    for mark in (constants.freezing_point, constants.boiling_point):
        pct = (mark - constants.min_temp) / constants.temperature_range * 100.0
        ax.axhline(pct, color="white", linewidth=1, alpha=0.6)

    ax.set_xlim(0, 1)
    ax.set_ylim(0, 100)
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_color(config.beaker_color)


def render_frame_streamlit(
    frame,
    canvas_size: Tuple[float, float],
    config: Optional[VisualizationConfig] = None,
    constants: PhysicsConstants = DEFAULT_CONSTANTS
) -> bytes:
    """
    Render a frame and return PNG bytes for Streamlit.

    Returns:
        PNG image as bytes
    """
    if config is None:
        config = VisualizationConfig()

    fig = render_frame_matplotlib(frame, canvas_size, config, constants)

    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=config.dpi,
                facecolor=fig.get_facecolor(), edgecolor="none")
    plt.close(fig)
    buf.seek(0)

    return buf.getvalue()


def render_temperature_history(
    times: List[float],
    temperatures: List[float],
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
    ax: Optional[plt.Axes] = None,
    config: Optional[VisualizationConfig] = None
) -> plt.Figure:
    """
    Plot temperature against time with the phase thresholds marked.

    Returns:
        Matplotlib figure
    """
    if config is None:
        config = VisualizationConfig()

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(6, 3))
    else:
        fig = ax.figure

    ax.clear()
    ax.plot(times, temperatures, "r-", linewidth=1.5)
    ax.axhline(y=constants.freezing_point, color="cyan", linestyle="--",
               alpha=0.5, label="Freezing")
    ax.axhline(y=constants.bubble_threshold, color="orange", linestyle=":",
               alpha=0.5, label="Bubbles")
    ax.axhline(y=constants.boiling_point, color="red", linestyle="--",
               alpha=0.5, label="Boiling")

    ax.set_ylim(constants.min_temp - 5, constants.max_temp + 5)
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("T (°C)")
    ax.legend(fontsize=8, loc="best")

    ax.set_facecolor(config.background_color)
    fig.patch.set_facecolor(config.background_color)
    ax.tick_params(colors="white")
    ax.xaxis.label.set_color("white")
    ax.yaxis.label.set_color("white")
    for spine in ax.spines.values():
        spine.set_color("white")

    return fig


def phase_color(phase_name: str) -> str:
    """Get colour for a phase indicator."""
    colors = {
        "frozen": "#38bdf8",
        "normal": "#3b82f6",
        "boiling": "#ef4444",
    }
    return colors.get(phase_name.lower(), "#6b7280")


def thermometer_colors(temperatures: np.ndarray, constants: PhysicsConstants = DEFAULT_CONSTANTS) -> np.ndarray:
    """RGBA colours along the thermometer scale for an array of temperatures."""
    norm = np.clip((np.asarray(temperatures, dtype=float) - constants.min_temp) /
                   constants.temperature_range, 0.0, 1.0)
    return TEMPERATURE_CMAP(norm)

