"""pi_collision.core.render

Trajectory diagram of a collision sequence in normalized velocity space.

Each box collision becomes a point ``(v_s / r, sqrt(m_b) * v_b / r)`` with
``r = sqrt(m_b)``; a wall bounce mirrors the point at the vertical axis.
Because kinetic energy is conserved, all points lie on the unit circle,
which is drawn as the boundary.

* SVG: written line by line to any text sink (file, ``io.StringIO``)
* Matplotlib: same diagram on an Axes, for the CLI ``--plot`` popup
"""

from __future__ import annotations

import io
import logging
import math
from typing import TYPE_CHECKING, Optional, TextIO

import numpy as np

from ..config.models import DiagramConfig
from .engine import CollisionSequence

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

# Normalized position before the first collision: small box at rest, big box
# at unit velocity.
START_POINT = (0.0, 1.0)

DEFAULT_CONFIG = DiagramConfig()


def _num(value: float) -> str:
    """Shortest round-trip representation in positional notation, no trailing '.0'."""
    return np.format_float_positional(float(value), trim="-")


def _normalized_points(sequence: CollisionSequence):
    """
    Yield ``(x, y, x_reflected)`` per pair; ``x_reflected`` is None when the
    step ended without a wall bounce.
    """
    radius = math.sqrt(sequence.mass_big)
    sqrt_m_b = math.sqrt(sequence.mass_big)

    for pair in sequence:
        x = pair.v_small_after_box_collision / radius
        y = (pair.v_big_after_box_collision * sqrt_m_b) / radius

        x_reflected = None
        if pair.v_small_after_wall_collision is not None:
            x_reflected = pair.v_small_after_wall_collision / radius
        yield x, y, x_reflected


def trajectory_points(sequence: CollisionSequence) -> np.ndarray:
    """Normalized points in drawing order, starting at START_POINT. Shape (N, 2)."""
    pts = [START_POINT]
    for x, y, x_reflected in _normalized_points(sequence):
        pts.append((x, y))
        if x_reflected is not None:
            pts.append((x_reflected, y))
    return np.asarray(pts, dtype=np.float64)


# ----------------------------------------------------------------------
# SVG
# ----------------------------------------------------------------------


def write_svg(
    sequence: CollisionSequence,
    w: TextIO,
    config: Optional[DiagramConfig] = None,
) -> None:
    """
    Write the diagram as an SVG document to ``w``.

    Exceptions raised by ``w.write`` propagate unchanged; whatever was
    written before stays in the sink.
    """
    cfg = config or DEFAULT_CONFIG
    size = cfg.size
    center = cfg.center
    svg_radius = cfg.svg_radius

    def writeln(line: str) -> None:
        w.write(line)
        w.write("\n")

    def x_to_svg(x: float) -> float:
        return center + x * svg_radius

    def y_to_svg(y: float) -> float:
        return center + (-y) * svg_radius

    def point(x: float, y: float) -> None:
        writeln(
            f'<circle cx="{_num(x_to_svg(x))}" cy="{_num(y_to_svg(y))}" r="{_num(cfg.point_size)}" '
            f'stroke="black" fill="{cfg.point_fill}" stroke-width="1"/>'
        )

    def segment(x1: float, y1: float, x2: float, y2: float) -> None:
        writeln(
            f'<line x1="{_num(x_to_svg(x1))}" x2="{_num(x_to_svg(x2))}" '
            f'y1="{_num(y_to_svg(y1))}" y2="{_num(y_to_svg(y2))}" '
            f'stroke="{cfg.line_color}" stroke-width="{_num(cfg.line_width)}"/>'
        )

    writeln(
        f'<svg width="{_num(size)}" height="{_num(size)}" version="1.1" '
        f'xmlns="http://www.w3.org/2000/svg">'
    )

    writeln("<style>")
    writeln(
        f".text {{ font-weight: bold; font-size: {_num(cfg.font_size)}px; font-family: sans-serif; }}"
    )
    writeln("</style>")

    # Opaque background
    writeln('<rect width="100%" height="100%" fill="white"/>')

    # Boundary circle
    writeln(
        f'<circle cx="{_num(center)}" cy="{_num(center)}" r="{_num(svg_radius)}" '
        f'stroke="{cfg.boundary_color}" fill="transparent" stroke-width="3"/>'
    )

    # Coordinate system
    margin = cfg.margin
    writeln(
        f'<line x1="{_num(center)}" x2="{_num(center)}" y1="{_num(margin)}" y2="{_num(size - margin)}" '
        f'stroke="{cfg.axis_color}" stroke-width="5"/>'
    )
    writeln(
        f'<text x="{_num(center)}" y="{_num(margin / 2.0)}" text-anchor="middle" '
        f'dominant-baseline="middle" class="text">sqrt(m_b) * v_b</text>'
    )
    writeln(
        f'<line x1="{_num(margin)}" x2="{_num(size - margin)}" y1="{_num(center)}" y2="{_num(center)}" '
        f'stroke="{cfg.axis_color}" stroke-width="5"/>'
    )
    writeln(
        f'<text x="{_num(size - 2.0 * margin)}" y="{_num(center - 10.0)}" text-anchor="middle" '
        f'class="text">sqrt(m_s) * v_s</text>'
    )

    last_x, last_y = START_POINT
    n_points = 0

    for x, y, x_reflected in _normalized_points(sequence):
        point(x, y)
        segment(last_x, last_y, x, y)
        n_points += 1

        if x_reflected is not None:
            point(x_reflected, y)
            segment(x, y, x_reflected, y)
            n_points += 1

            last_x, last_y = x_reflected, y

    writeln("</svg>")
    logger.debug("Wrote SVG diagram with %d points (mass_big=%g)", n_points, sequence.mass_big)


def render_svg(sequence: CollisionSequence, config: Optional[DiagramConfig] = None) -> str:
    """Return the SVG document as a string."""
    buf = io.StringIO()
    write_svg(sequence, buf, config)
    return buf.getvalue()


# ----------------------------------------------------------------------
# Matplotlib
# ----------------------------------------------------------------------


def plot_trajectory(
    sequence: CollisionSequence,
    ax: Optional["Axes"] = None,
    config: Optional[DiagramConfig] = None,
) -> "Figure":
    """
    Draw the trajectory diagram with matplotlib and return the Figure.

    If ``ax`` is None a new square figure is created.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 7))
    else:
        fig = ax.figure

    cfg = config or DEFAULT_CONFIG
    theta = np.linspace(0.0, 2.0 * np.pi, 361)
    ax.plot(np.cos(theta), np.sin(theta), color=cfg.boundary_color, linewidth=1.5)
    ax.axhline(0.0, color=cfg.axis_color, linewidth=2.0)
    ax.axvline(0.0, color=cfg.axis_color, linewidth=2.0)

    pts = trajectory_points(sequence)
    ax.plot(pts[:, 0], pts[:, 1], color=cfg.line_color, linewidth=cfg.line_width)
    ax.scatter(pts[1:, 0], pts[1:, 1], s=12, color=cfg.point_fill, edgecolors="black", zorder=3)

    lim = 1.2
    ax.set_xlim(-lim, lim)
    ax.set_ylim(-lim, lim)
    ax.set_aspect("equal")
    ax.set_xlabel("sqrt(m_s) * v_s")
    ax.set_ylabel("sqrt(m_b) * v_b")
    ax.set_title(f"m_b = {sequence.mass_big:g}: {sequence.count()} collisions")
    return fig
