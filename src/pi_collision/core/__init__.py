"""Simulation core: collision engine and diagram renderer."""

from .engine import (
    CollisionPair,
    CollisionSequence,
    InvalidInputError,
    calculate,
    kinetic_energy,
)
from .render import plot_trajectory, render_svg, trajectory_points, write_svg

__all__ = [
    "CollisionPair",
    "CollisionSequence",
    "InvalidInputError",
    "calculate",
    "kinetic_energy",
    "plot_trajectory",
    "render_svg",
    "trajectory_points",
    "write_svg",
]
