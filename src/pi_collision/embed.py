"""
Embeddable entry point.

For hosts that bring their own output channel (a web page, a notebook):
returns the rendered diagram as a string and never touches the filesystem.
"""
from __future__ import annotations

from .core.engine import calculate
from .core.render import render_svg


def gen_svg(mass_big: float) -> str:
    """Simulate ``mass_big`` and return the SVG diagram as text."""
    return render_svg(calculate(mass_big))
