from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator, model_validator


class ConfigError(ValueError):
    pass


class ConfigBase(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}


class DiagramConfig(ConfigBase):
    """Canvas geometry and styling of the SVG trajectory diagram."""

    size: float = 1400.0
    svg_radius: float = 500.0  # drawing units per unit of normalized velocity
    margin: float = 50.0
    point_size: float = 4.0
    line_width: float = 1.0
    font_size: float = 20.0

    boundary_color: str = "red"
    axis_color: str = "orange"
    point_fill: str = "blue"
    line_color: str = "black"

    @field_validator("size", "svg_radius", "point_size", "line_width", "font_size")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0.0:
            raise ValueError("must be > 0")
        return value

    @field_validator("margin")
    @classmethod
    def _margin_nonneg(cls, value: float) -> float:
        if value < 0.0:
            raise ValueError("must be >= 0")
        return value

    @field_validator("boundary_color", "axis_color", "point_fill", "line_color")
    @classmethod
    def _color_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("color must not be empty")
        return value

    @model_validator(mode="after")
    def _fits_canvas(self) -> "DiagramConfig":
        if 2.0 * self.svg_radius > self.size:
            raise ValueError("svg_radius must fit the canvas (2 * svg_radius <= size)")
        if 2.0 * self.margin >= self.size:
            raise ValueError("margin must be smaller than half the canvas size")
        return self

    @property
    def center(self) -> float:
        return self.size / 2.0


def format_validation_error(exc: ValidationError, *, source: str) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(item) for item in error.get("loc", []))
        msg = error.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    details = "; ".join(parts) if parts else str(exc)
    return f"{source}: invalid configuration: {details}"


def load_diagram_config(
    overrides: Optional[Dict[str, Any]] = None,
    *,
    source: str = "diagram",
) -> DiagramConfig:
    """Build a DiagramConfig from keyword overrides, raising ConfigError on bad values."""
    try:
        return DiagramConfig(**(overrides or {}))
    except ValidationError as exc:
        raise ConfigError(format_validation_error(exc, source=source)) from exc
