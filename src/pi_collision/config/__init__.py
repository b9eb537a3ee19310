"""Diagram configuration and validation utilities."""

from .models import ConfigError, DiagramConfig, format_validation_error, load_diagram_config

__all__ = [
    "ConfigError",
    "DiagramConfig",
    "format_validation_error",
    "load_diagram_config",
]
