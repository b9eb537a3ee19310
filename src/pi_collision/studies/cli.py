"""
Typer CLI commands for studies.

Imported and registered from `pi_collision.cli`.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from . import parse_floats_csv, pi_digit_masses


def _parse_masses(s: str) -> List[float]:
    try:
        masses = parse_floats_csv(s)
    except ValueError as e:
        raise typer.BadParameter(f"Could not parse masses from: {s!r}") from e
    if not masses:
        raise typer.BadParameter("Empty --masses specification.")
    bad = [m for m in masses if not m > 0.0]
    if bad:
        raise typer.BadParameter(f"Masses must be > 0, got {bad}")
    return masses


def register_study_commands(app: typer.Typer) -> None:
    @app.command("sweep")
    def sweep_cmd(
        masses: Optional[str] = typer.Option(
            None, "--masses", "-m", help="Comma/space-separated masses of the big box"
        ),
        digits: int = typer.Option(
            4, "--digits", "-d", min=1, help="Use masses 100**k for k < digits (ignored with --masses)"
        ),
        out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output directory"),
    ) -> None:
        """Count collisions for a series of masses (default: the pi digit masses)."""
        from .mass_sweep import run_mass_sweep

        mass_list = _parse_masses(masses) if masses else pi_digit_masses(digits)
        summary = run_mass_sweep(mass_list, out_dir=out)
        typer.echo(summary.to_string(index=False))
        if out:
            typer.echo(f"Saved to: {out}")
