# src/pi_collision/cli.py

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import typer

from .core.engine import CollisionSequence, InvalidInputError, calculate
from .core.render import write_svg

app = typer.Typer(
    add_completion=False,
    help=(
        "Pi collision simulator CLI\n\n"
        "Count the elastic collisions between a unit-mass box, a heavier box\n"
        "and a wall, and draw them in normalized velocity space.\n"
        "Use 'run' for a single mass or 'sweep' for a series of masses."
    ),
)

# Studies commands (mass sweep)
from .studies.cli import register_study_commands
register_study_commands(app)

# ----------------------------------------------------------------------
# Constants
# ----------------------------------------------------------------------

DEFAULT_OUTPUT = Path("out.svg")

USAGE = (
    "Mass parameter missing! Usage:\n"
    "    pi-collision run <mass-of-bigger-object>\n"
    "\n"
    "Example:\n"
    "    pi-collision run 100"
)

# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _parse_mass(raw: Optional[str]) -> Optional[float]:
    """Parse the mass argument; None if absent, unparseable or not > 0."""
    if raw is None:
        return None
    try:
        mass = float(raw)
    except ValueError:
        return None
    if not mass > 0.0:
        return None
    return mass


def _setup_logger(log_file: Optional[Path], verbose: bool = False) -> logging.Logger:
    """
    Set up the run logger. Writes to ``log_file`` if given; ``verbose``
    additionally echoes debug messages of the package to stderr.
    """
    logger = logging.getLogger("pi_collision")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if verbose:
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        logger.addHandler(stream)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def _print_and_log(logger: logging.Logger, msg: str) -> None:
    typer.echo(msg)
    logger.info(msg)


def _show_matplotlib_plot(seq: CollisionSequence) -> None:
    import matplotlib.pyplot as plt

    from .core.render import plot_trajectory

    plot_trajectory(seq)
    plt.show()


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------


@app.command(context_settings={"ignore_unknown_options": True})
def run(
    mass: Optional[str] = typer.Argument(
        None,
        metavar="MASS",
        help="Mass of the bigger box (the small box has mass 1).",
        show_default=False,
    ),
    output: Path = typer.Option(
        DEFAULT_OUTPUT,
        "--output",
        "-o",
        help="Where to write the SVG diagram.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Optional file receiving a detailed run log.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Echo debug log messages to stderr.",
    ),
    plot: bool = typer.Option(
        False,
        "--plot",
        help="Show a matplotlib window with the trajectory diagram.",
    ),
) -> None:
    """
    Count collisions for a single mass and write the SVG diagram.

    Examples
    --------
        pi-collision run 100

        pi-collision run 10000 --output results/m1e4.svg --plot
    """
    mass_big = _parse_mass(mass)
    if mass_big is None:
        # Usage guidance only; no error exit code is forced.
        typer.echo(USAGE, err=True)
        return

    logger = _setup_logger(log_file, verbose)
    logger.info("Simulating mass_big = %g", mass_big)

    t0 = time.perf_counter()
    try:
        seq = calculate(mass_big)
    except InvalidInputError as e:
        typer.echo(str(e), err=True)
        typer.echo(USAGE, err=True)
        return
    wall_time = time.perf_counter() - t0
    logger.info("Simulation finished in %.3f s (%d pairs)", wall_time, len(seq))

    typer.echo(f"Number of collisions: {seq.count()}")
    logger.info("Number of collisions: %d", seq.count())

    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        write_svg(seq, f)
    logger.info("Wrote diagram to %s", output)

    if plot:
        _show_matplotlib_plot(seq)

    if log_file is not None:
        _print_and_log(logger, f"Detailed log written to {log_file}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
