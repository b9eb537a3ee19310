"""
Mass sweep study: collision count as a function of the big box mass.
"""
from __future__ import annotations

import logging
import math
import time
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

import pandas as pd
import yaml

from . import save_study_metadata
from ..core.engine import CollisionSequence

logger = logging.getLogger(__name__)

SimFunc = Callable[[float], CollisionSequence]


def run_mass_sweep(
    masses: Iterable[float],
    *,
    out_dir: Optional[Path] = None,
    simulate_func: Optional[SimFunc] = None,
) -> pd.DataFrame:
    """
    Simulate every mass in ``masses`` and summarize the collision counts.

    Parameters
    ----------
    masses:
        Masses of the big box (each > 0). Order is preserved.
    out_dir:
        If provided, write summary CSV, sweep config and metadata.
    simulate_func:
        For testing; defaults to `pi_collision.core.engine.calculate`.

    Returns
    -------
    pd.DataFrame with one row per mass. ``pi_estimate`` is
    ``collisions / sqrt(mass_big)``, which tends to pi for large masses.
    """
    if simulate_func is None:
        from pi_collision.core.engine import calculate as simulate_func  # type: ignore

    mass_list = [float(m) for m in masses]
    rows: List[Dict[str, Any]] = []

    for mass in mass_list:
        t0 = time.perf_counter()
        seq = simulate_func(mass)
        wall = time.perf_counter() - t0

        collisions = seq.count()
        rows.append(
            {
                "mass_big": mass,
                "n_pairs": len(seq),
                "collisions": collisions,
                "ends_with_wall": seq.ends_with_wall_collision,
                "pi_estimate": collisions / math.sqrt(mass),
                "wall_time_s": float(wall),
            }
        )
        logger.info("mass_big=%g -> %d collisions (%.3f s)", mass, collisions, wall)

    summary = pd.DataFrame(
        rows,
        columns=["mass_big", "n_pairs", "collisions", "ends_with_wall", "pi_estimate", "wall_time_s"],
    )

    if out_dir:
        out_dir.mkdir(parents=True, exist_ok=True)
        summary.to_csv(out_dir / "mass_sweep_summary.csv", index=False)
        (out_dir / "sweep_config.yml").write_text(
            yaml.safe_dump({"masses": mass_list}, sort_keys=False), encoding="utf-8"
        )
        save_study_metadata(
            out_dir,
            metadata={
                "study_type": "mass_sweep",
                "masses": mass_list,
            },
        )

    return summary
