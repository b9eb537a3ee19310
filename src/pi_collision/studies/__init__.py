"""
Studies framework: reproducible sweeps over the mass of the big box.

All simulations are executed via `pi_collision.core.engine.calculate`.
"""
from __future__ import annotations

from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, List
import json
import subprocess
import re

# ----------------------------
# Parsing helpers
# ----------------------------

def parse_floats_csv(s: str) -> List[float]:
    """Parse '1,100,1e4' or '1 100 1e4' into a list of floats."""
    parts = re.split(r"[,\s]+", (s or "").strip())
    return [float(p) for p in parts if p]


def pi_digit_masses(n_digits: int) -> List[float]:
    """
    Masses 1, 100, 10000, ... whose collision counts spell the first
    ``n_digits`` digits of pi (3, 31, 314, ...).
    """
    if n_digits < 1:
        raise ValueError("n_digits must be >= 1")
    return [float(100 ** k) for k in range(n_digits)]


# ----------------------------
# Reproducibility utilities
# ----------------------------

def get_git_hash() -> str:
    """Return current git hash (or 'unknown')."""
    try:
        proc = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        )
        return proc.stdout.strip()
    except (OSError, subprocess.SubprocessError):
        return "unknown"


def _json_default(obj: Any) -> Any:
    if is_dataclass(obj):
        return asdict(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return str(obj)


def save_study_metadata(output_dir: Path, *, metadata: Dict[str, Any]) -> None:
    """Write metadata JSON file to output directory."""
    from pi_collision import __version__

    output_dir.mkdir(parents=True, exist_ok=True)
    payload = {
        "git_hash": get_git_hash(),
        "package_version": __version__,
        **metadata,
    }
    (output_dir / "run_metadata.json").write_text(
        json.dumps(payload, indent=2, default=_json_default),
        encoding="utf-8",
    )
