from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from pi_collision.cli import app

runner = CliRunner()


def test_run_writes_svg_and_prints_count(tmp_path: Path) -> None:
    out = tmp_path / "diagram" / "out.svg"
    result = runner.invoke(app, ["run", "100", "--output", str(out)])

    assert result.exit_code == 0, result.output
    assert "Number of collisions: 31" in result.output
    text = out.read_text(encoding="utf-8")
    assert text.startswith("<svg")
    assert text.rstrip().endswith("</svg>")


def test_run_with_log_file(tmp_path: Path) -> None:
    out = tmp_path / "out.svg"
    log = tmp_path / "run.log"
    result = runner.invoke(app, ["run", "1", "-o", str(out), "--log-file", str(log)])

    assert result.exit_code == 0, result.output
    assert "Number of collisions: 3" in result.output
    assert "Number of collisions: 3" in log.read_text(encoding="utf-8")


def test_missing_mass_prints_usage(tmp_path: Path) -> None:
    out = tmp_path / "out.svg"
    result = runner.invoke(app, ["run", "--output", str(out)])

    assert result.exit_code == 0
    assert "Mass parameter missing" in result.output
    assert not out.exists()


def test_unparseable_and_non_positive_mass_print_usage(tmp_path: Path) -> None:
    out = tmp_path / "out.svg"
    for raw in ("heavy", "0", "-5", "nan"):
        result = runner.invoke(app, ["run", raw, "--output", str(out)])
        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "Number of collisions" not in result.output
    assert not out.exists()


def test_sweep_digits(tmp_path: Path) -> None:
    result = runner.invoke(app, ["sweep", "--digits", "3", "--out", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "314" in result.output
    assert (tmp_path / "mass_sweep_summary.csv").is_file()


def test_sweep_rejects_bad_masses() -> None:
    result = runner.invoke(app, ["sweep", "--masses", "1,-4"])
    assert result.exit_code != 0
