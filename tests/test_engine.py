from __future__ import annotations

import math

import numpy as np
import pytest

from pi_collision.core.engine import (
    CollisionPair,
    CollisionSequence,
    InvalidInputError,
    calculate,
    kinetic_energy,
)


@pytest.mark.parametrize(
    "mass_big, expected",
    [(1.0, 3), (100.0, 31), (10_000.0, 314), (1_000_000.0, 3141)],
)
def test_pi_digit_counts(mass_big: float, expected: int) -> None:
    assert calculate(mass_big).count() == expected


def test_unit_mass_golden_sequence() -> None:
    seq = calculate(1.0)

    assert seq.pairs == (
        CollisionPair(0.0, 1.0, -1.0),
        CollisionPair(-1.0, 0.0, None),
    )
    # v_small hits exactly 0 after the second box collision: no wall bounce
    assert not seq.ends_with_wall_collision
    assert seq.count() == 3


@pytest.mark.parametrize("mass_big", [0.01, 0.5, 1.0, 2.0, 3.7, 100.0, 12345.0])
def test_wall_field_invariant_and_count_formula(mass_big: float) -> None:
    seq = calculate(mass_big)

    assert len(seq) >= 1
    for pair in seq.pairs[:-1]:
        assert pair.v_small_after_wall_collision is not None

    last = seq[-1]
    expected = (len(seq) - 1) * 2 + (2 if last.v_small_after_wall_collision is not None else 1)
    assert seq.count() == expected


def test_light_big_box_single_pair() -> None:
    # Big box bounces straight back faster than the small box returns
    # from the wall.
    seq = calculate(0.25)
    assert len(seq) == 1
    assert seq.ends_with_wall_collision
    assert seq.count() == 2


def test_wall_velocity_equal_to_big_box_ends_run() -> None:
    # m = 1/3 gives v_big = -0.5 and a reflected v_small of exactly -0.5
    seq = calculate(1.0 / 3.0)

    assert len(seq) == 1
    assert seq[0].v_small_after_wall_collision == seq[0].v_big_after_box_collision
    assert seq.ends_with_wall_collision
    assert seq.count() == 2


def test_counts_non_decreasing_for_powers_of_100() -> None:
    counts = [calculate(100.0 ** k).count() for k in range(4)]
    assert counts == sorted(counts)


def test_calculate_is_deterministic() -> None:
    a = calculate(314.15)
    b = CollisionSequence.calculate(314.15)
    assert a.pairs == b.pairs
    assert a.mass_big == b.mass_big


def test_kinetic_energy_conserved() -> None:
    mass_big = 100.0
    df = calculate(mass_big).to_dataframe()

    e0 = kinetic_energy(mass_big, 1.0, 0.0)
    assert e0 == pytest.approx(0.5 * mass_big)
    np.testing.assert_allclose(df["kinetic_energy"].to_numpy(), e0, rtol=1e-9)


def test_to_dataframe_columns() -> None:
    seq = calculate(1.0)
    df = seq.to_dataframe()

    assert list(df.columns) == [
        "step",
        "v_big_after_box_collision",
        "v_small_after_box_collision",
        "v_small_after_wall_collision",
        "kinetic_energy",
    ]
    assert len(df) == 2
    assert df.loc[0, "v_small_after_wall_collision"] == -1.0
    assert math.isnan(df.loc[1, "v_small_after_wall_collision"])
    assert df.attrs["collisions"] == 3
    assert df.attrs["mass_big"] == 1.0


@pytest.mark.parametrize("bad", [0.0, -1.0, float("nan"), float("inf"), "heavy", None])
def test_invalid_mass_rejected(bad) -> None:
    with pytest.raises(InvalidInputError):
        calculate(bad)


def test_invalid_input_is_value_error() -> None:
    with pytest.raises(ValueError):
        calculate(-5.0)


def test_count_of_empty_sequence_fails() -> None:
    with pytest.raises(ValueError):
        CollisionSequence([], 1.0).count()


def test_pairs_are_immutable() -> None:
    seq = calculate(100.0)
    with pytest.raises(AttributeError):
        seq[0].v_big_after_box_collision = 0.0  # type: ignore[misc]
    assert isinstance(seq.pairs, tuple)
