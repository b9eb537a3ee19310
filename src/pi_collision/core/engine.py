"""Engine for the pi collision simulator.

Two boxes slide without friction along one axis. The big box (mass
``mass_big``) moves towards a rigid wall with unit speed; the small box
(mass 1) rests between the big box and the wall. All collisions are
perfectly elastic. The number of collisions until the boxes separate for
good approaches the digits of pi for ``mass_big = 100**n``.

Velocities are measured as leftward motion, i.e. towards the wall, so a
positive velocity of the small box means it is heading for the wall.

Use from CLI, embeddable wrapper or tests as:

    from pi_collision.core.engine import calculate

    seq = calculate(100.0)
    seq.count()  # 31
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


# ====================================================================
# SIMULATION CONSTANTS
# ====================================================================

class SimulationConstants:
    """Fixed initial state of the staged scenario."""

    MASS_SMALL = 1.0
    V_BIG_INIT = 1.0    # leftwards, towards the wall
    V_SMALL_INIT = 0.0  # at rest


class InvalidInputError(ValueError):
    """Raised for a missing, unparseable or non-positive mass."""


# ====================================================================
# DATA CLASSES
# ====================================================================

@dataclass(frozen=True)
class CollisionPair:
    """One simulation step: a box collision and the wall bounce after it."""

    v_big_after_box_collision: float
    v_small_after_box_collision: float

    # None if no wall collision happened after the box collision. This can
    # only happen once, at the very end.
    v_small_after_wall_collision: Optional[float] = None

    @property
    def has_wall_collision(self) -> bool:
        return self.v_small_after_wall_collision is not None

    def num_collisions(self) -> int:
        return 2 if self.has_wall_collision else 1


def kinetic_energy(mass_big: float, v_big: float, v_small: float) -> float:
    """Total kinetic energy of both boxes (small box has unit mass)."""
    return 0.5 * mass_big * v_big * v_big + 0.5 * SimulationConstants.MASS_SMALL * v_small * v_small


def _validate_mass(mass_big: float) -> float:
    try:
        mass = float(mass_big)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"mass_big must be a number, got {mass_big!r}") from e
    if not math.isfinite(mass) or mass <= 0.0:
        raise InvalidInputError(f"mass_big must be a finite value > 0, got {mass!r}")
    return mass


class CollisionSequence:
    """
    Chronological record of all collisions for one value of ``mass_big``.

    Build it with :meth:`calculate`; the pairs are stored as a tuple and
    are not meant to be changed afterwards.
    """

    def __init__(self, pairs: Sequence[CollisionPair], mass_big: float):
        self._pairs: Tuple[CollisionPair, ...] = tuple(pairs)
        self._mass_big = float(mass_big)

    @property
    def pairs(self) -> Tuple[CollisionPair, ...]:
        return self._pairs

    @property
    def mass_big(self) -> float:
        return self._mass_big

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[CollisionPair]:
        return iter(self._pairs)

    def __getitem__(self, index: int) -> CollisionPair:
        return self._pairs[index]

    def __repr__(self) -> str:
        return f"CollisionSequence(mass_big={self._mass_big!r}, n_pairs={len(self._pairs)})"

    @classmethod
    def calculate(cls, mass_big: float) -> "CollisionSequence":
        """
        Calculate all collisions in the staged scenario where the bigger box
        has the mass ``mass_big``.

        Raises
        ------
        InvalidInputError
            If ``mass_big`` is not a finite number greater than 0.
        """
        mass_big = _validate_mass(mass_big)

        pairs = []

        v_big = SimulationConstants.V_BIG_INIT
        v_small = SimulationConstants.V_SMALL_INIT

        mass_small = SimulationConstants.MASS_SMALL
        mass_sum = mass_big + mass_small

        while True:
            # Collision between the boxes
            offset = 2.0 * ((mass_small * v_small + mass_big * v_big) / mass_sum)
            v_big = offset - v_big
            v_small = offset - v_small

            v_big_after_box_collision = v_big
            v_small_after_box_collision = v_small

            # No leftward motion left: the small box never reaches the wall again.
            end_after_box_collision = v_small <= 0.0

            if end_after_box_collision:
                v_small_after_wall_collision = None
            else:
                # The wall simply reflects the small box
                v_small = -v_small
                v_small_after_wall_collision = v_small

            pairs.append(
                CollisionPair(
                    v_big_after_box_collision=v_big_after_box_collision,
                    v_small_after_box_collision=v_small_after_box_collision,
                    v_small_after_wall_collision=v_small_after_wall_collision,
                )
            )

            # After the bounce v_small is negative (rightwards). The small box
            # only catches up with the big one while it moves right faster.
            end_after_wall_collision = not (v_small < v_big)

            if end_after_box_collision or end_after_wall_collision:
                break

        logger.debug(
            "mass_big=%g: %d collision pairs, final v_big=%.6g, v_small=%.6g",
            mass_big,
            len(pairs),
            v_big,
            v_small,
        )
        return cls(pairs, mass_big)

    def count(self) -> int:
        """Total number of collisions (box-box and wall) in the sequence."""
        if not self._pairs:
            raise ValueError("Cannot count collisions of an empty sequence.")
        return (len(self._pairs) - 1) * 2 + self._pairs[-1].num_collisions()

    @property
    def ends_with_wall_collision(self) -> bool:
        return bool(self._pairs) and self._pairs[-1].has_wall_collision

    def to_dataframe(self) -> pd.DataFrame:
        """
        One row per collision pair.

        ``kinetic_energy`` is evaluated after the step, i.e. with the small
        box velocity after the wall bounce when there was one.
        """
        rows = []
        for i, pair in enumerate(self._pairs):
            v_wall = pair.v_small_after_wall_collision
            v_small_final = pair.v_small_after_box_collision if v_wall is None else v_wall
            rows.append(
                {
                    "step": i,
                    "v_big_after_box_collision": pair.v_big_after_box_collision,
                    "v_small_after_box_collision": pair.v_small_after_box_collision,
                    "v_small_after_wall_collision": np.nan if v_wall is None else v_wall,
                    "kinetic_energy": kinetic_energy(
                        self._mass_big, pair.v_big_after_box_collision, v_small_final
                    ),
                }
            )
        df = pd.DataFrame(rows)
        df.attrs["mass_big"] = self._mass_big
        df.attrs["collisions"] = self.count() if self._pairs else 0
        return df


def calculate(mass_big: float) -> CollisionSequence:
    """Module-level shortcut for :meth:`CollisionSequence.calculate`."""
    return CollisionSequence.calculate(mass_big)
