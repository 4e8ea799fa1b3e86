"""Constraint variants and the constraint model.

Each player is bound by an accumulation constraint over the move sequence:

    Alice (odd rounds)               Bazza (even rounds)
    standard  sum(x)       <= lam*n     standard  sum(x^2)            <= n
    cubic     sum(x^3)     <= lam*n     quartic   sum(x^4)            <= n^2
    weighted  sum((1+0.1i)x) <= 1.5*lam*n  weighted  sum((1+0.05i)x^2)  <= 1.2n

where i is the zero-based position within the list passed in. Capacity is
the remaining headroom expressed in move units: Alice's constraints are
linear in the move so the raw remainder is used; Bazza's remainder is taken
back to move scale with a square root (fourth root for quartic).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from inekoalaty.models.parameter_config import ParameterConfig
from inekoalaty.parameters import (
    ALICE_WEIGHT_STEP,
    ALICE_WEIGHTED_LIMIT_FACTOR,
    BAZZA_WEIGHT_STEP,
    BAZZA_WEIGHTED_LIMIT_FACTOR,
    EPS,
)


class Player(Enum):
    """The two players. Alice moves on odd rounds, Bazza on even rounds."""

    ALICE = "Alice"
    BAZZA = "Bazza"

    @property
    def opponent(self) -> Player:
        return Player.BAZZA if self is Player.ALICE else Player.ALICE

    @classmethod
    def for_round(cls, n: int) -> Player:
        """Acting player for 1-based round n."""
        return cls.ALICE if n % 2 == 1 else cls.BAZZA


class ConstraintVariant(Enum):
    """Which aggregate function and limit formula apply to a player."""

    STANDARD = "standard"
    CUBIC = "cubic"
    QUARTIC = "quartic"
    WEIGHTED = "weighted"


ALICE_VARIANTS = (ConstraintVariant.STANDARD, ConstraintVariant.CUBIC, ConstraintVariant.WEIGHTED)
BAZZA_VARIANTS = (ConstraintVariant.STANDARD, ConstraintVariant.QUARTIC, ConstraintVariant.WEIGHTED)


def parse_variant(name: ConstraintVariant | str) -> ConstraintVariant:
    """Resolve a variant from its tag.

    Raises:
        ValueError: If the tag is unknown
    """
    if isinstance(name, ConstraintVariant):
        return name
    try:
        return ConstraintVariant(name.strip().lower())
    except ValueError:
        valid = [v.value for v in ConstraintVariant]
        raise ValueError(f"Unknown constraint variant: {name}. Valid variants: {valid}") from None


@dataclass(frozen=True)
class ConstraintCheck:
    """Outcome of checking a move sequence against a constraint.

    Attributes:
        valid: value <= limit + EPS
        margin: limit - value (negative when invalid)
    """

    valid: bool
    margin: float


class ConstraintModel:
    """Computes constraint values, limits, capacities and validity.

    Variants a side does not support (cubic for Bazza, quartic for Alice)
    fall back to that side's standard formula.
    """

    def __init__(
        self,
        config: ParameterConfig,
        alice_variant: ConstraintVariant = ConstraintVariant.STANDARD,
        bazza_variant: ConstraintVariant = ConstraintVariant.STANDARD,
    ):
        self.config = config
        self.alice_variant = alice_variant
        self.bazza_variant = bazza_variant

    def variant_for(self, player: Player) -> ConstraintVariant:
        return self.alice_variant if player is Player.ALICE else self.bazza_variant

    # -------------------------------------------------------------------------
    # Alice
    # -------------------------------------------------------------------------

    def alice_value(self, moves: Sequence[float]) -> float:
        if self.alice_variant is ConstraintVariant.CUBIC:
            return sum(x**3 for x in moves)
        if self.alice_variant is ConstraintVariant.WEIGHTED:
            return sum((1 + ALICE_WEIGHT_STEP * i) * x for i, x in enumerate(moves))
        return sum(moves)

    def alice_limit(self, n: int) -> float:
        base = self.config.linear_multiplier * n
        if self.alice_variant is ConstraintVariant.WEIGHTED:
            return base * ALICE_WEIGHTED_LIMIT_FACTOR
        return base

    def alice_capacity(self, moves: Sequence[float], n: int) -> float:
        return max(0.0, self.alice_limit(n) - self.alice_value(moves))

    # -------------------------------------------------------------------------
    # Bazza
    # -------------------------------------------------------------------------

    def bazza_value(self, moves: Sequence[float]) -> float:
        if self.bazza_variant is ConstraintVariant.QUARTIC:
            return sum(x**4 for x in moves)
        if self.bazza_variant is ConstraintVariant.WEIGHTED:
            return sum((1 + BAZZA_WEIGHT_STEP * i) * x * x for i, x in enumerate(moves))
        return sum(x * x for x in moves)

    def bazza_limit(self, n: int) -> float:
        if self.bazza_variant is ConstraintVariant.QUARTIC:
            return float(n * n)
        if self.bazza_variant is ConstraintVariant.WEIGHTED:
            return n * BAZZA_WEIGHTED_LIMIT_FACTOR
        return float(n)

    def bazza_capacity(self, moves: Sequence[float], n: int) -> float:
        remaining = max(0.0, self.bazza_limit(n) - self.bazza_value(moves))
        if remaining <= 0:
            return 0.0
        if self.bazza_variant is ConstraintVariant.QUARTIC:
            return remaining**0.25
        return math.sqrt(remaining)

    # -------------------------------------------------------------------------
    # Player-generic interface
    # -------------------------------------------------------------------------

    def constraint_value(self, player: Player, moves: Sequence[float]) -> float:
        """Accumulated constraint value for a player over a move list."""
        if player is Player.ALICE:
            return self.alice_value(moves)
        return self.bazza_value(moves)

    def constraint_limit(self, player: Player, n: int) -> float:
        """Constraint limit for a player at round n."""
        if player is Player.ALICE:
            return self.alice_limit(n)
        return self.bazza_limit(n)

    def capacity(self, player: Player, moves: Sequence[float], n: int) -> float:
        """Remaining headroom for a player at round n, in move units."""
        if player is Player.ALICE:
            return self.alice_capacity(moves, n)
        return self.bazza_capacity(moves, n)

    def check(self, player: Player, moves: Sequence[float], n: int) -> ConstraintCheck:
        """Check a (tentative) move sequence against a player's constraint."""
        value = self.constraint_value(player, moves)
        limit = self.constraint_limit(player, n)
        return ConstraintCheck(valid=value <= limit + EPS, margin=limit - value)
