"""Game record models for inekoalaty.

MoveDetail is the per-round snapshot recorded by the engine; GameResult is
the terminal record of a whole game. Both are frozen once produced.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from inekoalaty.models.constraints import ConstraintVariant, Player


class PlayerStyle(Enum):
    """Move-selection policy family for a player."""

    CONSERVATIVE = "conservative"
    AGGRESSIVE = "aggressive"
    BALANCED = "balanced"
    ADAPTIVE = "adaptive"
    OPTIMAL = "optimal"


def parse_style(name: PlayerStyle | str) -> PlayerStyle:
    """Resolve a style from its tag.

    Raises:
        ValueError: If the tag is unknown
    """
    if isinstance(name, PlayerStyle):
        return name
    try:
        return PlayerStyle(name.strip().lower())
    except ValueError:
        valid = [s.value for s in PlayerStyle]
        raise ValueError(f"Unknown player style: {name}. Valid styles: {valid}") from None


class Winner(Enum):
    """Outcome of a game."""

    ALICE = "Alice"
    BAZZA = "Bazza"
    DRAW = "Draw"

    @classmethod
    def of(cls, player: Player) -> Winner:
        return cls.ALICE if player is Player.ALICE else cls.BAZZA


class MoveDetail(BaseModel):
    """Snapshot of the game after one round.

    Running sums cover the whole sequence up to and including this round's
    move (the rejected move, on a terminal round).

    Attributes:
        round: 1-based round index
        player: Acting player
        move: Move value proposed this round
        sum_linear: sum(x)
        sum_square: sum(x^2)
        sum_cube: sum(x^3)
        sum_quartic: sum(x^4)
        alice_capacity: Alice's remaining headroom at this point
        bazza_capacity: Bazza's remaining headroom at this point
        linear_limit: lambda * n
        quad_limit: n
        reason: Policy rationale
        is_critical: Alice move > 0.5, or the move that ended the game
    """

    model_config = ConfigDict(frozen=True)

    round: int = Field(ge=1)
    player: Player
    move: float = Field(ge=0.0)
    sum_linear: float
    sum_square: float
    sum_cube: float
    sum_quartic: float
    alice_capacity: float
    bazza_capacity: float
    linear_limit: float
    quad_limit: float
    reason: str
    is_critical: bool = False


class GameResult(BaseModel):
    """Terminal record of a game.

    Attributes:
        winner: Alice, Bazza or Draw
        total_rounds: Rounds played (never above the configured cap)
        moves: Full move sequence, index 0 = round 1
        move_details: One MoveDetail per round
        winning_reason: Free-text termination reason
        theoretical_prediction: "Alice", "Bazza" or "Balance"
        match_theory: Winner equals prediction, or Balance ended in a Draw
        critical_round: First round with a committed Alice move > 0.5 (0 if none)
        lambda_value: lambda the game was played at
        alice_style / bazza_style: Policies used
        alice_constraint / bazza_constraint: Constraint variants used
    """

    model_config = ConfigDict(frozen=True)

    winner: Winner
    total_rounds: int = Field(ge=0)
    moves: tuple[float, ...]
    move_details: tuple[MoveDetail, ...]
    winning_reason: str
    theoretical_prediction: str
    match_theory: bool
    critical_round: int = Field(default=0, ge=0)
    lambda_value: float
    alice_style: PlayerStyle = PlayerStyle.OPTIMAL
    bazza_style: PlayerStyle = PlayerStyle.OPTIMAL
    alice_constraint: ConstraintVariant = ConstraintVariant.STANDARD
    bazza_constraint: ConstraintVariant = ConstraintVariant.STANDARD

    @property
    def alice_moves(self) -> list[float]:
        return list(self.moves[0::2])

    @property
    def bazza_moves(self) -> list[float]:
        return list(self.moves[1::2])

    def to_dict(self) -> dict:
        """Convert to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")
