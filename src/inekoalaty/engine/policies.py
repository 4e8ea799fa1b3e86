"""Move-selection policies for Alice and Bazza.

Each policy is a deterministic function of the round index, the acting
player's capacity and both players' move histories. The engine computes the
capacity first and forces a 0 move when it is exhausted, so policies only
run with positive capacity.

Registries:
    ALICE_POLICIES / BAZZA_POLICIES map PlayerStyle to a policy function.
    get_policy(player, style) looks one up.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from inekoalaty.models.constraints import Player
from inekoalaty.models.game import PlayerStyle
from inekoalaty.models.parameter_config import ParameterConfig
from inekoalaty.parameters import (
    ADAPTIVE_OBSERVATION_ROUNDS,
    ADAPTIVE_TRIGGER_MOVE,
    CRITICAL_VALUE,
)

SQRT2 = math.sqrt(2)


@dataclass(frozen=True)
class PolicyContext:
    """Everything a policy may look at when choosing a move.

    Attributes:
        config: Strategy parameters for this lambda
        n: Current 1-based round index
        capacity: Acting player's remaining headroom (> EPS)
        alice_moves: Alice's committed moves, oldest first
        bazza_moves: Bazza's committed moves, oldest first
    """

    config: ParameterConfig
    n: int
    capacity: float
    alice_moves: tuple[float, ...] = ()
    bazza_moves: tuple[float, ...] = ()

    @property
    def last_alice_move(self) -> float:
        return self.alice_moves[-1] if self.alice_moves else 0.0

    @property
    def theoretical_max(self) -> float:
        """Largest x with last_alice^2 + x^2 <= 2."""
        last = self.last_alice_move
        return math.sqrt(max(0.0, 2 - last * last))

    @property
    def bazza_sum_sq(self) -> float:
        return sum(x * x for x in self.bazza_moves)

    @property
    def bazza_average(self) -> float:
        if not self.bazza_moves:
            return 0.0
        return sum(self.bazza_moves) / len(self.bazza_moves)


@dataclass(frozen=True)
class MoveProposal:
    """A proposed move and the rationale behind it."""

    move: float
    reason: str


Policy = Callable[[PolicyContext], MoveProposal]


# =============================================================================
# Alice
# =============================================================================


def alice_conservative(ctx: PolicyContext) -> MoveProposal:
    """Never spend anything."""
    return MoveProposal(0.0, "conservative: choose 0")


def alice_aggressive(ctx: PolicyContext) -> MoveProposal:
    return MoveProposal(min(ctx.capacity * 0.95, SQRT2 * 0.9), "aggressive")


def alice_balanced(ctx: PolicyContext) -> MoveProposal:
    return MoveProposal(min(ctx.capacity * 0.3, 0.7), "balanced")


def alice_adaptive(ctx: PolicyContext) -> MoveProposal:
    """Watch Bazza for the opening rounds, then track his average move."""
    if ctx.n < ADAPTIVE_OBSERVATION_ROUNDS:
        return MoveProposal(0.0, "adaptive: observing")
    return MoveProposal(min(ctx.capacity * 0.6, ctx.bazza_average + 0.1), "adaptive")


def alice_optimal(ctx: PolicyContext) -> MoveProposal:
    """Theory-matching Alice.

    Above critical, Alice banks her linear budget until round
    2 * strike_round + 1, then strikes with a move large enough to push
    Bazza's sum of squares past his next limit. Below critical she can only
    hold at 0. Near critical she plays up to lambda*.
    """
    config = ctx.config
    if config.above_critical:
        attack_round = config.attack_round
        if ctx.n < attack_round:
            return MoveProposal(0.0, f"reserve phase (waiting for round {attack_round})")
        remaining_for_bazza = (ctx.n + 1) - ctx.bazza_sum_sq
        if remaining_for_bazza > 0:
            target_x = math.sqrt(remaining_for_bazza + 0.5)
            strike = min(target_x * config.alice_aggression, ctx.capacity * config.alice_aggression)
            if strike > config.reserve_threshold:
                return MoveProposal(strike, "strike")
        return MoveProposal(0.0, "continue waiting")
    if config.below_critical:
        return MoveProposal(0.0, "lambda < lambda*: hold at 0")
    return MoveProposal(min(ctx.capacity * config.alice_aggression, CRITICAL_VALUE), "balance")


# =============================================================================
# Bazza
# =============================================================================


def bazza_conservative(ctx: PolicyContext) -> MoveProposal:
    """Never spend anything."""
    return MoveProposal(0.0, "conservative: choose 0")


def bazza_aggressive(ctx: PolicyContext) -> MoveProposal:
    return MoveProposal(min(ctx.capacity * 0.9, ctx.theoretical_max * 0.9), "aggressive")


def bazza_balanced(ctx: PolicyContext) -> MoveProposal:
    return MoveProposal(ctx.capacity * 0.7, "balanced")


def bazza_adaptive(ctx: PolicyContext) -> MoveProposal:
    """Speed up once Alice has shown a non-trivial move."""
    if any(x > ADAPTIVE_TRIGGER_MOVE for x in ctx.alice_moves):
        return MoveProposal(min(ctx.capacity * 0.9, ctx.theoretical_max * 0.9), "adaptive: accelerate")
    return MoveProposal(min(ctx.capacity * 0.6, ctx.theoretical_max * 0.6), "adaptive")


def bazza_optimal(ctx: PolicyContext) -> MoveProposal:
    """Maximize the pressure on Alice's linear budget in every regime."""
    aggression = ctx.config.bazza_aggression
    return MoveProposal(
        min(ctx.capacity * aggression, ctx.theoretical_max * aggression),
        "maximize",
    )


ALICE_POLICIES: dict[PlayerStyle, Policy] = {
    PlayerStyle.CONSERVATIVE: alice_conservative,
    PlayerStyle.AGGRESSIVE: alice_aggressive,
    PlayerStyle.BALANCED: alice_balanced,
    PlayerStyle.ADAPTIVE: alice_adaptive,
    PlayerStyle.OPTIMAL: alice_optimal,
}

BAZZA_POLICIES: dict[PlayerStyle, Policy] = {
    PlayerStyle.CONSERVATIVE: bazza_conservative,
    PlayerStyle.AGGRESSIVE: bazza_aggressive,
    PlayerStyle.BALANCED: bazza_balanced,
    PlayerStyle.ADAPTIVE: bazza_adaptive,
    PlayerStyle.OPTIMAL: bazza_optimal,
}


def get_policy(player: Player, style: PlayerStyle) -> Policy:
    """Look up the policy function for a player and style.

    Raises:
        ValueError: If no policy is registered for the style
    """
    registry = ALICE_POLICIES if player is Player.ALICE else BAZZA_POLICIES
    try:
        return registry[style]
    except KeyError:
        raise ValueError(
            f"No {player.value} policy for style {style!r}. "
            f"Valid styles: {[s.value for s in registry]}"
        ) from None
