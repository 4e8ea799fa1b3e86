"""Core game engine for inekoalaty.

This module implements the GameEngine class, which runs one complete game
between two policies and returns an immutable GameResult.

Round Sequence:
1. ADVANCE - Increment n; Alice acts on odd n, Bazza on even n
2. CAPACITY - Compute the acting player's remaining headroom
3. PROPOSE - Ask the acting player's policy for a move (0 if exhausted)
4. VALIDATE - Check the tentative sequence against the player's constraint
5. COMMIT or END - Commit and record, or record the violation and award
   the game to the opponent
6. CAP - Stop with a Draw once n reaches max_rounds
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from inekoalaty.config import get_max_rounds
from inekoalaty.engine.policies import MoveProposal, PolicyContext, get_policy
from inekoalaty.models.constraints import ConstraintModel, ConstraintVariant, Player
from inekoalaty.models.game import GameResult, MoveDetail, PlayerStyle, Winner
from inekoalaty.models.parameter_config import ParameterConfig
from inekoalaty.parameters import CRITICAL_MOVE_THRESHOLD, EPS

logger = logging.getLogger(__name__)


class GameEngine:
    """Runs the alternating-move game to a win, loss or draw.

    Usage:
        config = ParameterConfig.from_lambda(0.8)
        engine = GameEngine(config, max_rounds=50)
        result = engine.play()
        print(result.winner, result.total_rounds)

    The engine holds no state between calls to play(); every call replays
    the same deterministic game.
    """

    def __init__(
        self,
        config: ParameterConfig,
        alice_style: PlayerStyle = PlayerStyle.OPTIMAL,
        bazza_style: PlayerStyle = PlayerStyle.OPTIMAL,
        alice_constraint: ConstraintVariant = ConstraintVariant.STANDARD,
        bazza_constraint: ConstraintVariant = ConstraintVariant.STANDARD,
        max_rounds: Optional[int] = None,
    ):
        """Initialize the engine.

        Args:
            config: Strategy parameters for the lambda being played
            alice_style: Alice's policy
            bazza_style: Bazza's policy
            alice_constraint: Alice's constraint variant
            bazza_constraint: Bazza's constraint variant
            max_rounds: Round cap; reaching it without a violation is a Draw.
                If None, uses environment config.
        """
        self.config = config
        self.alice_style = alice_style
        self.bazza_style = bazza_style
        self.alice_constraint = alice_constraint
        self.bazza_constraint = bazza_constraint
        self.max_rounds = get_max_rounds() if max_rounds is None else max_rounds
        self.constraints = ConstraintModel(config, alice_constraint, bazza_constraint)
        self._policies = {
            Player.ALICE: get_policy(Player.ALICE, alice_style),
            Player.BAZZA: get_policy(Player.BAZZA, bazza_style),
        }

    def propose_move(
        self,
        player: Player,
        n: int,
        moves: Sequence[float],
        alice_moves: Sequence[float],
        bazza_moves: Sequence[float],
    ) -> MoveProposal:
        """Compute the acting player's move for round n.

        Args:
            player: Acting player
            n: 1-based round index
            moves: Committed shared sequence before this round
            alice_moves: Alice's committed moves
            bazza_moves: Bazza's committed moves
        """
        capacity = self.constraints.capacity(player, moves, n)
        if capacity <= EPS:
            return MoveProposal(0.0, "capacity exhausted")
        context = PolicyContext(
            config=self.config,
            n=n,
            capacity=capacity,
            alice_moves=tuple(alice_moves),
            bazza_moves=tuple(bazza_moves),
        )
        proposal = self._policies[player](context)
        # Moves are non-negative reals.
        return MoveProposal(max(0.0, proposal.move), proposal.reason)

    def play(self) -> GameResult:
        """Play one game to completion."""
        moves: list[float] = []
        alice_moves: list[float] = []
        bazza_moves: list[float] = []
        details: list[MoveDetail] = []
        critical_round = 0
        n = 0

        while n < self.max_rounds:
            n += 1
            player = Player.for_round(n)
            proposal = self.propose_move(player, n, moves, alice_moves, bazza_moves)
            tentative = [*moves, proposal.move]
            check = self.constraints.check(player, tentative, n)

            if not check.valid:
                details.append(self._detail(n, player, proposal, tentative, is_critical=True))
                winner = Winner.of(player.opponent)
                reason = f"{player.value} violated the constraint in round {n}"
                logger.debug(f"Round {n}: {player.value} proposed {proposal.move:.6f}, margin {check.margin:.3e}")
                return self._result(winner, n, tentative, details, reason, critical_round)

            moves.append(proposal.move)
            if player is Player.ALICE:
                alice_moves.append(proposal.move)
            else:
                bazza_moves.append(proposal.move)

            logger.debug(f"Round {n}: {player.value} plays {proposal.move:.6f} ({proposal.reason})")
            # Only Alice's moves count as strikes.
            is_critical = player is Player.ALICE and proposal.move > CRITICAL_MOVE_THRESHOLD
            if is_critical and critical_round == 0:
                critical_round = n
            details.append(self._detail(n, player, proposal, moves, is_critical=is_critical))

        return self._result(Winner.DRAW, n, moves, details, "reached the maximum number of rounds", critical_round)

    def _detail(
        self,
        n: int,
        player: Player,
        proposal: MoveProposal,
        moves: Sequence[float],
        is_critical: bool,
    ) -> MoveDetail:
        return MoveDetail(
            round=n,
            player=player,
            move=proposal.move,
            sum_linear=sum(moves),
            sum_square=sum(x * x for x in moves),
            sum_cube=sum(x**3 for x in moves),
            sum_quartic=sum(x**4 for x in moves),
            alice_capacity=self.constraints.alice_capacity(moves, n),
            bazza_capacity=self.constraints.bazza_capacity(moves, n),
            linear_limit=self.config.linear_multiplier * n,
            quad_limit=float(n),
            reason=proposal.reason,
            is_critical=is_critical,
        )

    def _result(
        self,
        winner: Winner,
        rounds: int,
        moves: Sequence[float],
        details: list[MoveDetail],
        reason: str,
        critical_round: int,
    ) -> GameResult:
        prediction = self.config.predicted_winner()
        match_theory = winner.value == prediction or (prediction == "Balance" and winner is Winner.DRAW)
        logger.info(
            f"lambda={self.config.lambda_value:.6f}: {winner.value} after {rounds} rounds "
            f"(predicted {prediction}, match={match_theory})"
        )
        return GameResult(
            winner=winner,
            total_rounds=rounds,
            moves=tuple(moves),
            move_details=tuple(details),
            winning_reason=reason,
            theoretical_prediction=prediction,
            match_theory=match_theory,
            critical_round=critical_round,
            lambda_value=self.config.lambda_value,
            alice_style=self.alice_style,
            bazza_style=self.bazza_style,
            alice_constraint=self.alice_constraint,
            bazza_constraint=self.bazza_constraint,
        )


def run_game(
    lambda_value: float,
    alice_style: PlayerStyle = PlayerStyle.OPTIMAL,
    bazza_style: PlayerStyle = PlayerStyle.OPTIMAL,
    alice_constraint: ConstraintVariant = ConstraintVariant.STANDARD,
    bazza_constraint: ConstraintVariant = ConstraintVariant.STANDARD,
    max_rounds: Optional[int] = None,
) -> GameResult:
    """Build a configuration for lambda and play one game.

    Args:
        lambda_value: The game parameter
        alice_style: Alice's policy
        bazza_style: Bazza's policy
        alice_constraint: Alice's constraint variant
        bazza_constraint: Bazza's constraint variant
        max_rounds: Round cap (None uses environment config)

    Returns:
        The finished GameResult
    """
    engine = GameEngine(
        ParameterConfig.from_lambda(lambda_value),
        alice_style=alice_style,
        bazza_style=bazza_style,
        alice_constraint=alice_constraint,
        bazza_constraint=bazza_constraint,
        max_rounds=max_rounds,
    )
    return engine.play()
