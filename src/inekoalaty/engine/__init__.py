"""Game engine module for inekoalaty.

This module contains the core game logic including:
- policies: Move-selection policies for each player style
- game_engine: Core round loop and result assembly
- diagnostics: Post-game statistics and the Cauchy-Schwarz check

Usage:
    from inekoalaty.engine import GameEngine, run_game
    from inekoalaty.models import ParameterConfig, PlayerStyle

    engine = GameEngine(ParameterConfig.from_lambda(1.0), max_rounds=50)
    result = engine.play()

    # Or in one call
    result = run_game(0.5, bazza_style=PlayerStyle.AGGRESSIVE)
"""

from inekoalaty.engine.diagnostics import (
    CauchySchwarzCheck,
    MoveStatistics,
    cauchy_schwarz,
    summarize,
)
from inekoalaty.engine.game_engine import (
    GameEngine,
    run_game,
)
from inekoalaty.engine.policies import (
    ALICE_POLICIES,
    BAZZA_POLICIES,
    MoveProposal,
    Policy,
    PolicyContext,
    get_policy,
)

__all__ = [
    # Game engine
    "GameEngine",
    "run_game",
    # Policies
    "Policy",
    "PolicyContext",
    "MoveProposal",
    "ALICE_POLICIES",
    "BAZZA_POLICIES",
    "get_policy",
    # Diagnostics
    "CauchySchwarzCheck",
    "MoveStatistics",
    "cauchy_schwarz",
    "summarize",
]
