"""inekoalaty game models.

This module exports the core data structures for the game.
"""

from .constraints import (
    ALICE_VARIANTS,
    BAZZA_VARIANTS,
    ConstraintCheck,
    ConstraintModel,
    ConstraintVariant,
    Player,
    parse_variant,
)
from .game import (
    GameResult,
    MoveDetail,
    PlayerStyle,
    Winner,
    parse_style,
)
from .parameter_config import (
    ParameterConfig,
    compute_strike_round,
    derive_parameters,
)

__all__ = [
    # Enums
    "Player",
    "PlayerStyle",
    "ConstraintVariant",
    "Winner",
    # Configuration
    "ParameterConfig",
    "compute_strike_round",
    "derive_parameters",
    # Constraints
    "ConstraintModel",
    "ConstraintCheck",
    "ALICE_VARIANTS",
    "BAZZA_VARIANTS",
    "parse_variant",
    # Records
    "MoveDetail",
    "GameResult",
    "parse_style",
]
