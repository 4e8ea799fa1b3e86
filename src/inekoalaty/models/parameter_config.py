"""Per-lambda strategy configuration.

ParameterConfig is a frozen value derived from a single real lambda. It
classifies lambda relative to the critical value and derives the strike
round, aggression levels and reserve threshold used by the optimal policy.

Formulas (delta = lambda - lambda*):
- above critical:  delta >  0.005
- below critical:  delta < -0.005
- near critical:   otherwise
- strike_round:    -1 below, 50 near, clamp(ceil(1 / (2 * delta^2)), 10, 50) above
- aggression:      Alice 0.5 + 2*delta, Bazza 0.8 - 2*delta, saturating;
                   fixed 0.7 / 0.7 near critical
- reserve:         max(0.1, 0.5 - |delta|)
"""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator

from inekoalaty.parameters import (
    AGGRESSION_SLOPE,
    CRITICAL_VALUE,
    MAX_ALICE_AGGRESSION,
    MAX_BAZZA_AGGRESSION,
    MAX_STRIKE_ROUND,
    MIN_ALICE_AGGRESSION,
    MIN_BAZZA_AGGRESSION,
    MIN_RESERVE_THRESHOLD,
    MIN_STRIKE_ROUND,
    NEAR_CRITICAL_AGGRESSION,
    NEAR_CRITICAL_BAND,
    NEUTRAL_ALICE_AGGRESSION,
    NEUTRAL_BAZZA_AGGRESSION,
    RESERVE_BASE,
)

Status = Literal["alice", "bazza", "balance"]
Prediction = Literal["Alice", "Bazza", "Balance"]


def compute_strike_round(delta: float) -> int:
    """Strike round for a configuration strictly above critical.

    Args:
        delta: lambda - lambda*

    Returns:
        ceil(1 / (2 * delta^2)) clamped to [10, 50]; 50 when delta is
        numerically zero.
    """
    magnitude = abs(delta)
    k = math.ceil(1 / (2 * magnitude * magnitude)) if magnitude > 1e-6 else MAX_STRIKE_ROUND
    return max(MIN_STRIKE_ROUND, min(k, MAX_STRIKE_ROUND))


def derive_parameters(lambda_value: float) -> dict[str, Any]:
    """Derive every ParameterConfig field from lambda.

    Pure function; any finite lambda is accepted.
    """
    delta = lambda_value - CRITICAL_VALUE
    above = delta > NEAR_CRITICAL_BAND
    below = delta < -NEAR_CRITICAL_BAND
    near = not above and not below

    if below:
        strike_round = -1
    elif near:
        strike_round = MAX_STRIKE_ROUND
    else:
        strike_round = compute_strike_round(delta)

    if above:
        alice_aggression = min(MAX_ALICE_AGGRESSION, NEUTRAL_ALICE_AGGRESSION + delta * AGGRESSION_SLOPE)
        bazza_aggression = max(MIN_BAZZA_AGGRESSION, NEUTRAL_BAZZA_AGGRESSION - delta * AGGRESSION_SLOPE)
    elif below:
        alice_aggression = max(MIN_ALICE_AGGRESSION, NEUTRAL_ALICE_AGGRESSION + delta * AGGRESSION_SLOPE)
        bazza_aggression = min(MAX_BAZZA_AGGRESSION, NEUTRAL_BAZZA_AGGRESSION - delta * AGGRESSION_SLOPE)
    else:
        alice_aggression = NEAR_CRITICAL_AGGRESSION
        bazza_aggression = NEAR_CRITICAL_AGGRESSION

    return {
        "lambda_value": lambda_value,
        "delta_from_critical": delta,
        "above_critical": above,
        "below_critical": below,
        "near_critical": near,
        "strike_round": strike_round,
        "alice_aggression": alice_aggression,
        "bazza_aggression": bazza_aggression,
        "reserve_threshold": max(MIN_RESERVE_THRESHOLD, RESERVE_BASE - abs(delta)),
        "linear_multiplier": lambda_value,
    }


class ParameterConfig(BaseModel):
    """Strategy parameters derived from lambda.

    Only lambda_value is an input; every other field is recomputed from it
    on construction, so ParameterConfig(lambda_value=0.8) and
    ParameterConfig.from_lambda(0.8) are equivalent.

    Attributes:
        lambda_value: The game parameter (expected ~[0.3, 1.5], not clamped)
        delta_from_critical: lambda - lambda*
        above_critical: delta > 0.005
        below_critical: delta < -0.005
        near_critical: |delta| <= 0.005
        strike_round: Round index after which optimal Alice attacks (-1 = never)
        alice_aggression: Fraction of capacity optimal Alice commits
        bazza_aggression: Fraction of capacity optimal Bazza commits
        reserve_threshold: Smallest strike optimal Alice bothers to make
        linear_multiplier: Slope of Alice's linear limit (equals lambda)
    """

    model_config = ConfigDict(frozen=True)

    lambda_value: float
    delta_from_critical: float
    above_critical: bool
    below_critical: bool
    near_critical: bool
    strike_round: int
    alice_aggression: float
    bazza_aggression: float
    reserve_threshold: float
    linear_multiplier: float

    @model_validator(mode="before")
    @classmethod
    def derive_from_lambda(cls, data: Any) -> Any:
        """Fill derived fields from lambda_value."""
        if isinstance(data, dict) and "lambda_value" in data:
            return derive_parameters(float(data["lambda_value"]))
        return data

    @classmethod
    def from_lambda(cls, lambda_value: float) -> ParameterConfig:
        """Build the configuration for a lambda value."""
        return cls(lambda_value=lambda_value)

    @property
    def attack_round(self) -> int:
        """First round on which optimal Alice may strike (-1 if never)."""
        if self.strike_round < 0:
            return -1
        return 2 * self.strike_round + 1

    def status(self) -> Status:
        """Which side the configuration favours."""
        if self.near_critical:
            return "balance"
        return "alice" if self.above_critical else "bazza"

    def predicted_winner(self) -> Prediction:
        """Theoretical winner for this lambda."""
        if self.above_critical:
            return "Alice"
        if self.below_critical:
            return "Bazza"
        return "Balance"
