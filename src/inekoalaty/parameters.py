"""Numeric constants for the inekoalaty game.

This module is the SINGLE SOURCE OF TRUTH for the thresholds, tolerances and
policy coefficients used by the engine and the curve fitter.

Parameter Categories:
- Theory: the critical value and the tolerance band around it
- Strategy: strike round bounds and aggression bounds
- Constraints: weighting and limit multipliers for constraint variants
- Fitting: grid and refinement schedule for the power-law fit

Usage:
    from inekoalaty.parameters import CRITICAL_VALUE, EPS
"""

import math

# =============================================================================
# THEORY
# =============================================================================

CRITICAL_VALUE = 1 / math.sqrt(2)
"""Critical value lambda* = 1/sqrt(2) ~= 0.707107.

Above it Alice has a winning strategy, below it Bazza does. At exactly
lambda* neither player can force a win and the game can be drawn forever.
"""

EPS = 1e-10
"""Floating-point tolerance for constraint checks and capacity exhaustion.

A move sequence is valid iff value <= limit + EPS. Boundary moves that land
exactly on the limit must stay valid after accumulated rounding drift.
"""

NEAR_CRITICAL_BAND = 0.005
"""Half-width of the band around lambda* classified as near-critical.

delta > band: above critical, delta < -band: below critical, otherwise near.
"""

CRITICAL_MOVE_THRESHOLD = 0.5
"""A committed move larger than this is flagged as a critical move."""

# =============================================================================
# STRATEGY
# =============================================================================

MIN_STRIKE_ROUND = 10
MAX_STRIKE_ROUND = 50
"""Bounds on the strike round derived from ceil(1 / (2 * delta^2)).

Near-critical configurations always use MAX_STRIKE_ROUND.
"""

NEUTRAL_ALICE_AGGRESSION = 0.5
NEUTRAL_BAZZA_AGGRESSION = 0.8
AGGRESSION_SLOPE = 2.0
"""Aggression moves linearly with delta: base +/- AGGRESSION_SLOPE * delta."""

MAX_ALICE_AGGRESSION = 0.95
MIN_ALICE_AGGRESSION = 0.2
MAX_BAZZA_AGGRESSION = 0.99
MIN_BAZZA_AGGRESSION = 0.3
NEAR_CRITICAL_AGGRESSION = 0.7

RESERVE_BASE = 0.5
MIN_RESERVE_THRESHOLD = 0.1
"""reserve_threshold = max(MIN_RESERVE_THRESHOLD, RESERVE_BASE - |delta|)."""

ADAPTIVE_OBSERVATION_ROUNDS = 10
"""Adaptive Alice proposes 0 while the round index is below this value."""

ADAPTIVE_TRIGGER_MOVE = 0.1
"""Adaptive Bazza speeds up once any Alice move exceeded this value."""

# =============================================================================
# CONSTRAINTS
# =============================================================================

ALICE_WEIGHT_STEP = 0.1
BAZZA_WEIGHT_STEP = 0.05
"""Weighted variants use (1 + step * i) with i the zero-based list position."""

ALICE_WEIGHTED_LIMIT_FACTOR = 1.5
BAZZA_WEIGHTED_LIMIT_FACTOR = 1.2

# =============================================================================
# FITTING
# =============================================================================

MIN_FIT_DISTANCE = 1e-8
"""Transformed points with |lambda - ref| at or below this are discarded."""

MIN_BATCH_SIZE = 3
MIN_FIT_POINTS = 2

COARSE_D_FRACTIONS = (0.0, 0.2, 0.5, 0.8)
"""Offsets tried in the coarse grid, as fractions of the smallest y."""

COARSE_B_START = -3.0
COARSE_B_STOP = 0.5
COARSE_B_STEP = 0.2

REFINE_ROUNDS = 5
REFINE_STEPS = 30
REFINE_B_RADIUS = 0.5
REFINE_D_FRACTION = 0.3
REFINE_A_FRACTION = 0.3

FINE_ROUNDS = 3
FINE_STEPS = 50
FINE_B_RADIUS = 0.02
FINE_D_MIN_RADIUS = 0.5
FINE_D_FRACTION = 0.05
FINE_A_FRACTION = 0.02

MIN_REFIT_A = 0.001
"""Floor for the closed-form coefficient when b or d is perturbed."""

DEFAULT_CURVE_STEPS = 80
