"""Power-law curve fitting for game length near the critical value.

Game length is modelled on each side of the reference point as

    rounds ~= a * |lambda - ref|^b + d

and fitted by minimizing RMSE over the transformed points
(x = |lambda - ref|, y = total_rounds). The error surface is non-convex in b,
so the fit runs in three stages:

1. Coarse grid over d in {0, 0.2, 0.5, 0.8} * min(y) and b in [-3.0, 0.5]
   step 0.2, with a solved in closed form for each (b, d):
       a = sum((y - d) * x^b) / sum(x^(2b))
2. Five coordinate-descent rounds over b, d, a with radii halving each
   round (30 steps per sweep). Moving b or d re-solves a.
3. Three fine rounds with fixed small radii (50 steps per sweep).

A perturbed value is accepted only when it strictly lowers RMSE.

Alice's side uses games Alice won with lambda > ref; Bazza's side uses games
Bazza won with lambda < ref.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from pydantic import BaseModel, ConfigDict

from inekoalaty.models.game import GameResult, Winner
from inekoalaty.parameters import (
    COARSE_B_START,
    COARSE_B_STEP,
    COARSE_B_STOP,
    COARSE_D_FRACTIONS,
    CRITICAL_VALUE,
    DEFAULT_CURVE_STEPS,
    EPS,
    FINE_A_FRACTION,
    FINE_B_RADIUS,
    FINE_D_FRACTION,
    FINE_D_MIN_RADIUS,
    FINE_ROUNDS,
    FINE_STEPS,
    MIN_BATCH_SIZE,
    MIN_FIT_DISTANCE,
    MIN_FIT_POINTS,
    MIN_REFIT_A,
    REFINE_A_FRACTION,
    REFINE_B_RADIUS,
    REFINE_D_FRACTION,
    REFINE_ROUNDS,
    REFINE_STEPS,
)

logger = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass
class FitParams:
    """Working parameters of the optimizer."""

    a: float
    b: float
    d: float
    error: float = math.inf


class FitModel(BaseModel):
    """Fitted power law for one side of the reference point.

    Attributes:
        a: Leading coefficient (always > 0)
        b: Exponent
        d: Offset
        error: RMSE over the transformed points
        r2: Coefficient of determination, floored at 0
        n: Number of transformed points used
    """

    model_config = ConfigDict(frozen=True)

    a: float
    b: float
    d: float
    error: float
    r2: float
    n: int

    def predict(self, distance: float) -> float:
        """Predicted rounds at |lambda - ref| = distance."""
        return self.a * _power(distance, self.b) + self.d


class PowerLawFits(BaseModel):
    """Fits for both sides of the reference point; None means no fit."""

    model_config = ConfigDict(frozen=True)

    alice: FitModel | None = None
    bazza: FitModel | None = None
    ref_point: float = CRITICAL_VALUE


@dataclass(frozen=True)
class CurvePoint:
    """One sample of a fitted curve."""

    lambda_value: float
    fitted: float


def _power(x: float, b: float) -> float:
    try:
        return x**b
    except (OverflowError, ZeroDivisionError):
        return math.inf


def _rmse(points: Sequence[Point], a: float, b: float, d: float) -> float:
    total = 0.0
    for x, y in points:
        pred = a * _power(x, b) + d
        total += (y - pred) ** 2
    return math.sqrt(total / len(points))


def _solve_a(points: Sequence[Point], b: float, d: float) -> tuple[float, float]:
    """Numerator and denominator of the least-squares a for fixed (b, d)."""
    num = 0.0
    den = 0.0
    for x, y in points:
        xb = _power(x, b)
        if math.isfinite(xb):
            num += (y - d) * xb
            den += xb * xb
    return num, den


def _coarse_b_grid() -> list[float]:
    count = int(math.floor((COARSE_B_STOP - COARSE_B_START) / COARSE_B_STEP + 1e-9)) + 1
    return [COARSE_B_START + k * COARSE_B_STEP for k in range(count)]


def transform_points(
    results: Iterable[GameResult],
    winner: Winner,
    ref_point: float = CRITICAL_VALUE,
) -> list[Point]:
    """Select one side's games and map them to (|lambda - ref|, rounds).

    Alice's side keeps Alice wins above ref; Bazza's side keeps Bazza wins
    below ref. Points within MIN_FIT_DISTANCE of ref are dropped.
    """
    points = []
    for result in results:
        if result.winner is not winner:
            continue
        if winner is Winner.ALICE and not result.lambda_value > ref_point:
            continue
        if winner is Winner.BAZZA and not result.lambda_value < ref_point:
            continue
        x = abs(result.lambda_value - ref_point)
        if x > MIN_FIT_DISTANCE:
            points.append((x, float(result.total_rounds)))
    return points


def coarse_search(points: Sequence[Point]) -> FitParams | None:
    """Grid search over (b, d) with a solved in closed form."""
    min_y = min(y for _, y in points)
    best: FitParams | None = None
    for fraction in COARSE_D_FRACTIONS:
        d = min_y * fraction
        for b in _coarse_b_grid():
            num, den = _solve_a(points, b, d)
            a = num / den if den > 0 else 1.0
            if a <= 0:
                continue
            error = _rmse(points, a, b, d)
            if error < (best.error if best else math.inf):
                best = FitParams(a=a, b=b, d=d, error=error)
    return best


def refine_parameter(
    points: Sequence[Point],
    fit: FitParams,
    param: str,
    radius: float,
    steps: int,
) -> None:
    """Sweep one parameter over +/- radius and keep strict improvements.

    Updates fit in place. When b or d moves, a is re-solved (floored at
    MIN_REFIT_A) before the error is measured.
    """
    base = getattr(fit, param)
    best_val = base
    best_err = fit.error
    for i in range(steps + 1):
        test_val = base - radius + (2 * radius * i / steps)
        trial = replace(fit, **{param: test_val})
        if param != "a":
            num, den = _solve_a(points, trial.b, trial.d)
            if den > 0:
                trial.a = max(MIN_REFIT_A, num / den)
        err = _rmse(points, trial.a, trial.b, trial.d)
        if err < best_err:
            best_err = err
            best_val = test_val
            if param != "a":
                fit.a = trial.a
    setattr(fit, param, best_val)
    fit.error = best_err


def fit_side(points: Sequence[Point]) -> FitModel | None:
    """Fit one side's transformed points, or None with fewer than 2."""
    if len(points) < MIN_FIT_POINTS:
        return None

    fit = coarse_search(points)
    if fit is None:
        return None

    ys = [y for _, y in points]
    min_y = min(ys)
    max_y = max(ys)

    for round_idx in range(REFINE_ROUNDS):
        scale = 0.5**round_idx
        refine_parameter(points, fit, "b", REFINE_B_RADIUS * scale, REFINE_STEPS)
        refine_parameter(points, fit, "d", (max_y - min_y) * REFINE_D_FRACTION * scale, REFINE_STEPS)
        refine_parameter(points, fit, "a", fit.a * REFINE_A_FRACTION * scale, REFINE_STEPS)

    for _ in range(FINE_ROUNDS):
        refine_parameter(points, fit, "b", FINE_B_RADIUS, FINE_STEPS)
        refine_parameter(points, fit, "d", max(FINE_D_MIN_RADIUS, min_y * FINE_D_FRACTION), FINE_STEPS)
        refine_parameter(points, fit, "a", fit.a * FINE_A_FRACTION, FINE_STEPS)

    y_mean = sum(ys) / len(ys)
    ss_tot = sum((y - y_mean) ** 2 for y in ys)
    ss_res = sum((y - (fit.a * _power(x, fit.b) + fit.d)) ** 2 for x, y in points)
    r2 = max(0.0, 1 - ss_res / (ss_tot + EPS))

    return FitModel(a=fit.a, b=fit.b, d=fit.d, error=fit.error, r2=r2, n=len(points))


def fit_power_law(results: Sequence[GameResult], ref_point: float = CRITICAL_VALUE) -> PowerLawFits:
    """Fit the power law separately on each side of ref_point.

    Args:
        results: Batch of finished games
        ref_point: Threshold the distance is measured from

    Returns:
        PowerLawFits; a side is None when it has fewer than two usable
        points. Batches with fewer than three games yield no fits.
    """
    if len(results) < MIN_BATCH_SIZE:
        logger.info(f"Skipping fit: {len(results)} results (need {MIN_BATCH_SIZE})")
        return PowerLawFits(ref_point=ref_point)

    alice = fit_side(transform_points(results, Winner.ALICE, ref_point))
    bazza = fit_side(transform_points(results, Winner.BAZZA, ref_point))
    for name, fit in (("Alice", alice), ("Bazza", bazza)):
        if fit is None:
            logger.info(f"{name} side: insufficient data for a fit")
        else:
            logger.info(f"{name} side: {format_formula(fit)} (R2={fit.r2:.4f}, n={fit.n})")
    return PowerLawFits(alice=alice, bazza=bazza, ref_point=ref_point)


def generate_fit_curve(
    fit: FitModel | None,
    start: float,
    end: float,
    steps: int = DEFAULT_CURVE_STEPS,
    ref_point: float = CRITICAL_VALUE,
) -> list[CurvePoint]:
    """Sample a fitted model over [start, end].

    Points within MIN_FIT_DISTANCE of ref_point and non-finite or
    non-positive predictions are skipped.
    """
    if fit is None or steps <= 0 or end < start:
        return []
    step = (end - start) / steps
    points = []
    for i in range(steps + 1):
        lam = start + i * step
        delta = abs(lam - ref_point)
        if delta <= MIN_FIT_DISTANCE:
            continue
        fitted = fit.predict(delta)
        if math.isfinite(fitted) and fitted > 0:
            points.append(CurvePoint(lambda_value=lam, fitted=fitted))
    return points


def format_formula(fit: FitModel | None) -> str:
    """Render a fit as n ~= a x |lambda - lambda*|^(b) + d."""
    if fit is None:
        return "no fit"
    return f"n ≈ {fit.a:.6f} × |λ − λ*|^({fit.b:.6f}) + {fit.d:.4f}"
