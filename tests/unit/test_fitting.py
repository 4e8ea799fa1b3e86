"""Tests for power-law fitting of game length near lambda*.

Tests verify:
1. Small batches and thin sides produce no fit
2. Point selection per side and the near-ref cutoff
3. Recovery of a known synthetic power law
4. Curve sampling and formula rendering
"""

import math

import pytest

from inekoalaty.analysis.fitting import (
    FitModel,
    FitParams,
    _rmse,
    fit_power_law,
    fit_side,
    format_formula,
    generate_fit_curve,
    refine_parameter,
    transform_points,
)
from inekoalaty.models import GameResult, Winner
from inekoalaty.parameters import CRITICAL_VALUE


def make_result(lambda_value, winner, rounds):
    """Minimal GameResult carrying only what fitting reads."""
    return GameResult(
        winner=winner,
        total_rounds=rounds,
        moves=(),
        move_details=(),
        winning_reason="synthetic",
        theoretical_prediction="Balance",
        match_theory=False,
        lambda_value=lambda_value,
    )


def synthetic_points(a=2.0, b=-1.0, d=5.0, count=20):
    points = []
    for k in range(1, count + 1):
        x = 0.01 * k
        noise = 1 + 0.005 * (-1) ** k
        points.append((x, (a * x**b + d) * noise))
    return points


class TestInsufficientData:
    def test_batch_smaller_than_three(self):
        results = [make_result(1.0, Winner.ALICE, 24), make_result(0.9, Winner.ALICE, 30)]
        fits = fit_power_law(results)
        assert fits.alice is None
        assert fits.bazza is None
        assert fits.ref_point == CRITICAL_VALUE

    def test_side_with_single_point(self):
        results = [
            make_result(1.0, Winner.ALICE, 24),
            make_result(0.5, Winner.BAZZA, 5),
            make_result(0.75, Winner.DRAW, 100),
        ]
        fits = fit_power_law(results)
        assert fits.alice is None
        assert fits.bazza is None

    def test_fit_side_needs_two_points(self):
        assert fit_side([]) is None
        assert fit_side([(0.1, 10.0)]) is None


class TestTransformPoints:
    def test_side_selection(self):
        results = [
            make_result(1.0, Winner.ALICE, 24),
            make_result(0.6, Winner.ALICE, 40),  # Alice win below ref: ignored
            make_result(0.5, Winner.BAZZA, 5),
            make_result(0.9, Winner.DRAW, 100),
        ]
        alice = transform_points(results, Winner.ALICE)
        assert alice == [(pytest.approx(1.0 - CRITICAL_VALUE), 24.0)]
        bazza = transform_points(results, Winner.BAZZA)
        assert bazza == [(pytest.approx(CRITICAL_VALUE - 0.5), 5.0)]

    def test_points_at_ref_dropped(self):
        results = [make_result(0.8 + 1e-9, Winner.ALICE, 90)]
        assert transform_points(results, Winner.ALICE, ref_point=0.8) == []


class TestFitting:
    def test_recovers_synthetic_power_law(self):
        fit = fit_side(synthetic_points())
        assert fit is not None
        assert fit.a > 0
        assert fit.b == pytest.approx(-1.0, abs=0.1)
        assert fit.r2 > 0.9
        assert fit.n == 20

    def test_fit_from_game_results(self):
        results = []
        for x, y in synthetic_points():
            results.append(make_result(CRITICAL_VALUE + x, Winner.ALICE, round(y)))
            results.append(make_result(CRITICAL_VALUE - x, Winner.BAZZA, round(y)))
        fits = fit_power_law(results)
        assert fits.alice is not None
        assert fits.bazza is not None
        assert fits.alice.n == 20
        assert fits.bazza.n == 20
        assert fits.alice.b == pytest.approx(-1.0, abs=0.1)

    def test_r2_is_bounded(self):
        fit = fit_side([(0.1, 10.0), (0.2, 30.0), (0.3, 10.0)])
        assert fit is not None
        assert 0.0 <= fit.r2 <= 1.0

    def test_refine_keeps_optimum(self):
        points = [(0.01 * k, 2.0 / (0.01 * k) + 5.0) for k in range(1, 11)]
        fit = FitParams(a=2.0, b=-1.0, d=5.0)
        fit.error = _rmse(points, fit.a, fit.b, fit.d)
        refine_parameter(points, fit, "a", 0.04, 50)
        assert fit.a == pytest.approx(2.0, rel=1e-6)
        assert fit.error == pytest.approx(0.0, abs=1e-6)

    def test_deterministic(self):
        points = synthetic_points()
        assert fit_side(points) == fit_side(points)


class TestFitCurve:
    def test_no_fit(self):
        assert generate_fit_curve(None, 0.6, 0.8) == []

    def test_invalid_range(self):
        fit = FitModel(a=1.0, b=-1.0, d=0.0, error=0.0, r2=1.0, n=3)
        assert generate_fit_curve(fit, 0.8, 0.6) == []
        assert generate_fit_curve(fit, 0.6, 0.8, steps=0) == []

    def test_skips_reference_point(self):
        fit = FitModel(a=1.0, b=-1.0, d=0.0, error=0.0, r2=1.0, n=3)
        curve = generate_fit_curve(fit, CRITICAL_VALUE - 0.01, CRITICAL_VALUE + 0.01, steps=2)
        assert len(curve) == 2
        assert curve[0].fitted == pytest.approx(100.0)
        assert curve[1].lambda_value == pytest.approx(CRITICAL_VALUE + 0.01)

    def test_skips_non_positive_predictions(self):
        fit = FitModel(a=1.0, b=1.0, d=-5.0, error=0.0, r2=1.0, n=3)
        assert generate_fit_curve(fit, 0.6, 0.8) == []

    def test_skips_non_finite_predictions(self):
        fit = FitModel(a=1.0, b=-400.0, d=0.0, error=0.0, r2=1.0, n=3)
        curve = generate_fit_curve(fit, CRITICAL_VALUE + 0.001, CRITICAL_VALUE + 0.002, steps=4)
        assert curve == []

    def test_default_steps(self):
        fit = FitModel(a=2.0, b=-1.0, d=5.0, error=0.0, r2=1.0, n=3)
        curve = generate_fit_curve(fit, 0.75, 0.85)
        assert len(curve) == 81
        assert all(math.isfinite(p.fitted) and p.fitted > 0 for p in curve)


class TestFormatFormula:
    def test_format(self):
        fit = FitModel(a=1.5, b=-0.5, d=3.25, error=0.1, r2=0.99, n=5)
        assert format_formula(fit) == "n ≈ 1.500000 × |λ − λ*|^(-0.500000) + 3.2500"

    def test_no_fit(self):
        assert format_formula(None) == "no fit"
