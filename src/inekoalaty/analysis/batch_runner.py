"""Batch runner for lambda sweeps and strategy comparisons.

This module provides utilities for running many independent games for:
- Lambda sweeps (game length vs lambda, with a power-law fit per side)
- Critical scans (a dense sweep of lambda* +/- radius)
- Strategy comparison (every Alice style against every Bazza style)

Games share no state, so a batch is embarrassingly parallel: with
max_workers > 1 games run in a ProcessPoolExecutor and are merged back in
submission order.
"""

from __future__ import annotations

import json
import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from inekoalaty.analysis.fitting import PowerLawFits, fit_power_law, format_formula
from inekoalaty.config import DEFAULT_MAX_ROUNDS, get_max_rounds, get_max_workers
from inekoalaty.engine.game_engine import run_game
from inekoalaty.models.constraints import ConstraintVariant
from inekoalaty.models.game import GameResult, PlayerStyle, Winner
from inekoalaty.parameters import CRITICAL_VALUE

logger = logging.getLogger(__name__)

SWEEP_TOLERANCE = 1e-4


def lambda_range(start: float, end: float, step: float, decimals: int = 4) -> list[float]:
    """Inclusive sweep from start to end.

    The upper bound is widened by SWEEP_TOLERANCE so accumulated rounding
    does not drop the last value; each value is rounded to decimals.

    Raises:
        ValueError: If step is not positive
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    values = []
    i = 0
    while True:
        lam = start + i * step
        if lam > end + SWEEP_TOLERANCE:
            break
        values.append(round(lam, decimals))
        i += 1
    return values


@dataclass(frozen=True)
class GameSpec:
    """Everything needed to replay one game in a worker process."""

    lambda_value: float
    alice_style: PlayerStyle = PlayerStyle.OPTIMAL
    bazza_style: PlayerStyle = PlayerStyle.OPTIMAL
    alice_constraint: ConstraintVariant = ConstraintVariant.STANDARD
    bazza_constraint: ConstraintVariant = ConstraintVariant.STANDARD
    max_rounds: Optional[int] = None


def _run_single_game(spec: GameSpec) -> dict:
    """Worker function for running a single game in a subprocess.

    Returns:
        GameResult as dictionary
    """
    result = run_game(
        spec.lambda_value,
        alice_style=spec.alice_style,
        bazza_style=spec.bazza_style,
        alice_constraint=spec.alice_constraint,
        bazza_constraint=spec.bazza_constraint,
        max_rounds=spec.max_rounds,
    )
    return result.model_dump()


@dataclass
class SweepResults:
    """Results from a lambda sweep."""

    label: str
    results: list[GameResult] = field(default_factory=list)
    fits: PowerLawFits = field(default_factory=PowerLawFits)
    timestamp: str = ""
    duration_seconds: float = 0.0

    def _count(self, winner: Winner) -> int:
        return sum(1 for r in self.results if r.winner is winner)

    @property
    def alice_wins(self) -> int:
        return self._count(Winner.ALICE)

    @property
    def bazza_wins(self) -> int:
        return self._count(Winner.BAZZA)

    @property
    def draws(self) -> int:
        return self._count(Winner.DRAW)

    @property
    def matches(self) -> int:
        return sum(1 for r in self.results if r.match_theory)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "label": self.label,
            "timestamp": self.timestamp,
            "duration_seconds": round(self.duration_seconds, 2),
            "summary": {
                "total_games": len(self.results),
                "alice_wins": self.alice_wins,
                "bazza_wins": self.bazza_wins,
                "draws": self.draws,
                "matches": self.matches,
            },
            "fits": self.fits.model_dump(mode="json"),
            "games": [
                {
                    "lambda_value": r.lambda_value,
                    "winner": r.winner.value,
                    "total_rounds": r.total_rounds,
                    "match_theory": r.match_theory,
                    "critical_round": r.critical_round,
                }
                for r in self.results
            ],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass(frozen=True)
class StyleMatchup:
    """One cell of the style comparison grid."""

    alice_style: PlayerStyle
    bazza_style: PlayerStyle
    result: GameResult


class BatchRunner:
    """Runs batches of independent games.

    Usage:
        runner = BatchRunner(max_workers=4)

        sweep = runner.run_lambda_sweep(0.55, 0.85, 0.01, max_rounds=100)
        print(sweep.fits.alice)

        grid = runner.run_strategy_comparison(0.75)
    """

    def __init__(self, max_workers: Optional[int] = None):
        """Initialize batch runner.

        Args:
            max_workers: Parallel worker processes. 1 or less runs inline.
                If None, uses environment config.
        """
        self.max_workers = get_max_workers() if max_workers is None else max_workers

    def run_games(self, specs: list[GameSpec]) -> list[GameResult]:
        """Run every spec and return results in submission order."""
        if self.max_workers <= 1 or len(specs) <= 1:
            return [GameResult.model_validate(_run_single_game(spec)) for spec in specs]

        collected: dict[int, GameResult] = {}
        with ProcessPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(_run_single_game, spec): idx for idx, spec in enumerate(specs)}
            for future in as_completed(futures):
                collected[futures[future]] = GameResult.model_validate(future.result())
        return [collected[idx] for idx in range(len(specs))]

    def run_sweep(self, label: str, lambdas: list[float], max_rounds: Optional[int] = None) -> SweepResults:
        """Play optimal-vs-optimal at every lambda and fit both sides."""
        if max_rounds is None:
            max_rounds = get_max_rounds()
        start_time = time.time()
        results = SweepResults(label=label, timestamp=datetime.now().isoformat())
        logger.info(f"{label}: {len(lambdas)} games, max_rounds={max_rounds}, workers={self.max_workers}")

        specs = [GameSpec(lambda_value=lam, max_rounds=max_rounds) for lam in lambdas]
        results.results = self.run_games(specs)
        results.fits = fit_power_law(results.results)
        results.duration_seconds = time.time() - start_time
        return results

    def run_lambda_sweep(
        self,
        start: float = 0.55,
        end: float = 0.85,
        step: float = 0.01,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
    ) -> SweepResults:
        """Sweep lambda over [start, end] (values rounded to 4 decimals)."""
        return self.run_sweep("lambda sweep", lambda_range(start, end, step, decimals=4), max_rounds)

    def run_critical_scan(
        self,
        radius: float = 0.02,
        step: float = 0.001,
        max_rounds: int = 150,
    ) -> SweepResults:
        """Dense sweep of lambda* +/- radius (values rounded to 6 decimals)."""
        lambdas = lambda_range(CRITICAL_VALUE - radius, CRITICAL_VALUE + radius, step, decimals=6)
        return self.run_sweep("critical scan", lambdas, max_rounds)

    def run_strategy_comparison(
        self, lambda_value: float, max_rounds: Optional[int] = None
    ) -> list[StyleMatchup]:
        """Play every (Alice style, Bazza style) pair at one lambda."""
        pairs = [(a, b) for a in PlayerStyle for b in PlayerStyle]
        specs = [
            GameSpec(lambda_value=lambda_value, alice_style=a, bazza_style=b, max_rounds=max_rounds)
            for a, b in pairs
        ]
        games = self.run_games(specs)
        return [StyleMatchup(alice_style=a, bazza_style=b, result=r) for (a, b), r in zip(pairs, games)]


def print_results_summary(results: SweepResults) -> None:
    """Print a human-readable summary of sweep results."""
    total = len(results.results)
    print("\n" + "=" * 72)
    print(f"{results.label.upper()} RESULTS")
    print("=" * 72)
    print(f"Timestamp: {results.timestamp}")
    print(f"Duration: {results.duration_seconds:.2f} seconds")
    print(
        f"Games: {total}  Alice: {results.alice_wins}  Bazza: {results.bazza_wins}  "
        f"Draw: {results.draws}  Match theory: {results.matches}/{total}"
    )

    print("\n" + "-" * 72)
    print(f"{'lambda':>10} {'Winner':>8} {'Rounds':>8} {'Critical':>10} {'Match':>7}")
    print("-" * 72)
    for r in results.results:
        print(
            f"{r.lambda_value:>10.6f} {r.winner.value:>8} {r.total_rounds:>8} "
            f"{r.critical_round or '-':>10} {'yes' if r.match_theory else 'no':>7}"
        )

    print("\n" + "-" * 72)
    print("POWER-LAW FITS")
    print("-" * 72)
    for name, fit in (("Alice", results.fits.alice), ("Bazza", results.fits.bazza)):
        print(f"  {name}: {format_formula(fit)}")
        if fit is not None:
            print(f"    R2={fit.r2:.4f}  RMSE={fit.error:.4f}  n={fit.n}")
    print("=" * 72)


def print_comparison_table(matchups: list[StyleMatchup]) -> None:
    """Print the style comparison grid."""
    print("\n" + "-" * 72)
    print(f"{'Alice':<14} {'Bazza':<14} {'Winner':>8} {'Rounds':>8} {'Match':>7}")
    print("-" * 72)
    for m in matchups:
        print(
            f"{m.alice_style.value:<14} {m.bazza_style.value:<14} {m.result.winner.value:>8} "
            f"{m.result.total_rounds:>8} {'yes' if m.result.match_theory else 'no':>7}"
        )
