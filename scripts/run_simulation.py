#!/usr/bin/env python3
"""Run a single inekoalaty game and print its move log.

Usage:
    uv run python scripts/run_simulation.py --lambda 1.0

    # Pick policies and constraint variants
    uv run python scripts/run_simulation.py --lambda 0.6 --alice-style adaptive \
        --bazza-style aggressive --bazza-constraint quartic

    # Dump the CSV log or the full JSON record to stdout
    uv run python scripts/run_simulation.py --lambda 0.8 --format csv
"""

from __future__ import annotations

import argparse

from inekoalaty.analysis.export import to_csv, to_json
from inekoalaty.config import configure_logging
from inekoalaty.engine import GameEngine, summarize
from inekoalaty.models import ParameterConfig, PlayerStyle, parse_style, parse_variant
from inekoalaty.parameters import CRITICAL_VALUE


def print_game(config: ParameterConfig, engine: GameEngine) -> None:
    """Play one game and print a summary plus the move table."""
    result = engine.play()
    stats = summarize(result.moves)

    print("=" * 72)
    print(f"lambda = {config.lambda_value:.6f}  (lambda* = {CRITICAL_VALUE:.6f}, delta = {config.delta_from_critical:+.6f})")
    print(f"Predicted winner: {config.predicted_winner()}  strike round: {config.strike_round if config.strike_round > 0 else 'N/A'}")
    print("=" * 72)
    print(f"Winner: {result.winner.value} after {result.total_rounds} rounds ({result.winning_reason})")
    print(f"Match theory: {'yes' if result.match_theory else 'no'}  critical round: {result.critical_round or 'N/A'}")

    print("\n" + "-" * 72)
    print(f"{'n':>4} {'player':<6} {'x_n':>10} {'sum x':>10} {'sum x^2':>10} {'A cap':>9} {'B cap':>9}  reason")
    print("-" * 72)
    for d in result.move_details:
        marker = "*" if d.is_critical else " "
        print(
            f"{d.round:>4} {d.player.value:<6} {d.move:>10.4f} {d.sum_linear:>10.4f} {d.sum_square:>10.4f} "
            f"{d.alice_capacity:>9.4f} {d.bazza_capacity:>9.4f} {marker}{d.reason}"
        )

    cs = stats.cauchy_schwarz
    print("\n" + "-" * 72)
    print(f"n={stats.n}  sum={stats.sum_x:.6f}  sum_sq={stats.sum_x2:.6f}")
    print(f"mean={stats.mean:.6f}  std={stats.std:.6f}  C-S ratio={cs.ratio:.6f} ({'ok' if cs.satisfied else 'VIOLATED'})")


def main():
    """Parse arguments and run one game."""
    styles = [s.value for s in PlayerStyle]
    parser = argparse.ArgumentParser(description="Run one inekoalaty game")
    parser.add_argument("--lambda", dest="lambda_value", type=float, default=0.75,
                        help="Game parameter lambda (default: 0.75)")
    parser.add_argument("--max-rounds", type=int, default=None,
                        help="Round cap (default: INEKOALATY_MAX_ROUNDS or 100)")
    parser.add_argument("--alice-style", choices=styles, default="optimal")
    parser.add_argument("--bazza-style", choices=styles, default="optimal")
    parser.add_argument("--alice-constraint", choices=["standard", "cubic", "weighted"], default="standard")
    parser.add_argument("--bazza-constraint", choices=["standard", "quartic", "weighted"], default="standard")
    parser.add_argument("--format", choices=["table", "csv", "json"], default="table",
                        help="Output format (default: table)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INEKOALATY_LOG_LEVEL)")
    args = parser.parse_args()

    configure_logging(args.log_level)

    config = ParameterConfig.from_lambda(args.lambda_value)
    engine = GameEngine(
        config,
        alice_style=parse_style(args.alice_style),
        bazza_style=parse_style(args.bazza_style),
        alice_constraint=parse_variant(args.alice_constraint),
        bazza_constraint=parse_variant(args.bazza_constraint),
        max_rounds=args.max_rounds,
    )

    if args.format == "csv":
        print(to_csv(engine.play()), end="")
    elif args.format == "json":
        print(to_json(engine.play()))
    else:
        print_game(config, engine)


if __name__ == "__main__":
    main()
