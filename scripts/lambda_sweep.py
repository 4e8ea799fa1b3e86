#!/usr/bin/env python3
"""Lambda sweeps and power-law fits for inekoalaty.

Runs optimal-vs-optimal games across a range of lambda, then fits
rounds ~= a * |lambda - lambda*|^b + d separately on each side of lambda*.

Usage:
    uv run python scripts/lambda_sweep.py sweep --start 0.55 --end 0.85 --step 0.01

    # Dense scan around the critical value
    uv run python scripts/lambda_sweep.py scan --radius 0.02 --step 0.001 --max-rounds 150

    # Every style pairing at one lambda
    uv run python scripts/lambda_sweep.py compare --lambda 0.75

    # Parallel execution and JSON output
    uv run python scripts/lambda_sweep.py sweep --workers 4 --json
"""

from __future__ import annotations

import argparse

from inekoalaty.analysis import BatchRunner, print_comparison_table, print_results_summary
from inekoalaty.config import DEFAULT_MAX_ROUNDS, configure_logging


def main():
    """Parse arguments and run the requested batch."""
    parser = argparse.ArgumentParser(description="Batch analysis of the inekoalaty game")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker processes (default: INEKOALATY_MAX_WORKERS or 1)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INEKOALATY_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    sweep = sub.add_parser("sweep", help="Sweep lambda over a range")
    sweep.add_argument("--start", type=float, default=0.55)
    sweep.add_argument("--end", type=float, default=0.85)
    sweep.add_argument("--step", type=float, default=0.01)
    sweep.add_argument("--max-rounds", type=int, default=DEFAULT_MAX_ROUNDS)

    scan = sub.add_parser("scan", help="Dense sweep around lambda*")
    scan.add_argument("--radius", type=float, default=0.02)
    scan.add_argument("--step", type=float, default=0.001)
    scan.add_argument("--max-rounds", type=int, default=150)

    compare = sub.add_parser("compare", help="Every style pairing at one lambda")
    compare.add_argument("--lambda", dest="lambda_value", type=float, default=0.75)
    compare.add_argument("--max-rounds", type=int, default=None,
                         help="Round cap (default: INEKOALATY_MAX_ROUNDS or 100)")

    args = parser.parse_args()
    configure_logging(args.log_level)
    runner = BatchRunner(max_workers=args.workers)

    if args.command == "compare":
        matchups = runner.run_strategy_comparison(args.lambda_value, max_rounds=args.max_rounds)
        print_comparison_table(matchups)
        return

    if args.command == "sweep":
        results = runner.run_lambda_sweep(args.start, args.end, args.step, max_rounds=args.max_rounds)
    else:
        results = runner.run_critical_scan(args.radius, args.step, max_rounds=args.max_rounds)

    if args.json:
        print(results.to_json())
    else:
        print_results_summary(results)


if __name__ == "__main__":
    main()
