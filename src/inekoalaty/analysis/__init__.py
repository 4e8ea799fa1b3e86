"""Batch analysis for inekoalaty.

This module provides the tools that turn many games into evidence about the
critical value:
- fitting: Power-law fit of game length vs distance from lambda*
- batch_runner: Lambda sweeps, critical scans and style comparisons
- export: CSV and JSON renderings of a single game

Usage:
    from inekoalaty.analysis import BatchRunner, format_formula

    sweep = BatchRunner(max_workers=4).run_lambda_sweep(0.55, 0.85, 0.01)
    print(format_formula(sweep.fits.alice))
"""

from inekoalaty.analysis.batch_runner import (
    BatchRunner,
    GameSpec,
    StyleMatchup,
    SweepResults,
    lambda_range,
    print_comparison_table,
    print_results_summary,
)
from inekoalaty.analysis.export import (
    CSV_HEADERS,
    export_filename,
    to_csv,
    to_csv_rows,
    to_json,
)
from inekoalaty.analysis.fitting import (
    CurvePoint,
    FitModel,
    FitParams,
    PowerLawFits,
    fit_power_law,
    fit_side,
    format_formula,
    generate_fit_curve,
    transform_points,
)

__all__ = [
    # Fitting
    "FitModel",
    "FitParams",
    "PowerLawFits",
    "CurvePoint",
    "fit_power_law",
    "fit_side",
    "transform_points",
    "generate_fit_curve",
    "format_formula",
    # Batch runs
    "BatchRunner",
    "GameSpec",
    "SweepResults",
    "StyleMatchup",
    "lambda_range",
    "print_results_summary",
    "print_comparison_table",
    # Export
    "CSV_HEADERS",
    "to_csv_rows",
    "to_csv",
    "to_json",
    "export_filename",
]
