"""In-memory record export for finished games.

Produces the tabular and structured renderings a presentation layer needs
to offer downloads. Nothing here touches the filesystem.
"""

from __future__ import annotations

import csv
import io

from inekoalaty.models.game import GameResult

CSV_HEADERS = [
    "round",
    "player",
    "move",
    "sum_linear",
    "sum_square",
    "alice_capacity",
    "bazza_capacity",
    "reason",
]


def to_csv_rows(result: GameResult) -> list[list[str]]:
    """Header plus one row per round, numeric fields with six decimals."""
    rows = [list(CSV_HEADERS)]
    for detail in result.move_details:
        rows.append(
            [
                str(detail.round),
                detail.player.value,
                f"{detail.move:.6f}",
                f"{detail.sum_linear:.6f}",
                f"{detail.sum_square:.6f}",
                f"{detail.alice_capacity:.6f}",
                f"{detail.bazza_capacity:.6f}",
                detail.reason,
            ]
        )
    return rows


def to_csv(result: GameResult) -> str:
    """Render the move log as comma-separated text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(to_csv_rows(result))
    return buffer.getvalue()


def to_json(result: GameResult, indent: int = 2) -> str:
    """Render the full result as an indented JSON document."""
    return result.model_dump_json(indent=indent)


def export_filename(result: GameResult, ext: str) -> str:
    """Suggested download name, e.g. inekoalaty_lambda0.7500.csv."""
    return f"inekoalaty_lambda{result.lambda_value:.4f}.{ext}"
