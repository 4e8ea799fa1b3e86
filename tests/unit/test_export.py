"""Tests for CSV and JSON export of finished games."""

import csv
import io
import json

import pytest

from inekoalaty.analysis.export import (
    CSV_HEADERS,
    export_filename,
    to_csv,
    to_csv_rows,
    to_json,
)
from inekoalaty.engine import run_game


@pytest.fixture(scope="module")
def alice_win():
    return run_game(1.0, max_rounds=50)


class TestCsv:
    def test_header_and_row_count(self, alice_win):
        rows = to_csv_rows(alice_win)
        assert rows[0] == CSV_HEADERS
        assert len(rows) == alice_win.total_rounds + 1

    def test_first_round(self, alice_win):
        row = to_csv_rows(alice_win)[1]
        assert row == [
            "1",
            "Alice",
            "0.000000",
            "0.000000",
            "0.000000",
            "1.000000",
            "1.000000",
            "reserve phase (waiting for round 21)",
        ]

    def test_text_parses_back(self, alice_win):
        text = to_csv(alice_win)
        parsed = list(csv.reader(io.StringIO(text)))
        assert parsed == to_csv_rows(alice_win)
        assert text.endswith("\n")


class TestJson:
    def test_round_trip_fields(self, alice_win):
        data = json.loads(to_json(alice_win))
        assert data["winner"] == "Alice"
        assert data["lambda_value"] == 1.0
        assert data["total_rounds"] == alice_win.total_rounds
        assert len(data["move_details"]) == alice_win.total_rounds
        assert data["move_details"][0]["player"] == "Alice"
        assert data["alice_style"] == "optimal"

    def test_to_dict_matches_json(self, alice_win):
        assert json.loads(to_json(alice_win)) == alice_win.to_dict()


class TestFilename:
    def test_csv_name(self, alice_win):
        assert export_filename(alice_win, "csv") == "inekoalaty_lambda1.0000.csv"

    def test_json_name(self):
        result = run_game(0.75, max_rounds=4)
        assert export_filename(result, "json") == "inekoalaty_lambda0.7500.json"
