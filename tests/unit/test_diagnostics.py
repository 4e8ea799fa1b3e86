"""Tests for move statistics and the Cauchy-Schwarz check."""

import math
import random

import pytest

from inekoalaty.engine.diagnostics import cauchy_schwarz, summarize


class TestCauchySchwarz:
    def test_empty(self):
        check = cauchy_schwarz([])
        assert check.satisfied
        assert check.lhs == 0.0
        assert check.rhs == 0.0
        assert check.ratio == 0.0

    def test_known_values(self):
        check = cauchy_schwarz([1.0, 2.0, 3.0])
        assert check.sum_x == pytest.approx(6.0)
        assert check.sum_x2 == pytest.approx(14.0)
        assert check.lhs == pytest.approx(36.0)
        assert check.rhs == pytest.approx(42.0)
        assert check.ratio == pytest.approx(36.0 / 42.0)
        assert check.satisfied

    def test_equal_moves_reach_equality(self):
        check = cauchy_schwarz([0.5, 0.5, 0.5, 0.5])
        assert check.lhs == check.rhs == 4.0
        assert check.satisfied

    @pytest.mark.parametrize("seed", range(25))
    def test_holds_for_random_sequences(self, seed):
        rng = random.Random(seed)
        moves = [rng.uniform(0.0, 5.0) for _ in range(rng.randint(1, 1000))]
        check = cauchy_schwarz(moves)
        assert check.satisfied
        assert check.ratio <= 1.0


class TestSummarize:
    def test_empty(self):
        stats = summarize([])
        assert stats.n == 0
        assert stats.mean == 0.0
        assert stats.std == 0.0
        assert stats.alice_count == 0
        assert stats.bazza_count == 0

    def test_known_values(self):
        stats = summarize([1.0, 2.0, 3.0])
        assert stats.n == 3
        assert stats.mean == pytest.approx(2.0)
        assert stats.std == pytest.approx(math.sqrt(2.0 / 3.0))
        assert stats.max == 3.0
        assert stats.min == 1.0

    def test_player_split(self):
        stats = summarize([1.0, 2.0, 3.0])
        assert stats.alice_count == 2
        assert stats.alice_sum == pytest.approx(4.0)
        assert stats.bazza_count == 1
        assert stats.bazza_sum == pytest.approx(2.0)

    def test_constant_sequence_has_zero_std(self):
        assert summarize([0.1] * 7).std == pytest.approx(0.0, abs=1e-6)
