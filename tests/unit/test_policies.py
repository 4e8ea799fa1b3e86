"""Tests for the per-style move policies.

Policies are pure functions of a PolicyContext, so each case builds the
context directly instead of playing a game.
"""

import math

import pytest

from inekoalaty.engine.policies import (
    ALICE_POLICIES,
    BAZZA_POLICIES,
    PolicyContext,
    alice_adaptive,
    alice_aggressive,
    alice_balanced,
    alice_conservative,
    alice_optimal,
    bazza_adaptive,
    bazza_aggressive,
    bazza_balanced,
    bazza_conservative,
    bazza_optimal,
    get_policy,
)
from inekoalaty.models import ParameterConfig, Player, PlayerStyle
from inekoalaty.parameters import CRITICAL_VALUE


def ctx(config, n, capacity, alice_moves=(), bazza_moves=()):
    return PolicyContext(
        config=config,
        n=n,
        capacity=capacity,
        alice_moves=tuple(alice_moves),
        bazza_moves=tuple(bazza_moves),
    )


class TestPolicyContext:
    def test_theoretical_max_without_alice_moves(self, alice_config):
        assert ctx(alice_config, 2, 1.0).theoretical_max == pytest.approx(math.sqrt(2))

    def test_theoretical_max_uses_last_alice_move(self, alice_config):
        assert ctx(alice_config, 4, 1.0, alice_moves=(0.0, 1.0)).theoretical_max == pytest.approx(1.0)

    def test_theoretical_max_floors_at_zero(self, alice_config):
        assert ctx(alice_config, 22, 1.0, alice_moves=(4.0,)).theoretical_max == 0.0

    def test_bazza_aggregates(self, alice_config):
        context = ctx(alice_config, 5, 1.0, bazza_moves=(1.0, 0.5))
        assert context.bazza_sum_sq == pytest.approx(1.25)
        assert context.bazza_average == pytest.approx(0.75)
        assert ctx(alice_config, 1, 1.0).bazza_average == 0.0


class TestAlicePolicies:
    def test_conservative(self, alice_config):
        assert alice_conservative(ctx(alice_config, 1, 5.0)).move == 0.0

    def test_aggressive(self, alice_config):
        assert alice_aggressive(ctx(alice_config, 1, 10.0)).move == pytest.approx(0.9 * math.sqrt(2))
        assert alice_aggressive(ctx(alice_config, 1, 1.0)).move == pytest.approx(0.95)

    def test_balanced(self, alice_config):
        assert alice_balanced(ctx(alice_config, 1, 1.0)).move == pytest.approx(0.3)
        assert alice_balanced(ctx(alice_config, 1, 10.0)).move == pytest.approx(0.7)

    def test_adaptive_observes_first(self, alice_config):
        proposal = alice_adaptive(ctx(alice_config, 9, 10.0, bazza_moves=(1.0,)))
        assert proposal.move == 0.0
        assert proposal.reason == "adaptive: observing"

    def test_adaptive_tracks_bazza_average(self, alice_config):
        proposal = alice_adaptive(ctx(alice_config, 11, 10.0, bazza_moves=(1.0, 0.5)))
        assert proposal.move == pytest.approx(0.85)


class TestAliceOptimal:
    def test_reserve_phase(self, alice_config):
        proposal = alice_optimal(ctx(alice_config, 19, 10.0))
        assert proposal.move == 0.0
        assert proposal.reason == "reserve phase (waiting for round 21)"

    def test_strike_limited_by_target(self, alice_config):
        proposal = alice_optimal(ctx(alice_config, 21, 100.0))
        # sqrt(22 + 0.5) * 0.95
        assert proposal.move == pytest.approx(math.sqrt(22.5) * 0.95)
        assert proposal.reason == "strike"

    def test_strike_limited_by_capacity(self, alice_config):
        assert alice_optimal(ctx(alice_config, 21, 1.0)).move == pytest.approx(0.95)

    def test_waits_when_bazza_already_over(self, alice_config):
        proposal = alice_optimal(ctx(alice_config, 21, 10.0, bazza_moves=(5.0,)))
        assert proposal.move == 0.0
        assert proposal.reason == "continue waiting"

    def test_waits_when_strike_below_reserve(self, alice_config):
        # 0.1 * 0.95 < reserve threshold ~0.207
        proposal = alice_optimal(ctx(alice_config, 21, 0.1))
        assert proposal.move == 0.0
        assert proposal.reason == "continue waiting"

    def test_below_critical_holds(self, bazza_config):
        proposal = alice_optimal(ctx(bazza_config, 3, 1.0))
        assert proposal.move == 0.0
        assert proposal.reason == "lambda < lambda*: hold at 0"

    def test_near_critical_balance(self, critical_config):
        assert alice_optimal(ctx(critical_config, 1, 2.0)).move == pytest.approx(CRITICAL_VALUE)
        assert alice_optimal(ctx(critical_config, 1, 0.5)).move == pytest.approx(0.35)


class TestBazzaPolicies:
    def test_conservative(self, bazza_config):
        assert bazza_conservative(ctx(bazza_config, 2, 5.0)).move == 0.0

    def test_aggressive(self, bazza_config):
        proposal = bazza_aggressive(ctx(bazza_config, 2, 10.0, alice_moves=(1.0,)))
        assert proposal.move == pytest.approx(0.9)

    def test_balanced(self, bazza_config):
        assert bazza_balanced(ctx(bazza_config, 2, 2.0)).move == pytest.approx(1.4)

    def test_adaptive_slow_until_alice_moves(self, bazza_config):
        proposal = bazza_adaptive(ctx(bazza_config, 2, 10.0, alice_moves=(0.05,)))
        assert proposal.move == pytest.approx(0.6 * math.sqrt(2 - 0.0025))
        assert proposal.reason == "adaptive"

    def test_adaptive_accelerates(self, bazza_config):
        proposal = bazza_adaptive(ctx(bazza_config, 2, 10.0, alice_moves=(0.2,)))
        assert proposal.move == pytest.approx(1.26)
        assert proposal.reason == "adaptive: accelerate"

    def test_optimal_below_critical(self, bazza_config):
        proposal = bazza_optimal(ctx(bazza_config, 2, 10.0))
        assert proposal.move == pytest.approx(0.99 * math.sqrt(2))
        assert proposal.reason == "maximize"

    def test_optimal_limited_by_capacity(self, alice_config):
        assert bazza_optimal(ctx(alice_config, 2, 0.5)).move == pytest.approx(0.15)


class TestRegistry:
    def test_every_style_registered(self):
        assert set(ALICE_POLICIES) == set(PlayerStyle)
        assert set(BAZZA_POLICIES) == set(PlayerStyle)

    def test_get_policy(self):
        assert get_policy(Player.ALICE, PlayerStyle.OPTIMAL) is alice_optimal
        assert get_policy(Player.BAZZA, PlayerStyle.OPTIMAL) is bazza_optimal

    def test_get_policy_unknown(self):
        with pytest.raises(ValueError, match="Valid styles"):
            get_policy(Player.ALICE, "reckless")

    @pytest.mark.parametrize("style", list(PlayerStyle))
    @pytest.mark.parametrize("lam", [0.5, CRITICAL_VALUE, 1.0])
    def test_policies_propose_non_negative(self, style, lam):
        config = ParameterConfig.from_lambda(lam)
        for n in (1, 11, 21, 31):
            context = ctx(config, n, 0.8, alice_moves=(0.3,), bazza_moves=(0.4,))
            assert ALICE_POLICIES[style](context).move >= 0.0
            assert BAZZA_POLICIES[style](context).move >= 0.0
