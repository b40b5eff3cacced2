"""Tests for fight resolution."""
import random

import pytest

from rift_sim.models.side import Side
from rift_sim.services.combat_resolver import CombatResolver


@pytest.fixture
def resolver():
    return CombatResolver(random.Random(42))


@pytest.mark.parametrize("a, b", [(400, 400), (500, 450), (300, 700), (1, 1000)])
def test_win_probability_is_symmetric_and_bounded(resolver, a, b):
    p_ab = resolver.win_probability(a, b)
    p_ba = resolver.win_probability(b, a)
    assert 0.0 <= p_ab <= 1.0
    assert p_ab + p_ba == pytest.approx(1.0)


def test_equal_power_is_a_coin_flip(resolver):
    assert resolver.win_probability(420, 420) == pytest.approx(0.5)


def test_zero_power_is_a_coin_flip(resolver):
    assert resolver.win_probability(0, 0) == 0.5


def test_stronger_side_is_favoured(resolver):
    assert resolver.win_probability(450, 400) > 0.5
    assert resolver.win_probability(450, 400) > 450 / 850


def test_large_gap_is_clamped(resolver):
    assert resolver.win_probability(2000, 100) == 1.0
    assert resolver.win_probability(100, 2000) == 0.0


def test_equal_power_parity_over_many_fights(resolver):
    blue_wins = sum(1 for _ in range(1000) if resolver.resolve(400, 400) == Side.BLUE)
    assert 450 <= blue_wins <= 550
