"""Tests for team power computation."""
from dataclasses import replace

import pytest

from rift_sim.models.champion import DamageType, SynergyCombo
from rift_sim.models.game import ActiveBuffs
from rift_sim.models.side import Side
from rift_sim.services.power_model import (
    PowerModel,
    damage_type_penalty,
    death_penalty,
    game_phase,
    gold_multiplier,
    level_bonus,
)
from rift_sim.services.synergy_service import SynergyService
from rift_sim.utils.role_normalizer import ROLE_ORDER

from conftest import make_champion, make_lineup


@pytest.fixture
def model():
    return PowerModel()


@pytest.fixture
def lineup():
    return make_lineup(Side.BLUE)


def test_game_phases():
    assert [game_phase(m) for m in (1, 14, 15, 25, 26, 60)] == ["early", "early", "mid", "mid", "late", "late"]


def test_level_bonus_steps():
    assert level_bonus(1, "mid") == pytest.approx(0.0015)
    assert level_bonus(6, "mid") - level_bonus(5, "mid") == pytest.approx(0.0030)
    assert level_bonus(18, "mid") == level_bonus(25, "mid")
    assert level_bonus(20, "top") > level_bonus(18, "top")


def test_gold_multiplier_is_monotonic():
    values = [gold_multiplier(g, "bot") for g in range(0, 25000, 500)]
    assert values == sorted(values)


def test_death_penalty_table():
    assert [death_penalty(n) for n in range(6)] == [1.0, 0.95, 0.90, 0.75, 0.50, 0.50]


def test_damage_type_penalty_only_for_stacked_comps():
    assert damage_type_penalty(3, 2, 40) == 1.0
    assert damage_type_penalty(4, 1, 10) == 1.0
    assert damage_type_penalty(4, 1, 20) == 0.95
    assert damage_type_penalty(1, 4, 30) == 0.75


def test_baron_strictly_increases_power(model, lineup):
    without = model.team_power(lineup, 25, ActiveBuffs(), second=1500)
    with_baron = model.team_power(lineup, 25, ActiveBuffs(baron=True), second=1500)
    assert with_baron > without


def test_dead_players_add_nothing(model, lineup):
    alive = model.team_power(lineup, 20, ActiveBuffs(), second=1200)
    one_dead = tuple(replace(p, dead_until=1300) if p.role == "mid" else p for p in lineup)
    assert model.team_power(one_dead, 20, ActiveBuffs(), second=1200) < alive
    assert model.team_power(one_dead, 20, ActiveBuffs(), second=1300) == pytest.approx(alive)


def test_gold_and_levels_raise_power(model, lineup):
    base = model.team_power(lineup, 20, ActiveBuffs(), second=0)
    richer = tuple(replace(p, gold=8000, level=12) for p in lineup)
    assert model.team_power(richer, 20, ActiveBuffs(), second=0) > base


def test_flash_down_lowers_player_power(model, lineup):
    mid = lineup[2]
    assert model.player_power(replace(mid, flash_ready_minute=30), 20, ActiveBuffs()) < model.player_power(
        mid, 20, ActiveBuffs()
    )


def test_active_synergy_multiplies_team_power(lineup):
    names = tuple(p.champion_name for p in lineup[:2])
    plain = PowerModel().team_power(lineup, 20, ActiveBuffs(), second=0)
    boosted = PowerModel(synergy=SynergyService([SynergyCombo(names, 1.1)])).team_power(
        lineup, 20, ActiveBuffs(), second=0
    )
    assert boosted == pytest.approx(plain * 1.1)


def test_full_ad_comp_is_penalised_late(model):
    ad_champions = [make_champion(f"AD-{role}", role, damage_type=DamageType.AD) for role in ROLE_ORDER]
    mixed = [
        make_champion(f"Mix-{role}", role, damage_type=DamageType.AP if role in ("mid", "support") else DamageType.AD)
        for role in ROLE_ORDER
    ]
    ad_power = model.team_power(make_lineup(Side.RED, champions=ad_champions), 30, ActiveBuffs(), second=0)
    mixed_power = model.team_power(make_lineup(Side.RED, champions=mixed), 30, ActiveBuffs(), second=0)
    assert ad_power == pytest.approx(mixed_power * 0.75)
