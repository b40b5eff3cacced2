"""Tests for the champion suitability scorer."""
import pytest

from rift_sim.models.team import MasteryEntry, Player
from rift_sim.services.scorers.champion_scorer import ChampionScorer

from conftest import make_champion


@pytest.fixture
def scorer():
    return ChampionScorer()


@pytest.fixture
def champion():
    return make_champion("Azir", "mid", tier=3)


def test_score_increases_with_overall(scorer, champion):
    weak = Player(name="A", role="mid", overall=70)
    strong = Player(name="B", role="mid", overall=90)
    assert scorer.champion_score(strong, champion) > scorer.champion_score(weak, champion)


def test_score_increases_with_mastery(scorer, champion):
    player = Player(name="A", role="mid", overall=80)
    low = MasteryEntry("Azir", games=10, win_rate=40, kda=2.0)
    high = MasteryEntry("Azir", games=10, win_rate=70, kda=5.0)
    assert scorer.champion_score(player, champion, high) > scorer.champion_score(player, champion, low)


def test_stronger_tier_scores_higher(scorer):
    player = Player(name="A", role="mid", overall=80)
    tier1 = make_champion("Strong", "mid", tier=1)
    tier5 = make_champion("Weak", "mid", tier=5)
    assert scorer.champion_score(player, tier1) > scorer.champion_score(player, tier5)


def test_one_trick_gets_tier_boost(scorer):
    assert scorer.meta_score(4, 85) == scorer.meta_score(2, 0)
    assert scorer.meta_score(1, 95) == 100


def test_missing_mastery_uses_overall(scorer):
    player = Player(name="A", role="mid", overall=80)
    assert scorer.mastery_score(player, None) == pytest.approx(64)


def test_mastery_score_is_capped(scorer):
    player = Player(name="A", role="mid", overall=80)
    assert scorer.mastery_score(player, MasteryEntry("Azir", 500, 100, 20)) == 100


def test_player_record_is_used_by_default(scorer, champion):
    record = MasteryEntry("Azir", games=40, win_rate=70, kda=6.0)
    with_record = Player(name="A", role="mid", overall=80, mastery=(record,))
    without = Player(name="B", role="mid", overall=80)
    assert scorer.champion_score(with_record, champion) > scorer.champion_score(without, champion)
