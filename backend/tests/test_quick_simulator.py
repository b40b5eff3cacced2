"""Tests for the snapshot-based quick simulator."""
import random

import pytest

from rift_sim.models.options import SeriesFormat, SimOptions
from rift_sim.models.side import Side
from rift_sim.services.quick_simulator import MAX_KILLS, GamePace, QuickSimulator

from conftest import make_champion


@pytest.fixture
def quick(repository):
    return QuickSimulator(repository, rng=random.Random(7))


def test_pace_thresholds(quick):
    quick.rng = random.Random()
    quick.rng.random = lambda: 0.85
    assert quick.choose_pace(0) == GamePace.FIESTA
    quick.rng.random = lambda: 0.6
    assert quick.choose_pace(0) == GamePace.STOMP
    quick.rng.random = lambda: 0.4
    assert quick.choose_pace(0) == GamePace.CLOSE
    assert quick.choose_pace(11) == GamePace.STOMP
    quick.rng.random = lambda: 0.2
    assert quick.choose_pace(11) == GamePace.CLOSE


@pytest.mark.parametrize("pace", list(GamePace))
def test_kill_totals_stay_in_range(quick, pace):
    for _ in range(200):
        winner, loser = quick.kill_totals(pace)
        assert 0 <= loser <= MAX_KILLS
        assert 10 <= winner <= MAX_KILLS
        if pace is GamePace.STOMP:
            assert 15 <= winner <= 24 and loser <= 4
        elif pace is GamePace.CLOSE:
            assert winner - 5 <= loser < winner


@pytest.mark.parametrize("pace, low, high", [(GamePace.STOMP, 24, 29), (GamePace.CLOSE, 28, 40), (GamePace.FIESTA, 35, 45)])
def test_game_minutes_by_pace(quick, pace, low, high):
    for _ in range(50):
        assert low <= quick.game_minutes(pace) < high


def test_assist_total_range(quick):
    for _ in range(50):
        assert 15 <= quick.assist_total(10) <= 25


def test_quick_set_box_score_adds_up(quick, blue_roster, red_roster):
    result = quick.simulate_set(blue_roster, red_roster, 1, [], SimOptions())

    assert result.blue_team == "Blue Team"
    assert result.winner_name in ("Blue Team", "Red Team")
    assert result.pog is not None and result.pog.team == result.winner_name
    for side in Side:
        lines = result.box_score[side]
        assert len(lines) == 5
        assert sum(line.kills for line in lines) == result.kills[side]
        assert sum(line.deaths for line in lines) == result.kills[side.opponent]
        assert all(1 <= line.level <= 18 for line in lines)
        assert all(line.gold >= 500 for line in lines)
    assert result.event_log[0] == f"[SIM] Set 1 - Winner: {result.winner_name}"
    assert result.event_log[1].startswith("Game Pace: ")
    assert result.event_log[2].startswith("POG: ")
    assert result.game is None


@pytest.mark.parametrize("series_format, target", [(SeriesFormat.BO3, 2), (SeriesFormat.BO5, 3)])
def test_quick_series_ends_at_target(quick, series_format, target):
    result = quick.simulate_series("Blue Team", "Red Team", SimOptions(series_format=series_format))

    assert max(result.wins_a, result.wins_b) == target
    assert min(result.wins_a, result.wins_b) < target
    assert result.sets_played == result.wins_a + result.wins_b
    assert all(entry.blue_team == "Blue Team" for entry in result.history)


def test_quick_series_is_fearless(quick):
    result = quick.simulate_series("Blue Team", "Red Team", SimOptions(series_format=SeriesFormat.BO5))
    seen: list[str] = []
    for entry in result.history:
        assert entry.fearless_bans == seen
        assert not set(entry.result.used_champions) & set(seen)
        seen = seen + entry.result.used_champions


def test_quick_series_aborts_without_champions(quick):
    tiny = [make_champion(f"Only{role}", role) for role in ("top", "jungle", "mid", "bot", "support")]
    result = quick.simulate_series("Blue Team", "Red Team", SimOptions(champion_list=tiny))
    assert result.winner is None
    assert result.sets_played == 1


def test_seeded_quick_series_is_reproducible(repository):
    first = QuickSimulator(repository, rng=random.Random(42)).simulate_series("Blue Team", "Red Team")
    second = QuickSimulator(repository, rng=random.Random(42)).simulate_series("Blue Team", "Red Team")
    assert first.score_string == second.score_string
    assert [e.result.summary for e in first.history] == [e.result.summary for e in second.history]
