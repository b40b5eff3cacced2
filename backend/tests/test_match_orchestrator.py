"""Tests for set and series orchestration."""
import random
from unittest.mock import patch

import pytest

from rift_sim.models.options import SeriesFormat, SimOptions
from rift_sim.models.side import Side
from rift_sim.services.match_orchestrator import ABORTED_SUMMARY, MatchOrchestrator

from conftest import make_champion, make_roster


@pytest.fixture
def orchestrator(repository):
    return MatchOrchestrator(repository, rng=random.Random(99))


def test_simulate_set_result_contract(orchestrator, blue_roster, red_roster):
    result = orchestrator.simulate_set(blue_roster, red_roster, set_number=1)

    assert result.winner_name in ("Blue Team", "Red Team")
    assert result.winner_side == (Side.BLUE if result.winner_name == "Blue Team" else Side.RED)
    assert len(result.used_champions) == 10
    assert all(len(result.picks[side]) == 5 for side in Side)
    assert result.pog is not None
    assert result.pog.team == result.winner_name
    assert result.duration_seconds == result.game.duration_seconds
    assert len(result.level_progress) == 10
    assert all(lp.start_level == 1 and lp.end_level >= 1 for lp in result.level_progress)
    assert set(result.box_score) == {Side.BLUE, Side.RED}


def test_set_log_layout(orchestrator, blue_roster, red_roster):
    result = orchestrator.simulate_set(blue_roster, red_roster)
    log = result.event_log

    assert log[0] == "========== [ DRAFT ] =========="
    result_header = log.index("========== [ RESULT ] ==========")
    assert log[result_header + 1] == result.summary
    assert log[result_header + 2].startswith("POG: [")
    assert log[result_header + 3].startswith("KDA: ")
    assert f"Winner: {result.winner_name}" in result.summary
    assert result.summary.startswith(result.game.clock)


def test_condition_modifier_stays_in_band(orchestrator, blue_roster):
    player = blue_roster.players[0]  # stability 85
    variance = (100 - 85) / 85 * 10
    for _ in range(200):
        value = orchestrator.condition_modifier(player)
        assert 1 - variance / 100 <= value <= 1 + variance / 100


def test_aborted_set_has_no_winner(orchestrator, blue_roster, red_roster):
    tiny = [make_champion(f"Only{role}", role) for role in ("top", "jungle", "mid", "bot", "support")]
    result = orchestrator.simulate_set(blue_roster, red_roster, options=SimOptions(champion_list=tiny))

    assert result.is_aborted
    assert result.winner_name is None
    assert result.summary == ABORTED_SUMMARY
    assert result.game is None


@pytest.mark.parametrize("seed", range(6))
def test_bo3_ends_in_two_or_three_sets(repository, seed):
    orchestrator = MatchOrchestrator(repository, rng=random.Random(seed))
    result = orchestrator.simulate_series("Blue Team", "Red Team")

    assert result.sets_played in (2, 3)
    assert max(result.wins_a, result.wins_b) == 2
    assert result.winner == (result.team_a if result.wins_a == 2 else result.team_b)
    assert result.score_string == f"{result.wins_a}:{result.wins_b}"
    assert result.series_mvp is None


def test_fearless_list_grows_and_champions_never_repeat(repository):
    orchestrator = MatchOrchestrator(repository, rng=random.Random(5))
    result = orchestrator.simulate_series("Blue Team", "Red Team", SimOptions(series_format=SeriesFormat.BO5))

    seen: list[str] = []
    for entry in result.history:
        assert entry.fearless_bans == seen
        picked = entry.result.used_champions
        assert not set(picked) & set(seen)
        seen = seen + picked
    assert result.fearless_bans == seen
    assert len(seen) == len(set(seen))


def test_bo5_reports_series_mvp(repository):
    orchestrator = MatchOrchestrator(repository, rng=random.Random(17))
    result = orchestrator.simulate_series("Blue Team", "Red Team", SimOptions(series_format=SeriesFormat.BO5))

    assert 3 <= result.sets_played <= 5
    assert result.series_mvp is not None
    assert result.series_mvp.team == result.winner
    assert result.series_mvp.sets_played == result.sets_played


def test_first_set_team_a_is_blue_and_history_is_slot_keyed(orchestrator):
    result = orchestrator.simulate_series("Red Team", "Blue Team")
    first = result.history[0]
    assert first.blue_team == "Red Team"
    for entry in result.history:
        a_side = entry.result.side_of("Red Team")
        assert entry.picks["A"] == entry.result.picks[a_side]
        assert entry.scores["A"] == entry.result.kills[a_side]


def test_previous_loser_usually_takes_blue(repository):
    loser_blue = total = 0
    for seed in range(15):
        result = MatchOrchestrator(repository, rng=random.Random(seed)).simulate_series("Blue Team", "Red Team")
        for previous, current in zip(result.history, result.history[1:]):
            loser = "Red Team" if previous.winner == "Blue Team" else "Blue Team"
            total += 1
            loser_blue += current.blue_team == loser
    assert total > 0
    assert loser_blue / total >= 0.6


def test_aborted_set_ends_series_without_winner(repository):
    tiny = [make_champion(f"Only{role}", role) for role in ("top", "jungle", "mid", "bot", "support")]
    orchestrator = MatchOrchestrator(repository, rng=random.Random(1))
    result = orchestrator.simulate_series("Blue Team", "Red Team", SimOptions(champion_list=tiny))

    assert result.winner is None
    assert result.loser is None
    assert result.sets_played == 1
    assert result.history[0].winner is None


def test_unknown_team_plays_with_placeholders(orchestrator):
    result = orchestrator.simulate_set("Blue Team", "Nobody FC")
    red_players = [p.player.name for p in result.picks[Side.RED]]
    assert all(name.startswith("Nobody FC ") for name in red_players)


def test_team_cannot_play_itself(orchestrator):
    with pytest.raises(ValueError):
        orchestrator.simulate_series("Blue Team", "Blue Team")


def test_difficulty_reaches_engine(repository):
    orchestrator = MatchOrchestrator(repository, rng=random.Random(3))
    with patch.object(orchestrator.engine, "run", wraps=orchestrator.engine.run) as run:
        orchestrator.simulate_set(
            make_roster("Blue Team"),
            make_roster("Red Team"),
            options=SimOptions(difficulty="hard", player_team_name="Blue Team"),
        )
    assert run.call_args.kwargs["difficulty"] == "hard"
    assert run.call_args.kwargs["player_team_name"] == "Blue Team"
