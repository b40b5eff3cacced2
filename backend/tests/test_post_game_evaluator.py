"""Tests for Player of the Game / Player of the Series selection."""
import math
import random

import pytest

from rift_sim.models.side import Side
from rift_sim.services.post_game_evaluator import PostGameEvaluator
from rift_sim.services.tick_engine import TickEngine

from conftest import make_lineup

TEAM_NAMES = {Side.BLUE: "Blue Team", Side.RED: "Red Team"}


@pytest.fixture
def evaluator():
    return PostGameEvaluator()


@pytest.fixture
def game():
    engine = TickEngine(rng=random.Random(21))
    return engine.run(make_lineup(Side.BLUE), make_lineup(Side.RED), TEAM_NAMES)


def test_score_formula(evaluator):
    # kda (4+6)/2 = 5 -> 15, dpm 20000/20 = 1000 -> 10, gold 10, assists 6
    assert evaluator.score("mid", 4, 2, 6, 20000, 20, 10000) == pytest.approx(41)


def test_zero_deaths_and_zero_minutes_are_finite(evaluator):
    score = evaluator.score("bot", 10, 0, 5, 30000, 0, 15000)
    assert math.isfinite(score)
    assert score == pytest.approx(evaluator.score("bot", 10, 1, 5, 30000, 1, 15000))


def test_role_bonus_variants():
    uniform = PostGameEvaluator("uniform")
    split = PostGameEvaluator("split")
    args = (3, 1, 10, 10000, 25, 9000)
    assert uniform.score("support", *args) == pytest.approx(uniform.score("mid", *args) * 1.15)
    assert split.score("support", *args) == pytest.approx(split.score("mid", *args) * 1.05)
    assert split.score("jungle", *args) == pytest.approx(uniform.score("jungle", *args))


def test_unknown_variant_is_rejected():
    with pytest.raises(ValueError, match="Unknown role bonus variant"):
        PostGameEvaluator("generous")


def test_pog_is_best_on_winning_side(evaluator, game):
    pog = evaluator.player_of_the_game(game, TEAM_NAMES)
    winners = evaluator.side_scores(game, game.winner, TEAM_NAMES[game.winner])

    assert pog.team == TEAM_NAMES[game.winner]
    assert pog.score == max(s.score for s in winners)
    assert math.isfinite(pog.score)
    assert pog.champion_name is not None


def test_side_scores_are_sorted(evaluator, game):
    scores = [s.score for s in evaluator.side_scores(game, Side.RED, "Red Team")]
    assert scores == sorted(scores, reverse=True)
    assert len(scores) == 5
