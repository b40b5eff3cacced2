"""Tests for loading reference data from knowledge JSON files."""
import json
import logging

import pytest

from rift_sim.models.champion import ChampionClass, DamageType
from rift_sim.repositories.roster_repository import (
    MISSING_PLAYER_RATING,
    UNKNOWN_TEAM_RATING,
    RosterRepository,
    default_knowledge_dir,
)
from rift_sim.utils.role_normalizer import ROLE_ORDER


def _write(directory, filename, payload):
    (directory / filename).write_text(json.dumps(payload), encoding="utf-8")


@pytest.fixture
def knowledge_dir(tmp_path):
    _write(
        tmp_path,
        "champions.json",
        {
            "champions": [
                {"name": "Zed", "role": "MID", "tier": 1, "damage_type": "ad", "class": "Assassin", "counters": ["Lissandra"]},
                {"name": "Ahri", "role": "middle", "tier": 2, "damage_type": "AP"},
                {"name": "Garen", "role": "TOP", "phase_stats": {"early": 7, "mid": 6, "late": 4}},
                {"name": "Nami", "role": "SUP", "class": "enchanter"},
                {"name": "Broken", "role": "feeder"},
                {"role": "top"},
            ]
        },
    )
    _write(
        tmp_path,
        "players.json",
        {
            "teams": [
                {
                    "name": "Night Owls",
                    "players": [
                        {"name": "Alpha", "role": "top", "overall": 88, "detail": {"lane": 90, "consistency": 70}},
                        {"name": "Bravo", "role": "jungle", "overall": 84},
                        {"name": "Charlie", "role": "mid", "overall": 91},
                        {"name": "Delta", "role": "adc", "overall": 86},
                        {"name": "Echo", "role": "mid", "overall": 60},
                    ],
                },
                {"players": []},
            ]
        },
    )
    _write(
        tmp_path,
        "player_mastery.json",
        {"mastery": {"Charlie": [{"champion": "Zed", "games": 40, "win_rate": 62.5, "kda": 4.1}, {"games": 3}]}},
    )
    _write(
        tmp_path,
        "synergies.json",
        {"synergies": [{"champions": ["Nami", "Garen"], "multiplier": 1.08}, {"champions": ["Zed"]}]},
    )
    return tmp_path


@pytest.fixture
def repo(knowledge_dir):
    return RosterRepository(knowledge_dir)


def test_champions_are_parsed_and_ordered(repo):
    names = [c.name for c in repo.get_champions()]
    assert names == ["Garen", "Ahri", "Zed", "Nami"]

    zed = repo.get_champion("Zed")
    assert zed.role == "mid"
    assert zed.damage_type == DamageType.AD
    assert zed.champion_class == ChampionClass.ASSASSIN
    assert zed.counters == ("Lissandra",)
    assert repo.get_champion("Nami").champion_class == ChampionClass.SUPPORT
    assert repo.get_champion("Garen").phase_stats.early == 7
    assert repo.get_champion("Broken") is None


def test_roster_roles_and_placeholders(repo):
    roster = repo.get_roster("Night Owls")
    assert [p.role for p in roster.players] == list(ROLE_ORDER)
    assert roster.player_for("mid").name == "Charlie"
    assert roster.player_for("bot").name == "Delta"

    support = roster.player_for("support")
    assert support.name == "Night Owls SUPPORT"
    assert support.overall == MISSING_PLAYER_RATING


def test_detail_stat_aliases(repo):
    alpha = repo.get_roster("Night Owls").player_for("top")
    assert alpha.detail.laning == 90
    assert alpha.detail.stability == 70
    assert alpha.detail.macro == 50


def test_mastery_is_attached_to_players(repo):
    charlie = repo.get_roster("Night Owls").player_for("mid")
    entry = charlie.mastery_for("Zed")
    assert entry.games == 40
    assert entry.win_rate == pytest.approx(62.5)
    assert repo.get_mastery("Charlie", "Zed") == entry
    assert repo.get_mastery("Charlie", "Ahri") is None


def test_unknown_team_gets_average_placeholders(repo):
    assert not repo.has_team("Nowhere")
    roster = repo.get_roster("Nowhere")
    assert roster.is_complete
    assert all(p.overall == UNKNOWN_TEAM_RATING for p in roster.players)


def test_team_names_skip_unnamed_entries(repo):
    assert repo.get_team_names() == ["Night Owls"]


def test_synergies_need_two_champions(repo):
    combos = repo.get_synergies()
    assert len(combos) == 1
    assert combos[0].champions == ("Nami", "Garen")
    assert combos[0].multiplier == pytest.approx(1.08)


def test_missing_directory_is_empty_and_logged(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        repo = RosterRepository(tmp_path / "missing")
    assert repo.get_champions() == []
    assert repo.get_team_names() == []
    assert "Knowledge file not found" in caplog.text


def test_malformed_json_is_logged(tmp_path, caplog):
    (tmp_path / "champions.json").write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        repo = RosterRepository(tmp_path)
    assert repo.get_champions() == []
    assert "Failed to load" in caplog.text


def test_bundled_knowledge_loads():
    repo = RosterRepository(default_knowledge_dir())
    assert len(repo.get_champions()) >= 50
    assert len(repo.get_team_names()) >= 2
    for role in ROLE_ORDER:
        assert any(c.role == role for c in repo.get_champions())
