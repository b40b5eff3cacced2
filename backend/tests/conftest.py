"""Shared fixtures: a small in-memory catalog, rosters and repository."""

import random

import pytest

from rift_sim.models.champion import Champion, ChampionClass, DamageType, SynergyCombo
from rift_sim.models.game import PlayerRuntimeState
from rift_sim.models.side import Side
from rift_sim.models.team import MasteryEntry, Player, PlayerStats, TeamRoster
from rift_sim.repositories.roster_repository import RosterRepository
from rift_sim.utils.role_normalizer import ROLE_ORDER

CLASS_BY_ROLE = {
    "top": ChampionClass.FIGHTER,
    "jungle": ChampionClass.FIGHTER,
    "mid": ChampionClass.MAGE,
    "bot": ChampionClass.MARKSMAN,
    "support": ChampionClass.TANK,
}


def make_champion(name: str, role: str, tier: int = 3, counters: tuple[str, ...] = (), **kwargs) -> Champion:
    return Champion(
        name=name,
        role=role,
        tier=tier,
        damage_type=kwargs.pop("damage_type", DamageType.AP if role == "mid" else DamageType.AD),
        champion_class=kwargs.pop("champion_class", CLASS_BY_ROLE[role]),
        counters=counters,
        **kwargs,
    )


def make_catalog(per_role: int = 14) -> list[Champion]:
    """``per_role`` champions for every role, tiers cycling 1-5."""
    return [
        make_champion(f"{role.title()}{i}", role, tier=i % 5 + 1)
        for role in ROLE_ORDER
        for i in range(per_role)
    ]


def make_roster(name: str, rating: float = 80, mastery: dict[str, list[MasteryEntry]] | None = None) -> TeamRoster:
    mastery = mastery or {}
    players = tuple(
        Player(
            name=f"{name}-{role}",
            role=role,
            overall=rating,
            detail=PlayerStats.uniform(rating),
            team=name,
            mastery=tuple(mastery.get(role, [])),
        )
        for role in ROLE_ORDER
    )
    return TeamRoster(name=name, players=players)


def make_lineup(side: Side, rating: float = 80, champions: list[Champion] | None = None) -> tuple[PlayerRuntimeState, ...]:
    roster = make_roster(f"{side.value}-team", rating)
    champions = champions or [make_champion(f"{side.value}-{role}", role) for role in ROLE_ORDER]
    return tuple(
        PlayerRuntimeState(side=side, role=player.role, player=player, champion=champ)
        for player, champ in zip(roster.players, champions)
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture
def blue_roster():
    return make_roster("Blue Team", 85)


@pytest.fixture
def red_roster():
    return make_roster("Red Team", 80)


@pytest.fixture
def repository(catalog, blue_roster, red_roster):
    return RosterRepository.from_data(
        champions=catalog,
        rosters=[blue_roster, red_roster],
        synergies=[SynergyCombo(champions=("Bot0", "Support0"), multiplier=1.1)],
    )
