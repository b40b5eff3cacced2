"""Read-only access to champion, roster, mastery and synergy reference data."""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from rift_sim.models.champion import (
    Champion,
    DamageType,
    PhaseStats,
    SynergyCombo,
    resolve_champion_class,
)
from rift_sim.models.team import MasteryEntry, Player, PlayerStats, TeamRoster
from rift_sim.utils.role_normalizer import ROLE_ORDER, normalize_role, role_index

logger = logging.getLogger(__name__)

UNKNOWN_TEAM_RATING = 75
MISSING_PLAYER_RATING = 70

# Stat keys as exported by older roster sheets
_STAT_ALIASES = {
    "laning": "laning",
    "lane": "laning",
    "mechanics": "mechanics",
    "teamfight": "teamfight",
    "teamfighting": "teamfight",
    "growth": "growth",
    "stability": "stability",
    "consistency": "stability",
    "macro": "macro",
}


def default_knowledge_dir() -> Path:
    return Path(__file__).parents[4] / "knowledge"


def _parse_stats(raw: dict[str, Any] | None) -> PlayerStats:
    values: dict[str, float] = {}
    for key, value in (raw or {}).items():
        name = _STAT_ALIASES.get(str(key).lower())
        if name is not None and value is not None:
            values[name] = float(value)
    return PlayerStats(**values)


def _parse_damage_type(value: Any) -> DamageType:
    try:
        return DamageType(str(value).upper())
    except ValueError:
        return DamageType.AD


def _parse_champion(raw: dict[str, Any]) -> Champion:
    role = normalize_role(raw.get("role"))
    if role is None:
        raise ValueError(f"unknown role {raw.get('role')!r}")
    phases = raw.get("phase_stats") or {}
    return Champion(
        name=raw["name"],
        role=role,
        tier=int(raw.get("tier", 3)),
        damage_type=_parse_damage_type(raw.get("damage_type", "AD")),
        champion_class=resolve_champion_class(raw.get("class"), role),
        counters=tuple(raw.get("counters", [])),
        phase_stats=PhaseStats(
            early=float(phases.get("early", 5.0)),
            mid=float(phases.get("mid", 5.0)),
            late=float(phases.get("late", 5.0)),
        ),
    )


def _parse_mastery(raw: dict[str, Any]) -> MasteryEntry:
    return MasteryEntry(
        champion=raw["champion"],
        games=int(raw.get("games", 0)),
        win_rate=float(raw.get("win_rate", 50.0)),
        kda=float(raw.get("kda", 0.0)),
    )


class RosterRepository:
    """Reference data for the simulator, loaded once and never mutated.

    Files read from ``knowledge_dir``:
        champions.json       {"champions": [{name, role, tier, damage_type, class, counters, phase_stats}]}
        players.json         {"teams": [{name, players: [{name, role, overall, detail}]}]}
        player_mastery.json  {"mastery": {player: [{champion, games, win_rate, kda}]}}
        synergies.json       {"synergies": [{champions, multiplier}]}

    Missing or unreadable files are logged and treated as empty.
    """

    def __init__(self, knowledge_dir: Path | None = None, load: bool = True):
        self.knowledge_dir = knowledge_dir or default_knowledge_dir()
        self._champions: list[Champion] = []
        self._teams: dict[str, TeamRoster] = {}
        self._mastery: dict[str, dict[str, MasteryEntry]] = {}
        self._synergies: list[SynergyCombo] = []
        if load:
            self._load_data()

    @classmethod
    def from_data(
        cls,
        champions: Iterable[Champion] = (),
        rosters: Iterable[TeamRoster] = (),
        synergies: Iterable[SynergyCombo] = (),
    ) -> "RosterRepository":
        """Build a repository from in-memory records, skipping the file system."""
        repo = cls(load=False)
        repo._champions = list(champions)
        repo._teams = {roster.name: roster for roster in rosters}
        repo._mastery = {
            player.name: {m.champion: m for m in player.mastery}
            for roster in repo._teams.values()
            for player in roster.players
        }
        repo._synergies = list(synergies)
        return repo

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _read_json(self, filename: str) -> Any:
        path = self.knowledge_dir / filename
        if not path.exists():
            logger.warning("Knowledge file not found: %s", path)
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to load %s: %s", path, e)
            return None

    def _load_data(self) -> None:
        data = self._read_json("champions.json") or {}
        for raw in data.get("champions", []):
            try:
                self._champions.append(_parse_champion(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed champion record %r: %s", raw, e)

        data = self._read_json("player_mastery.json") or {}
        for player_name, entries in data.get("mastery", {}).items():
            pool: dict[str, MasteryEntry] = {}
            for raw in entries:
                try:
                    entry = _parse_mastery(raw)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping malformed mastery record for %s: %s", player_name, e)
                    continue
                pool[entry.champion] = entry
            self._mastery[player_name] = pool

        data = self._read_json("players.json") or {}
        for raw_team in data.get("teams", []):
            name = raw_team.get("name")
            if not name:
                logger.warning("Skipping team without a name: %r", raw_team)
                continue
            self._teams[name] = self._build_roster(name, raw_team.get("players", []))

        data = self._read_json("synergies.json") or {}
        for raw in data.get("synergies", []):
            champions = tuple(raw.get("champions", []))
            if len(champions) < 2:
                logger.warning("Skipping synergy with fewer than two champions: %r", raw)
                continue
            self._synergies.append(SynergyCombo(champions=champions, multiplier=float(raw.get("multiplier", 1.0))))

        logger.debug(
            "Loaded %d champions, %d teams, %d synergies from %s",
            len(self._champions),
            len(self._teams),
            len(self._synergies),
            self.knowledge_dir,
        )

    def _build_roster(self, team_name: str, raw_players: list[dict[str, Any]]) -> TeamRoster:
        by_role: dict[str, Player] = {}
        for raw in raw_players:
            role = normalize_role(raw.get("role"))
            if role is None or "name" not in raw:
                logger.warning("Skipping malformed player record on %s: %r", team_name, raw)
                continue
            if role in by_role:
                # First listed player at a role is the starter
                continue
            name = raw["name"]
            by_role[role] = Player(
                name=name,
                role=role,
                overall=float(raw.get("overall", MISSING_PLAYER_RATING)),
                detail=_parse_stats(raw.get("detail")),
                team=team_name,
                mastery=tuple(self._mastery.get(name, {}).values()),
            )

        players = []
        for role in ROLE_ORDER:
            player = by_role.get(role)
            if player is None:
                logger.warning("%s has no %s player; using a placeholder", team_name, role)
                player = Player.placeholder(team_name, role, MISSING_PLAYER_RATING)
            players.append(player)
        return TeamRoster(name=team_name, players=tuple(players))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_champions(self) -> list[Champion]:
        """Champion catalog ordered by role then name."""
        return sorted(self._champions, key=lambda c: (role_index(c.role), c.name))

    def get_champion(self, name: str) -> Optional[Champion]:
        return next((c for c in self._champions if c.name == name), None)

    def get_team_names(self) -> list[str]:
        return sorted(self._teams)

    def has_team(self, team_name: str) -> bool:
        return team_name in self._teams

    def get_roster(self, team_name: str) -> TeamRoster:
        """Five starters for a team; unknown teams get average placeholders."""
        roster = self._teams.get(team_name)
        if roster is not None:
            return roster
        logger.warning("No roster data for %s; using placeholder players", team_name)
        return TeamRoster(
            name=team_name,
            players=tuple(Player.placeholder(team_name, role, UNKNOWN_TEAM_RATING) for role in ROLE_ORDER),
        )

    def get_mastery(self, player_name: str, champion_name: str) -> Optional[MasteryEntry]:
        return self._mastery.get(player_name, {}).get(champion_name)

    def get_synergies(self) -> list[SynergyCombo]:
        return list(self._synergies)
