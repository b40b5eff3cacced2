"""Team and player models."""

from dataclasses import dataclass, field
from typing import Optional

from rift_sim.utils.role_normalizer import ROLE_ORDER


@dataclass(frozen=True)
class PlayerStats:
    """Detailed player ratings (0-100)."""

    laning: float = 50
    mechanics: float = 50
    teamfight: float = 50
    growth: float = 50
    stability: float = 50
    macro: float = 50

    @classmethod
    def uniform(cls, value: float) -> "PlayerStats":
        return cls(value, value, value, value, value, value)


@dataclass(frozen=True)
class MasteryEntry:
    """A player's historical record on one champion."""

    champion: str
    games: int
    win_rate: float  # Percent, 0-100
    kda: float


@dataclass(frozen=True)
class Player:
    """A rostered player for the current season."""

    name: str
    role: str  # Canonical: top/jungle/mid/bot/support
    overall: float = 70
    detail: PlayerStats = field(default_factory=PlayerStats)
    team: str = ""
    mastery: tuple[MasteryEntry, ...] = field(default_factory=tuple)

    def mastery_for(self, champion_name: str) -> Optional[MasteryEntry]:
        return next((m for m in self.mastery if m.champion == champion_name), None)

    @classmethod
    def placeholder(cls, team: str, role: str, rating: float = 75) -> "Player":
        """Synthetic average player for teams without roster data."""
        return cls(
            name=f"{team} {role.upper()}",
            role=role,
            overall=rating,
            detail=PlayerStats.uniform(rating),
            team=team,
        )


@dataclass(frozen=True)
class TeamRoster:
    """A team's five starters, stored in ROLE_ORDER."""

    name: str
    players: tuple[Player, ...]

    def player_for(self, role: str) -> Optional[Player]:
        return next((p for p in self.players if p.role == role), None)

    @property
    def total_overall(self) -> float:
        return sum(p.overall for p in self.players)

    @property
    def is_complete(self) -> bool:
        return sorted(p.role for p in self.players) == sorted(ROLE_ORDER)
