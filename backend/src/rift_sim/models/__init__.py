"""Data models for the match simulator."""

from rift_sim.models.side import Side
from rift_sim.models.champion import ChampionClass, Champion, DamageType, PhaseStats, SynergyCombo
from rift_sim.models.team import MasteryEntry, Player, PlayerStats, TeamRoster
from rift_sim.models.draft import (
    DRAFT_SEQUENCE,
    DraftAction,
    DraftPhase,
    DraftPick,
    DraftResult,
    DraftState,
    DraftStep,
)
from rift_sim.models.game import (
    ActiveBuffs,
    CombatStats,
    EngineStatus,
    GameState,
    PlayerRef,
    PlayerRuntimeState,
)
from rift_sim.models.events import EventKind, EventLogEntry, GameEvent
from rift_sim.models.options import Difficulty, SeriesFormat, SimOptions
from rift_sim.models.results import (
    GameResult,
    LevelProgress,
    MvpScore,
    SeriesResult,
    SetHistoryEntry,
    SetResult,
)

__all__ = [
    "Side",
    "ChampionClass",
    "Champion",
    "DamageType",
    "PhaseStats",
    "SynergyCombo",
    "MasteryEntry",
    "Player",
    "PlayerStats",
    "TeamRoster",
    "DRAFT_SEQUENCE",
    "DraftAction",
    "DraftPhase",
    "DraftPick",
    "DraftResult",
    "DraftState",
    "DraftStep",
    "ActiveBuffs",
    "CombatStats",
    "EngineStatus",
    "GameState",
    "PlayerRef",
    "PlayerRuntimeState",
    "EventKind",
    "EventLogEntry",
    "GameEvent",
    "Difficulty",
    "SeriesFormat",
    "SimOptions",
    "GameResult",
    "LevelProgress",
    "MvpScore",
    "SeriesResult",
    "SetHistoryEntry",
    "SetResult",
]
