"""Results produced by the tick engine, a single set and a full series."""

from dataclasses import dataclass, field
from typing import Optional

from rift_sim.models.draft import DraftAction, DraftPick
from rift_sim.models.events import EventLogEntry, GameEvent
from rift_sim.models.game import GameState, PlayerRuntimeState
from rift_sim.models.options import SeriesFormat
from rift_sim.models.side import Side


@dataclass
class GameResult:
    """Outcome of one run of the tick engine."""

    winner: Side
    duration_seconds: int
    kills: dict[Side, int]
    events: list[GameEvent]
    log: list[EventLogEntry]
    final_state: GameState
    nexus_destroyed: bool

    @property
    def minutes(self) -> int:
        return self.duration_seconds // 60

    @property
    def clock(self) -> str:
        return f"{self.duration_seconds // 60}:{self.duration_seconds % 60:02d}"

    def players(self, side: Side) -> tuple[PlayerRuntimeState, ...]:
        return self.final_state.players[side]


@dataclass
class MvpScore:
    """A POG/POS candidate with the numbers behind their score."""

    player_name: str
    role: str
    team: str
    score: float
    champion_name: Optional[str] = None
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    damage_per_minute: float = 0.0
    gold: int = 0
    level: int = 1
    sets_played: int = 1


@dataclass
class LevelProgress:
    player_name: str
    start_level: int
    end_level: int


@dataclass
class SetResult:
    """One drafted and played (or aborted) game of a series."""

    set_number: int
    blue_team: str
    red_team: str
    winner_name: Optional[str]
    summary: str
    picks: dict[Side, list[DraftPick]] = field(default_factory=dict)
    bans: dict[Side, list[str]] = field(default_factory=dict)
    used_champions: list[str] = field(default_factory=list)
    fearless_bans: list[str] = field(default_factory=list)
    draft_actions: list[DraftAction] = field(default_factory=list)
    pog: Optional[MvpScore] = None
    event_log: list[str] = field(default_factory=list)
    duration_seconds: int = 0
    kills: dict[Side, int] = field(default_factory=lambda: {Side.BLUE: 0, Side.RED: 0})
    game: Optional[GameResult] = None
    level_progress: list[LevelProgress] = field(default_factory=list)
    box_score: dict[Side, list[MvpScore]] = field(default_factory=dict)

    @property
    def is_aborted(self) -> bool:
        return self.winner_name is None

    @property
    def winner_side(self) -> Optional[Side]:
        if self.winner_name is None:
            return None
        return Side.BLUE if self.winner_name == self.blue_team else Side.RED

    def side_of(self, team_name: str) -> Side:
        return Side.BLUE if team_name == self.blue_team else Side.RED


@dataclass
class SetHistoryEntry:
    """A set as seen from the series: picks, bans and kills keyed by team A/B."""

    set_number: int
    winner: Optional[str]
    blue_team: str
    picks: dict[str, list[DraftPick]]
    bans: dict[str, list[str]]
    scores: dict[str, int]
    fearless_bans: list[str]
    summary: str
    pog: Optional[MvpScore]
    duration_seconds: int
    logs: list[str]
    result: SetResult


@dataclass
class SeriesResult:
    team_a: str
    team_b: str
    series_format: SeriesFormat
    history: list[SetHistoryEntry] = field(default_factory=list)
    wins_a: int = 0
    wins_b: int = 0
    winner: Optional[str] = None
    series_mvp: Optional[MvpScore] = None

    @property
    def loser(self) -> Optional[str]:
        if self.winner is None:
            return None
        return self.team_b if self.winner == self.team_a else self.team_a

    @property
    def score_string(self) -> str:
        return f"{self.wins_a}:{self.wins_b}"

    @property
    def sets_played(self) -> int:
        return len(self.history)

    @property
    def fearless_bans(self) -> list[str]:
        """Carryover list after the last completed set."""
        if not self.history:
            return []
        last = self.history[-1]
        return last.fearless_bans + last.result.used_champions
