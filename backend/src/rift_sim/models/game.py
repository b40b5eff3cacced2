"""In-game state for the tick engine.

Every class here is frozen. The engine never mutates a state in place; it
builds events and hands them to ``rift_sim.services.state_transitions`` which
returns the next state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rift_sim.models.champion import Champion
from rift_sim.models.side import Side
from rift_sim.models.team import Player
from rift_sim.utils.game_rules import GOLD, LANES, OBJECTIVES


class EngineStatus(str, Enum):
    RUNNING = "RUNNING"
    ENDED = "ENDED"


@dataclass(frozen=True)
class PlayerRef:
    """Stable handle on a lineup slot."""

    side: Side
    role: str


@dataclass(frozen=True)
class CombatStats:
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    damage: float = 0.0
    damage_taken: float = 0.0


@dataclass(frozen=True)
class PlayerRuntimeState:
    """A player/champion pairing as it evolves through one game."""

    side: Side
    role: str
    player: Player
    champion: Champion
    gold: int = GOLD["start"]
    level: int = 1
    xp: int = 0
    dead_until: float = 0.0  # Absolute second
    flash_ready_minute: int = 0
    condition: float = 1.0
    stats: CombatStats = field(default_factory=CombatStats)

    @property
    def ref(self) -> PlayerRef:
        return PlayerRef(self.side, self.role)

    @property
    def player_name(self) -> str:
        return self.player.name

    @property
    def champion_name(self) -> str:
        return self.champion.name

    def is_alive(self, second: float) -> bool:
        return self.dead_until <= second

    def has_flash(self, minute: int) -> bool:
        return self.flash_ready_minute <= minute


@dataclass(frozen=True)
class TurretState:
    destroyed: bool = False
    plates: int = 0


@dataclass(frozen=True)
class InhibitorState:
    destroyed: bool = False
    respawn_minute: int = 0


@dataclass(frozen=True)
class LaneState:
    """Defensive structures of one side in one lane, outermost first."""

    outer: TurretState = field(default_factory=lambda: TurretState(plates=OBJECTIVES["plates"]["count"]))
    inner: TurretState = field(default_factory=TurretState)
    inhib_turret: TurretState = field(default_factory=TurretState)
    inhibitor: InhibitorState = field(default_factory=InhibitorState)

    @property
    def destroyed_count(self) -> int:
        return sum(
            1
            for destroyed in (
                self.outer.destroyed,
                self.inner.destroyed,
                self.inhib_turret.destroyed,
                self.inhibitor.destroyed,
            )
            if destroyed
        )


@dataclass(frozen=True)
class BuffTimer:
    """Baron/elder style buff: owner plus the last minute it is live."""

    owner: Optional[Side] = None
    expires_minute: int = 0

    def is_active(self, minute: int) -> bool:
        return self.owner is not None and self.expires_minute >= minute

    def is_active_for(self, side: Side, minute: int) -> bool:
        return self.owner == side and self.expires_minute >= minute


@dataclass(frozen=True)
class SoulState:
    owner: Side
    element: str


@dataclass(frozen=True)
class ActiveBuffs:
    """Everything a side carries into a fight at one instant."""

    dragon_stacks: dict[str, int] = field(default_factory=dict)
    soul: Optional[str] = None
    baron: bool = False
    elder: bool = False
    grubs: int = 0


def _per_side(value):
    return {Side.BLUE: value, Side.RED: value}


@dataclass(frozen=True)
class GameState:
    """Snapshot of a game between two minutes (or two events)."""

    players: dict[Side, tuple[PlayerRuntimeState, ...]]
    dragon_order: tuple[str, ...]
    minute: int = 0
    status: EngineStatus = EngineStatus.RUNNING
    team_gold: dict[Side, int] = field(default_factory=lambda: _per_side(GOLD["start"] * 5))
    kills: dict[Side, int] = field(default_factory=lambda: _per_side(0))
    lanes: dict[Side, dict[str, LaneState]] = field(
        default_factory=lambda: {side: {lane: LaneState() for lane in LANES} for side in Side}
    )
    nexus_health: dict[Side, float] = field(default_factory=lambda: _per_side(100.0))
    dragons: dict[Side, tuple[str, ...]] = field(default_factory=lambda: _per_side(()))
    grubs: dict[Side, int] = field(default_factory=lambda: _per_side(0))
    soul: Optional[SoulState] = None
    baron: BuffTimer = field(default_factory=BuffTimer)
    elder: BuffTimer = field(default_factory=BuffTimer)
    next_dragon_second: Optional[int] = OBJECTIVES["dragon"]["initial_spawn"] * 60
    next_baron_second: int = OBJECTIVES["baron"]["spawn"] * 60
    next_elder_second: Optional[int] = None
    dragons_taken: int = 0
    winner: Optional[Side] = None
    end_second: Optional[int] = None

    def lineup(self, side: Side) -> tuple[PlayerRuntimeState, ...]:
        return self.players[side]

    def player(self, ref: PlayerRef) -> PlayerRuntimeState:
        return next(p for p in self.players[ref.side] if p.role == ref.role)

    def alive(self, side: Side, second: float) -> list[PlayerRuntimeState]:
        return [p for p in self.players[side] if p.is_alive(second)]

    def dead_count(self, side: Side, second: float) -> int:
        return sum(1 for p in self.players[side] if not p.is_alive(second))

    def active_buffs(self, side: Side) -> ActiveBuffs:
        stacks: dict[str, int] = {}
        for element in self.dragons[side]:
            stacks[element] = stacks.get(element, 0) + 1
        return ActiveBuffs(
            dragon_stacks=stacks,
            soul=self.soul.element if self.soul and self.soul.owner == side else None,
            baron=self.baron.is_active_for(side, self.minute),
            elder=self.elder.is_active_for(side, self.minute),
            grubs=self.grubs[side],
        )

    def structures_destroyed(self, side: Side) -> int:
        """Structures ``side`` has lost."""
        return sum(lane.destroyed_count for lane in self.lanes[side].values())

    @property
    def is_over(self) -> bool:
        return self.status == EngineStatus.ENDED
