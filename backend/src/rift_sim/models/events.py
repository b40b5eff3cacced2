"""Structured game events.

Events are the source of truth for everything that happens in a game. Log
text is rendered from them by ``rift_sim.services.event_renderer``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from rift_sim.models.game import PlayerRef
from rift_sim.models.side import Side


class EventKind(str, Enum):
    MINUTE_START = "MINUTE_START"
    PASSIVE_INCOME = "PASSIVE_INCOME"
    INHIBITOR_RESPAWN = "INHIBITOR_RESPAWN"
    GRUBS = "GRUBS"
    HERALD = "HERALD"
    DRAGON = "DRAGON"
    BARON = "BARON"
    ELDER = "ELDER"
    FIGHT_DAMAGE = "FIGHT_DAMAGE"
    KILL = "KILL"
    COUNTER_KILL = "COUNTER_KILL"
    TURRET_PLATE = "TURRET_PLATE"
    TURRET = "TURRET"
    INHIBITOR = "INHIBITOR"
    NEXUS_DAMAGE = "NEXUS_DAMAGE"
    NEXUS_DESTROYED = "NEXUS_DESTROYED"
    TIME_LIMIT = "TIME_LIMIT"

    @property
    def is_bookkeeping(self) -> bool:
        """Kinds that change state but never show up in the log."""
        return self in {EventKind.MINUTE_START, EventKind.PASSIVE_INCOME, EventKind.FIGHT_DAMAGE}


@dataclass(frozen=True)
class GameEvent:
    """Something that happened at an absolute game second."""

    kind: EventKind
    second: int
    side: Optional[Side] = None
    actor: Optional[PlayerRef] = None
    target: Optional[PlayerRef] = None
    assists: tuple[PlayerRef, ...] = ()
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EventLogEntry:
    second: int
    message: str


def format_clock(second: int) -> str:
    """Absolute seconds to ``[m:ss]``."""
    return f"[{second // 60}:{second % 60:02d}]"
