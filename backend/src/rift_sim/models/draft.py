"""Draft state and action models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rift_sim.models.champion import Champion
from rift_sim.models.side import Side
from rift_sim.models.team import Player
from rift_sim.utils.role_normalizer import ROLE_ORDER


class DraftPhase(str, Enum):
    """Phases of a professional draft."""

    BAN_PHASE_1 = "BAN_PHASE_1"  # Bans 1-6
    PICK_PHASE_1 = "PICK_PHASE_1"  # Picks 1-6
    BAN_PHASE_2 = "BAN_PHASE_2"  # Bans 7-10
    PICK_PHASE_2 = "PICK_PHASE_2"  # Picks 7-10


@dataclass(frozen=True)
class DraftStep:
    """One slot of the fixed draft order."""

    sequence: int  # 1-20
    action_type: str  # "ban" or "pick"
    side: Side
    phase: DraftPhase
    label: str


def _build_sequence() -> tuple[DraftStep, ...]:
    blue, red = Side.BLUE, Side.RED
    layout = [
        (DraftPhase.BAN_PHASE_1, "ban", [blue, red, blue, red, blue, red]),
        (DraftPhase.PICK_PHASE_1, "pick", [blue, red, red, blue, blue, red]),
        (DraftPhase.BAN_PHASE_2, "ban", [red, blue, red, blue]),
        (DraftPhase.PICK_PHASE_2, "pick", [red, blue, blue, red]),
    ]
    steps = []
    counts = {(s, a): 0 for s in (blue, red) for a in ("ban", "pick")}
    for phase, action_type, sides in layout:
        for side in sides:
            counts[(side, action_type)] += 1
            steps.append(
                DraftStep(
                    sequence=len(steps) + 1,
                    action_type=action_type,
                    side=side,
                    phase=phase,
                    label=f"{side.label} {action_type.upper()} {counts[(side, action_type)]}",
                )
            )
    return tuple(steps)


DRAFT_SEQUENCE = _build_sequence()


@dataclass
class DraftAction:
    """A single resolved ban or pick."""

    sequence: int
    action_type: str  # "ban" or "pick"
    team_side: Side
    champion_name: str
    role: Optional[str] = None  # Picks only
    player_name: Optional[str] = None  # Picks only


@dataclass(frozen=True)
class DraftPick:
    """A champion locked in for a rostered player."""

    role: str
    champion: Champion
    player: Player

    @property
    def champion_name(self) -> str:
        return self.champion.name


@dataclass
class DraftState:
    """Working state of one set's draft."""

    unavailable: set[str]
    bans: dict[Side, list[str]] = field(default_factory=lambda: {Side.BLUE: [], Side.RED: []})
    picks: dict[Side, dict[str, DraftPick]] = field(default_factory=lambda: {Side.BLUE: {}, Side.RED: {}})
    remaining_roles: dict[Side, list[str]] = field(
        default_factory=lambda: {Side.BLUE: list(ROLE_ORDER), Side.RED: list(ROLE_ORDER)}
    )
    actions: list[DraftAction] = field(default_factory=list)
    log: list[str] = field(default_factory=list)

    def pick_names(self, side: Side) -> list[str]:
        return [p.champion.name for p in self.picks[side].values()]

    def picked_champions(self, side: Side) -> list[Champion]:
        return [p.champion for p in self.picks[side].values()]


@dataclass
class DraftResult:
    """Finished draft: role-ordered lineups plus everything consumed."""

    picks: dict[Side, list[DraftPick]]
    bans: dict[Side, list[str]]
    log: list[str]
    actions: list[DraftAction]
    used_champions: list[str]
    fearless_bans: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return all(len(self.picks[side]) == len(ROLE_ORDER) for side in Side)
