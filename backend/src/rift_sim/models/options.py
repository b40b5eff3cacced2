"""Caller-supplied simulation options."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rift_sim.models.champion import Champion


class Difficulty(str, Enum):
    """How hard the simulator is on the named player team."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    INSANE = "insane"


class SeriesFormat(str, Enum):
    BO3 = "BO3"
    BO5 = "BO5"

    @property
    def wins_needed(self) -> int:
        return 3 if self is SeriesFormat.BO5 else 2


@dataclass
class SimOptions:
    """Options shared by every set of a series.

    ``champion_list`` overrides the repository catalog (e.g. a patch with
    disabled champions). ``fearless_bans`` seeds the carryover list for the
    first set.
    """

    champion_list: Optional[list[Champion]] = None
    difficulty: Difficulty = Difficulty.NORMAL
    player_team_name: Optional[str] = None
    series_format: SeriesFormat = SeriesFormat.BO3
    fearless_bans: list[str] = field(default_factory=list)
