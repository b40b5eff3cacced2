"""Champion reference data."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rift_sim.utils.game_rules import DEFAULT_CLASS_BY_ROLE
from rift_sim.utils.role_normalizer import normalize_role


class DamageType(str, Enum):
    AD = "AD"
    AP = "AP"
    HYBRID = "HYBRID"
    TRUE = "TRUE"


class ChampionClass(str, Enum):
    ASSASSIN = "assassin"
    FIGHTER = "fighter"
    MAGE = "mage"
    MARKSMAN = "marksman"
    TANK = "tank"
    SUPPORT = "support"


# Riot tag names and the short forms used by older roster exports
CLASS_ALIASES = {
    "assassin": ChampionClass.ASSASSIN,
    "fighter": ChampionClass.FIGHTER,
    "bruiser": ChampionClass.FIGHTER,
    "mage": ChampionClass.MAGE,
    "marksman": ChampionClass.MARKSMAN,
    "adc": ChampionClass.MARKSMAN,
    "tank": ChampionClass.TANK,
    "support": ChampionClass.SUPPORT,
    "enchanter": ChampionClass.SUPPORT,
}


def resolve_champion_class(value: Optional[str], role: Optional[str] = None) -> ChampionClass:
    """Map a class/tag string to a ChampionClass, falling back to the role default."""
    if value:
        resolved = CLASS_ALIASES.get(value.strip().lower())
        if resolved:
            return resolved
    default = DEFAULT_CLASS_BY_ROLE.get(normalize_role(role) or "", "fighter")
    return ChampionClass(default)


@dataclass(frozen=True)
class PhaseStats:
    """Relative strength of a champion in each game phase (0-10)."""

    early: float = 5.0
    mid: float = 5.0
    late: float = 5.0


@dataclass(frozen=True)
class Champion:
    """A champion as listed in the patch catalog."""

    name: str
    role: str  # Canonical: top/jungle/mid/bot/support
    tier: int = 3  # 1 (strongest) - 5
    damage_type: DamageType = DamageType.AD
    champion_class: ChampionClass = ChampionClass.FIGHTER
    # Champions this one struggles against
    counters: tuple[str, ...] = field(default_factory=tuple)
    phase_stats: PhaseStats = field(default_factory=PhaseStats)

    def is_countered_by(self, other: str) -> bool:
        return other in self.counters

    @classmethod
    def placeholder(cls, name: str, role: str) -> "Champion":
        """Stand-in used when a drafted name is missing from the catalog."""
        canonical = normalize_role(role) or "top"
        return cls(
            name=name,
            role=canonical,
            tier=3,
            damage_type=DamageType.AD,
            champion_class=resolve_champion_class(None, canonical),
        )


@dataclass(frozen=True)
class SynergyCombo:
    """Champions that are stronger together, and by how much."""

    champions: tuple[str, ...]
    multiplier: float

    def involves(self, champion_name: str) -> bool:
        return champion_name in self.champions

    def partners_of(self, champion_name: str) -> tuple[str, ...]:
        return tuple(c for c in self.champions if c != champion_name)

    def is_active(self, champion_names) -> bool:
        return all(c in champion_names for c in self.champions)
