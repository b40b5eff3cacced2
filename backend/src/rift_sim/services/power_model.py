"""Scalar combat power of a lineup at a moment in the game."""

from typing import Optional, Sequence

from rift_sim.models.champion import DamageType
from rift_sim.models.game import ActiveBuffs, PlayerRuntimeState
from rift_sim.services.scorers.champion_scorer import ChampionScorer
from rift_sim.services.synergy_service import SynergyService
from rift_sim.utils.game_rules import (
    DRAGON_BUFFS,
    DRAGON_SOULS,
    MAX_LEVEL,
    OBJECTIVES,
    PHASE_STAT_WEIGHTS,
    POSITION_WEIGHTS,
    TOP_LEVEL_BONUS_CAP,
)

# (gold threshold, bonus) steps on top of the linear gold scaling
GOLD_BREAKPOINTS = [(3500, 0.03), (6500, 0.06), (10000, 0.10), (13000, 0.15), (15000, 0.20)]
GOLD_CAP = {"bot": 19000}
DEFAULT_GOLD_CAP = 16000
GOLD_SCALING = 0.0000025

FLASH_DOWN_STABILITY = {"bot": 0.75}
DEFAULT_FLASH_DOWN_STABILITY = 0.8

DEATH_PENALTIES = {0: 1.0, 1: 0.95, 2: 0.90, 3: 0.75}
WIPE_PENALTY = 0.50

# Four or more champions of one damage type are easy to itemize against
DAMAGE_STACK_THRESHOLD = 4


def game_phase(minute: int) -> str:
    if minute >= 26:
        return "late"
    if minute >= 15:
        return "mid"
    return "early"


def level_bonus(level: int, role: str) -> float:
    """Stepped bonus: 0.15% per level, doubled at 6 and 16, 1.5x at 11."""
    cap = TOP_LEVEL_BONUS_CAP if role == "top" else MAX_LEVEL
    bonus = 0.0
    for lvl in range(1, min(level, cap) + 1):
        if lvl in (6, 16):
            bonus += 0.0030
        elif lvl == 11:
            bonus += 0.00225
        else:
            bonus += 0.0015
    return bonus


def gold_multiplier(gold: int, role: str) -> float:
    effective = min(gold, GOLD_CAP.get(role, DEFAULT_GOLD_CAP))
    multiplier = 1 + effective * GOLD_SCALING
    for threshold, bonus in GOLD_BREAKPOINTS:
        if gold >= threshold:
            multiplier += bonus
    return multiplier


def death_penalty(dead_count: int) -> float:
    """Team power multiplier for simultaneous deaths."""
    return DEATH_PENALTIES.get(dead_count, WIPE_PENALTY)


def damage_type_penalty(ad_count: int, ap_count: int, minute: int) -> float:
    if ad_count < DAMAGE_STACK_THRESHOLD and ap_count < DAMAGE_STACK_THRESHOLD:
        return 1.0
    if minute < 15:
        return 1.0
    if minute < 28:
        return 0.95
    return 0.75


class PowerModel:
    """Computes team combat power from players, champions, gold and buffs."""

    def __init__(
        self,
        scorer: Optional[ChampionScorer] = None,
        synergy: Optional[SynergyService] = None,
    ):
        self.scorer = scorer or ChampionScorer()
        self.synergy = synergy or SynergyService()

    def stat_blend(self, p: PlayerRuntimeState, minute: int) -> float:
        """Phase-weighted stat block, scaled by per-set condition."""
        stats = p.player.detail
        weights = PHASE_STAT_WEIGHTS[game_phase(minute)]
        stability = stats.stability
        if not p.has_flash(minute):
            stability *= FLASH_DOWN_STABILITY.get(p.role, DEFAULT_FLASH_DOWN_STABILITY)

        raw = (
            stats.laning * weights["laning"]
            + stats.mechanics * weights["mechanics"]
            + stats.growth * weights["growth"]
            + stats.macro * weights["macro"]
            + stats.teamfight * weights["teamfight"]
            + stability * weights["stability"]
        )
        return raw * p.condition

    def buff_multiplier(self, p: PlayerRuntimeState, buffs: ActiveBuffs) -> float:
        champion_class = p.champion.champion_class.value
        multiplier = 1.0
        for element, count in buffs.dragon_stacks.items():
            multiplier *= 1 + DRAGON_BUFFS.get(element, {}).get(champion_class, 0.0) * count
        if buffs.soul:
            multiplier *= 1 + DRAGON_SOULS.get(buffs.soul, {}).get(champion_class, 0.0)
        if buffs.elder:
            multiplier *= OBJECTIVES["elder"]["combat_bonus"]
        if buffs.baron:
            multiplier *= OBJECTIVES["baron"]["combat_bonus"]
        if buffs.grubs > 0:
            multiplier *= 1 + 0.01 * buffs.grubs
        return multiplier

    def player_power(self, p: PlayerRuntimeState, minute: int, buffs: ActiveBuffs) -> float:
        """Power of one living player, before team-wide multipliers."""
        mastery = self.scorer.mastery_score(p.player, p.player.mastery_for(p.champion_name))
        meta = self.scorer.meta_score(p.champion.tier, mastery)
        power = self.scorer.combine(self.stat_blend(p, minute), meta, mastery)

        power *= 1 + level_bonus(p.level, p.role)
        power *= gold_multiplier(p.gold or 500, p.role)
        power *= self.buff_multiplier(p, buffs)

        position_weight = POSITION_WEIGHTS[game_phase(minute)].get(p.role, 0.2)
        return power * position_weight * 5

    def team_power(
        self,
        lineup: Sequence[PlayerRuntimeState],
        minute: int,
        buffs: ActiveBuffs,
        second: float,
    ) -> float:
        """Sum of living players' power at absolute ``second``, with team modifiers.

        Dead players add nothing but still count toward active synergies.
        """
        total = 0.0
        ad_count = ap_count = 0
        for p in lineup:
            if not p.is_alive(second):
                continue
            if p.champion.damage_type == DamageType.AD:
                ad_count += 1
            elif p.champion.damage_type == DamageType.AP:
                ap_count += 1
            total += self.player_power(p, minute, buffs)

        total *= self.synergy.team_multiplier(p.champion_name for p in lineup)
        total *= damage_type_penalty(ad_count, ap_count, minute)
        return total
