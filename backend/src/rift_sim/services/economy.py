"""Gold, experience and respawn math."""

import math

from rift_sim.models.game import PlayerRuntimeState
from rift_sim.utils.game_rules import BASE_GPM, BASE_XPM, GOLD, MAX_LEVEL
from rift_sim.utils.random_source import RandomSource

SKILL_EXPONENT = 1.025
SKILL_MULTIPLIER_RANGE = (0.6, 1.35)
INCOME_VARIANCE = (0.85, 0.30)  # low end, spread
MAX_DEATH_TIMER = 150


def income_skill(player_state: PlayerRuntimeState, minute: int) -> float:
    """Phase-weighted stat driving farm efficiency."""
    stats = player_state.player.detail
    if minute < 14:
        return stats.laning * 0.5 + stats.mechanics * 0.3 + stats.stability * 0.2
    if minute <= 25:
        return stats.growth * 0.4 + stats.macro * 0.4 + stats.mechanics * 0.2
    return stats.teamfight * 0.35 + stats.macro * 0.35 + stats.stability * 0.3


def skill_multiplier(weighted_stat: float) -> float:
    low, high = SKILL_MULTIPLIER_RANGE
    return max(low, min(high, math.pow(max(weighted_stat, 0.0) / 85, SKILL_EXPONENT)))


def passive_income(
    player_state: PlayerRuntimeState,
    minute: int,
    rng: RandomSource,
    alive_ratio: float = 1.0,
) -> tuple[int, int]:
    """Gold and xp earned by one player over one minute."""
    multiplier = skill_multiplier(income_skill(player_state, minute))
    low, spread = INCOME_VARIANCE
    variance = low + rng.random() * spread
    role = player_state.role
    gold = math.floor(BASE_GPM.get(role, BASE_GPM["top"]) * multiplier * variance * alive_ratio)
    xp = math.floor(BASE_XPM.get(role, BASE_XPM["top"]) * multiplier * variance * alive_ratio)
    return gold, xp


def xp_to_next_level(level: int) -> int:
    return 180 + level * 100


def gain_experience(level: int, xp: int, gained: int) -> tuple[int, int]:
    """Add xp and roll over as many level-ups as it pays for."""
    if level >= MAX_LEVEL:
        return level, xp
    xp += gained
    while level < MAX_LEVEL:
        required = xp_to_next_level(level)
        if xp < required:
            break
        xp -= required
        level += 1
    return level, xp


def death_timer(level: int, minute: int) -> float:
    """Seconds spent dead; grows with level and game length."""
    timer = 8 + level * 1.5
    if minute > 15:
        timer += (minute - 15) * 0.15
    if minute > 25:
        timer += (minute - 25) * 0.3
    if minute > 30:
        timer += (minute - 30) * 0.5
    if minute > 35:
        timer += (minute - 35) * 0.7
    return min(MAX_DEATH_TIMER, timer)


def comeback_adjusted(amount: int, own_team_gold: int, enemy_team_gold: int) -> int:
    """Bounty-style bonus for the side that trails in team gold."""
    if enemy_team_gold - own_team_gold >= GOLD["comeback_deficit"]:
        return math.floor(amount * GOLD["comeback_bonus"])
    return amount
