"""Turns two team powers into a fight outcome."""

from typing import Optional

from rift_sim.models.side import Side
from rift_sim.utils.random_source import RandomSource, make_rng


class CombatResolver:
    """Stochastic fight resolution between blue and red.

    The win chance is the share of average per-player power, tilted further
    toward the stronger side by the raw power difference.
    """

    TEAM_SIZE = 5
    TILT = 0.02

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or make_rng()

    def win_probability(self, power_a: float, power_b: float) -> float:
        """Chance that the side with ``power_a`` wins, in [0, 1]."""
        avg_a = power_a / self.TEAM_SIZE
        avg_b = power_b / self.TEAM_SIZE
        total = avg_a + avg_b
        if total <= 0:
            return 0.5
        chance = avg_a / total + (avg_a - avg_b) * self.TILT
        return max(0.0, min(1.0, chance))

    def resolve(self, blue_power: float, red_power: float) -> Side:
        if self.rng.random() < self.win_probability(blue_power, red_power):
            return Side.BLUE
        return Side.RED
