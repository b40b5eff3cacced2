"""Synergy scoring from curated champion combos."""
from typing import Iterable

from rift_sim.models.champion import SynergyCombo


class SynergyService:
    """Scores champion synergies for the draft and the power model."""

    POTENTIAL_SHARE = 0.25
    DENIAL_BAN_MULTIPLIER = 2.0

    def __init__(self, combos: Iterable[SynergyCombo] = ()):
        self.combos: list[SynergyCombo] = list(combos)

    def active_combos(self, champion_names: Iterable[str]) -> list[SynergyCombo]:
        """Combos whose every champion is on the team."""
        names = set(champion_names)
        return [combo for combo in self.combos if combo.is_active(names)]

    def team_multiplier(self, champion_names: Iterable[str]) -> float:
        """Product of every active combo's multiplier."""
        multiplier = 1.0
        for combo in self.active_combos(champion_names):
            multiplier *= combo.multiplier
        return multiplier

    def pick_multiplier(
        self,
        candidate: str,
        own_picks: Iterable[str],
        available: Iterable[str],
    ) -> float:
        """Bonus for picking ``candidate`` next to ``own_picks``.

        Completing a combo pays its full multiplier. A combo that could still
        be completed later (every missing partner is available) pays a quarter
        of it.
        """
        team = set(own_picks) | {candidate}
        available_names = set(available)
        multiplier = 1.0
        for combo in self.combos:
            if not combo.involves(candidate):
                continue
            if combo.is_active(team):
                multiplier *= combo.multiplier
            elif all(p in available_names or p in team for p in combo.partners_of(candidate)):
                multiplier *= 1 + (combo.multiplier - 1) * self.POTENTIAL_SHARE
        return multiplier

    def ban_multiplier(self, candidate: str, opponent_picks: Iterable[str]) -> float:
        """Ban priority for denying the opponent the last piece of a combo."""
        picks = set(opponent_picks)
        multiplier = 1.0
        for combo in self.combos:
            if combo.involves(candidate) and all(p in picks for p in combo.partners_of(candidate)):
                multiplier *= self.DENIAL_BAN_MULTIPLIER
        return multiplier
