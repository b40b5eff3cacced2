"""Player-on-champion suitability scoring shared by the draft and power model."""
import math
from typing import Optional

from rift_sim.models.champion import Champion
from rift_sim.models.team import MasteryEntry, Player
from rift_sim.utils.game_rules import (
    DEFAULT_OVERALL,
    META_COEFF,
    MISSING_MASTERY_FACTOR,
    OTP_SCORE_THRESHOLD,
    OTP_TIER_BOOST,
    SCORE_WEIGHTS,
)


class ChampionScorer:
    """Scores how well a player performs on a champion (0-100 scale)."""

    def mastery_score(self, player: Player, mastery: Optional[MasteryEntry]) -> float:
        """Comfort on a champion from the player's historical record.

        Without any record the player is assumed to be somewhat below their
        overall rating on it.
        """
        if mastery is None:
            return player.overall * MISSING_MASTERY_FACTOR
        base = mastery.win_rate * 0.5 + mastery.kda * 10 + 20
        volume_bonus = math.log10(max(mastery.games, 0) + 1) * 5
        return min(100.0, base + volume_bonus)

    def meta_score(self, tier: int, mastery_score: float) -> float:
        """Patch strength of a champion, with a tier boost for one-tricks."""
        final_tier = tier
        if mastery_score >= OTP_SCORE_THRESHOLD:
            final_tier = max(1, tier - OTP_TIER_BOOST)
        final_tier = max(1, min(5, final_tier))
        return 100 * META_COEFF[final_tier]

    def combine(self, stat_score: float, meta: float, mastery: float) -> float:
        return (
            stat_score * SCORE_WEIGHTS["stats"]
            + meta * SCORE_WEIGHTS["meta"]
            + mastery * SCORE_WEIGHTS["mastery"]
        )

    def champion_score(
        self,
        player: Player,
        champion: Champion,
        mastery: Optional[MasteryEntry] = None,
    ) -> float:
        """Blend of player rating, champion meta strength and mastery.

        ``mastery`` defaults to the player's own record on the champion.
        """
        if mastery is None:
            mastery = player.mastery_for(champion.name)
        overall = player.overall or DEFAULT_OVERALL
        mastery_value = self.mastery_score(player, mastery)
        meta = self.meta_score(champion.tier, mastery_value)
        return self.combine(overall, meta, mastery_value)
