"""Player of the Game (POG) and Player of the Series (POS) selection."""

import logging
from typing import Iterable, Optional

from rift_sim.models.game import PlayerRuntimeState
from rift_sim.models.results import GameResult, MvpScore, SetResult
from rift_sim.models.side import Side

logger = logging.getLogger(__name__)

# Two role bonus tables exist for the same score formula. "uniform" is the
# default; "split" favours junglers over supports.
ROLE_BONUS_VARIANTS = {
    "uniform": {"jungle": 1.15, "support": 1.15},
    "split": {"jungle": 1.15, "support": 1.05},
}


class PostGameEvaluator:
    """Scores individual performances after a set or a series."""

    def __init__(self, role_bonus_variant: str = "uniform"):
        if role_bonus_variant not in ROLE_BONUS_VARIANTS:
            raise ValueError(
                f"Unknown role bonus variant {role_bonus_variant!r}; "
                f"expected one of {sorted(ROLE_BONUS_VARIANTS)}"
            )
        self.role_bonus_variant = role_bonus_variant
        self.role_bonus = ROLE_BONUS_VARIANTS[role_bonus_variant]

    def score(
        self,
        role: str,
        kills: int,
        deaths: int,
        assists: int,
        damage: float,
        minutes: float,
        gold: float,
    ) -> float:
        """Performance score; always finite, even with no deaths or a zero-length game."""
        kda = (kills + assists) / max(1, deaths)
        dpm = damage / max(1.0, minutes)
        value = kda * 3 + dpm / 100 + gold / 1000 + assists
        return value * self.role_bonus.get(role, 1.0)

    def _mvp_score(self, p: PlayerRuntimeState, team: str, minutes: float) -> MvpScore:
        stats = p.stats
        return MvpScore(
            player_name=p.player_name,
            role=p.role,
            team=team,
            champion_name=p.champion_name,
            score=self.score(p.role, stats.kills, stats.deaths, stats.assists, stats.damage, minutes, p.gold),
            kills=stats.kills,
            deaths=stats.deaths,
            assists=stats.assists,
            damage_per_minute=stats.damage / max(1.0, minutes),
            gold=p.gold,
            level=p.level,
        )

    def side_scores(self, game: GameResult, side: Side, team: str) -> list[MvpScore]:
        """Scores for one side of a finished game, best first."""
        scores = [self._mvp_score(p, team, game.minutes) for p in game.players(side)]
        return sorted(scores, key=lambda s: -s.score)

    def player_of_the_game(self, game: GameResult, team_names: dict[Side, str]) -> Optional[MvpScore]:
        """Best performer on the winning side."""
        scores = self.side_scores(game, game.winner, team_names.get(game.winner, game.winner.label))
        return scores[0] if scores else None

    def player_of_the_series(self, sets: Iterable[SetResult], winner_name: str) -> Optional[MvpScore]:
        """Highest score summed over every set for the series winner's players."""
        totals: dict[str, MvpScore] = {}
        for set_result in sets:
            if set_result.game is None:
                continue
            side = set_result.side_of(winner_name)
            for entry in self.side_scores(set_result.game, side, winner_name):
                total = totals.get(entry.player_name)
                if total is None:
                    totals[entry.player_name] = entry
                    continue
                total.score += entry.score
                total.kills += entry.kills
                total.deaths += entry.deaths
                total.assists += entry.assists
                total.gold += entry.gold
                total.damage_per_minute += entry.damage_per_minute
                total.level = entry.level
                total.champion_name = None
                total.sets_played += 1

        if not totals:
            return None
        best = max(totals.values(), key=lambda s: s.score)
        best.damage_per_minute /= best.sets_played
        return best
