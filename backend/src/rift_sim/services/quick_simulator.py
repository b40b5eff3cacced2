"""Fast series simulation that skips the minute-by-minute engine.

Each set is drafted normally, then decided from both lineups' power at
minute 25. Game length and kill totals come from a randomly chosen pace,
and the totals are handed out to players by role-weighted lottery.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rift_sim.models.draft import DraftPick
from rift_sim.models.game import ActiveBuffs, PlayerRuntimeState
from rift_sim.models.options import SeriesFormat, SimOptions
from rift_sim.models.results import MvpScore, SeriesResult, SetResult
from rift_sim.models.side import Side
from rift_sim.models.team import TeamRoster
from rift_sim.repositories.roster_repository import RosterRepository
from rift_sim.services.draft_simulator import DraftSimulator
from rift_sim.services.economy import passive_income
from rift_sim.services.match_orchestrator import ABORTED_SUMMARY, history_entry
from rift_sim.services.post_game_evaluator import PostGameEvaluator
from rift_sim.services.power_model import PowerModel
from rift_sim.services.scorers.champion_scorer import ChampionScorer
from rift_sim.services.synergy_service import SynergyService
from rift_sim.utils.game_rules import MAX_LEVEL
from rift_sim.utils.random_source import RandomSource, make_rng, weighted_choice

logger = logging.getLogger(__name__)

SNAPSHOT_MINUTE = 25
SNAPSHOT_GOLD = 5000
SNAPSHOT_LEVEL = 9
WIN_NOISE = 0.05
STOMP_POWER_GAP = 10
MAX_KILLS = 36

# Lottery tickets per role when handing out team totals
KILL_SHARES = {"top": 20, "jungle": 15, "mid": 30, "bot": 32, "support": 3}
DEATH_SHARES = {"top": 20, "jungle": 20, "mid": 15, "bot": 15, "support": 30}
ASSIST_SHARES = {"top": 15, "jungle": 25, "mid": 15, "bot": 10, "support": 35}

CARRY_ROLES = ("top", "mid", "bot")
KILL_GOLD = 300
ASSIST_GOLD = 100


class GamePace(str, Enum):
    STOMP = "STOMP"
    CLOSE = "CLOSE"
    FIESTA = "FIESTA"


@dataclass
class QuickStatLine:
    """One player's numbers in a quick-simulated set."""

    pick: DraftPick
    gold: int
    level: int
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    damage: int = 0

    @property
    def role(self) -> str:
        return self.pick.role


class QuickSimulator:
    """Series simulation from draft plus a single power snapshot."""

    def __init__(
        self,
        repository: RosterRepository,
        rng: Optional[RandomSource] = None,
        role_bonus_variant: str = "uniform",
    ):
        self.repository = repository
        self.rng = rng or make_rng()
        scorer = ChampionScorer()
        synergy = SynergyService(repository.get_synergies())
        self.draft_simulator = DraftSimulator(scorer, synergy, self.rng)
        self.power_model = PowerModel(scorer, synergy)
        self.evaluator = PostGameEvaluator(role_bonus_variant)

    def _roster(self, team: TeamRoster | str) -> TeamRoster:
        if isinstance(team, TeamRoster):
            return team
        return self.repository.get_roster(team)

    def snapshot_power(self, side: Side, picks: list[DraftPick]) -> float:
        """Team power at minute 25 with mid-game gold and levels for everyone."""
        lineup = [
            PlayerRuntimeState(
                side=side,
                role=pick.role,
                player=pick.player,
                champion=pick.champion,
                gold=SNAPSHOT_GOLD,
                level=SNAPSHOT_LEVEL,
            )
            for pick in picks
        ]
        return self.power_model.team_power(lineup, SNAPSHOT_MINUTE, ActiveBuffs(), second=0)

    def choose_pace(self, power_gap: float) -> GamePace:
        roll = self.rng.random()
        if power_gap > STOMP_POWER_GAP and roll > 0.3:
            return GamePace.STOMP
        if roll > 0.8:
            return GamePace.FIESTA
        if roll > 0.5:
            return GamePace.STOMP
        return GamePace.CLOSE

    def game_minutes(self, pace: GamePace) -> float:
        if pace is GamePace.STOMP:
            return 24 + self.rng.random() * 5
        if pace is GamePace.FIESTA:
            return 35 + self.rng.random() * 10
        return 28 + self.rng.random() * 12

    def kill_totals(self, pace: GamePace) -> tuple[int, int]:
        """(winner kills, loser kills)."""
        if pace is GamePace.STOMP:
            winner = 15 + self.rng.randrange(10)
            loser = self.rng.randrange(5)
        elif pace is GamePace.FIESTA:
            winner = 20 + self.rng.randrange(15)
            loser = 10 + self.rng.randrange(15)
        else:
            winner = 10 + self.rng.randrange(10)
            loser = max(0, winner - (1 + self.rng.randrange(5)))
        return min(winner, MAX_KILLS), min(loser, MAX_KILLS)

    def assist_total(self, kills: int) -> int:
        return math.floor(kills * (1.5 + self.rng.random()))

    def distribute(
        self,
        side: Side,
        picks: list[DraftPick],
        kills: int,
        deaths: int,
        assists: int,
        minutes: float,
        won: bool,
    ) -> list[QuickStatLine]:
        """Hand team totals out to players and estimate gold, level and damage."""
        income_mod = 1.05 if won else 0.95
        lines = []
        for pick in picks:
            runtime = PlayerRuntimeState(side=side, role=pick.role, player=pick.player, champion=pick.champion)
            gold_per_minute, xp_per_minute = passive_income(runtime, int(minutes), self.rng, income_mod)
            lines.append(
                QuickStatLine(
                    pick=pick,
                    gold=math.floor(gold_per_minute * minutes) + 500,
                    level=min(MAX_LEVEL, xp_per_minute // 1000 + 6),
                )
            )

        def lottery(shares: dict[str, int]) -> QuickStatLine:
            return weighted_choice(self.rng, lines, [shares.get(line.role, 10) for line in lines])

        for _ in range(kills):
            line = lottery(KILL_SHARES)
            line.kills += 1
            line.gold += KILL_GOLD
        for _ in range(deaths):
            lottery(DEATH_SHARES).deaths += 1
        for _ in range(assists):
            line = lottery(ASSIST_SHARES)
            line.assists += 1
            line.gold += ASSIST_GOLD

        for line in lines:
            if line.role in CARRY_ROLES:
                damage = self.rng.random() * 15000 + 10000
            else:
                damage = self.rng.random() * 8000 + 4000
            damage *= minutes / 25
            if kills > 25:
                damage *= 1.3
            line.damage = math.floor(damage)
        return lines

    def _box_score(self, lines: list[QuickStatLine], team: str, minutes: float) -> list[MvpScore]:
        scores = [
            MvpScore(
                player_name=line.pick.player.name,
                role=line.role,
                team=team,
                champion_name=line.pick.champion_name,
                score=self.evaluator.score(
                    line.role, line.kills, line.deaths, line.assists, line.damage, minutes, line.gold
                ),
                kills=line.kills,
                deaths=line.deaths,
                assists=line.assists,
                damage_per_minute=line.damage / max(1.0, minutes),
                gold=line.gold,
                level=line.level,
            )
            for line in lines
        ]
        return sorted(scores, key=lambda s: -s.score)

    def simulate_set(
        self,
        team_a: TeamRoster,
        team_b: TeamRoster,
        set_number: int,
        fearless_bans: list[str],
        options: SimOptions,
    ) -> SetResult:
        """Quick set with team A on blue."""
        champions = options.champion_list or self.repository.get_champions()
        draft = self.draft_simulator.run(team_a, team_b, champions, fearless_bans)
        team_names = {Side.BLUE: team_a.name, Side.RED: team_b.name}
        if not draft.is_complete:
            logger.warning("Quick set %d %s vs %s aborted: incomplete draft", set_number, team_a.name, team_b.name)
            return SetResult(
                set_number=set_number,
                blue_team=team_a.name,
                red_team=team_b.name,
                winner_name=None,
                summary=ABORTED_SUMMARY,
                picks=draft.picks,
                bans=draft.bans,
                used_champions=draft.used_champions,
                fearless_bans=draft.fearless_bans,
                draft_actions=draft.actions,
                event_log=list(draft.log),
            )

        avg_blue = self.snapshot_power(Side.BLUE, draft.picks[Side.BLUE]) / 5
        avg_red = self.snapshot_power(Side.RED, draft.picks[Side.RED]) / 5
        total = avg_blue + avg_red
        blue_chance = avg_blue / total if total > 0 else 0.5
        blue_chance += self.rng.random() * WIN_NOISE * 2 - WIN_NOISE
        winner = Side.BLUE if self.rng.random() < blue_chance else Side.RED
        loser = winner.opponent

        pace = self.choose_pace(abs(avg_blue - avg_red))
        minutes = self.game_minutes(pace)
        winner_kills, loser_kills = self.kill_totals(pace)
        kills = {winner: winner_kills, loser: loser_kills}

        box_score = {}
        for side in Side:
            lines = self.distribute(
                side,
                draft.picks[side],
                kills[side],
                kills[side.opponent],
                self.assist_total(kills[side]),
                minutes,
                side is winner,
            )
            box_score[side] = self._box_score(lines, team_names[side], minutes)

        pog = box_score[winner][0] if box_score[winner] else None
        winner_name = team_names[winner]
        duration_seconds = int(minutes * 60)
        clock = f"{duration_seconds // 60}:{duration_seconds % 60:02d}"
        pog_text = f"POG: {pog.player_name} ({pog.champion_name})" if pog else "POG: no eligible player"

        return SetResult(
            set_number=set_number,
            blue_team=team_a.name,
            red_team=team_b.name,
            winner_name=winner_name,
            summary=(
                f"{clock} | {team_a.name} {kills[Side.BLUE]} : {kills[Side.RED]} {team_b.name}"
                f" | Winner: {winner_name}"
            ),
            picks=draft.picks,
            bans=draft.bans,
            used_champions=draft.used_champions,
            fearless_bans=draft.fearless_bans,
            draft_actions=draft.actions,
            pog=pog,
            event_log=[f"[SIM] Set {set_number} - Winner: {winner_name}", f"Game Pace: {pace.value}", pog_text],
            duration_seconds=duration_seconds,
            kills=kills,
            box_score=box_score,
        )

    def simulate_series(
        self,
        team_a: TeamRoster | str,
        team_b: TeamRoster | str,
        options: Optional[SimOptions] = None,
    ) -> SeriesResult:
        options = options or SimOptions()
        team_a, team_b = self._roster(team_a), self._roster(team_b)
        if team_a.name == team_b.name:
            raise ValueError(f"A team cannot play itself: {team_a.name}")

        series_format = SeriesFormat(options.series_format)
        target = series_format.wins_needed
        result = SeriesResult(team_a=team_a.name, team_b=team_b.name, series_format=series_format)
        fearless = list(options.fearless_bans)
        set_number = 1

        while result.wins_a < target and result.wins_b < target:
            carried = list(fearless)
            set_result = self.simulate_set(team_a, team_b, set_number, carried, options)
            result.history.append(history_entry(set_result, team_a.name, carried))
            if set_result.is_aborted:
                logger.warning("Quick series %s vs %s stopped without a winner", team_a.name, team_b.name)
                return result

            if set_result.winner_name == team_a.name:
                result.wins_a += 1
            else:
                result.wins_b += 1
            fearless = fearless + set_result.used_champions
            set_number += 1

        result.winner = team_a.name if result.wins_a > result.wins_b else team_b.name
        logger.info("Quick series %s %s %s, winner %s", team_a.name, result.score_string, team_b.name, result.winner)
        return result
