"""Runs sets and best-of series: draft, game, and post-game evaluation."""

import logging
from typing import Optional

from rift_sim.models.draft import DraftPick, DraftResult
from rift_sim.models.game import PlayerRuntimeState
from rift_sim.models.options import SeriesFormat, SimOptions
from rift_sim.models.results import (
    LevelProgress,
    MvpScore,
    SeriesResult,
    SetHistoryEntry,
    SetResult,
)
from rift_sim.models.side import Side
from rift_sim.models.team import Player, TeamRoster
from rift_sim.repositories.roster_repository import RosterRepository
from rift_sim.services.combat_resolver import CombatResolver
from rift_sim.services.draft_simulator import DraftSimulator
from rift_sim.services.post_game_evaluator import PostGameEvaluator
from rift_sim.services.power_model import PowerModel
from rift_sim.services.scorers.champion_scorer import ChampionScorer
from rift_sim.services.synergy_service import SynergyService
from rift_sim.services.tick_engine import TickEngine
from rift_sim.utils.game_rules import HARD_MINUTE_CAP
from rift_sim.utils.random_source import RandomSource, make_rng
from rift_sim.utils.role_normalizer import role_label

logger = logging.getLogger(__name__)

LOSER_PICKS_BLUE_CHANCE = 0.9
ABORTED_SUMMARY = "Draft incomplete - set aborted"


def history_entry(set_result: SetResult, team_a: str, carried: list[str]) -> SetHistoryEntry:
    """View of a set keyed by series slot ("A"/"B") instead of map side."""
    a_side = set_result.side_of(team_a)
    b_side = a_side.opponent
    return SetHistoryEntry(
        set_number=set_result.set_number,
        winner=set_result.winner_name,
        blue_team=set_result.blue_team,
        picks={"A": set_result.picks.get(a_side, []), "B": set_result.picks.get(b_side, [])},
        bans={"A": set_result.bans.get(a_side, []), "B": set_result.bans.get(b_side, [])},
        scores={"A": set_result.kills.get(a_side, 0), "B": set_result.kills.get(b_side, 0)},
        fearless_bans=carried,
        summary=set_result.summary,
        pog=set_result.pog,
        duration_seconds=set_result.duration_seconds,
        logs=set_result.event_log,
        result=set_result,
    )


class MatchOrchestrator:
    """Composes the draft, tick engine and evaluator into sets and series.

    One random source is shared by every component so a seeded orchestrator
    reproduces a whole series.
    """

    def __init__(
        self,
        repository: RosterRepository,
        rng: Optional[RandomSource] = None,
        max_minutes: int = HARD_MINUTE_CAP,
        role_bonus_variant: str = "uniform",
    ):
        self.repository = repository
        self.rng = rng or make_rng()
        scorer = ChampionScorer()
        synergy = SynergyService(repository.get_synergies())
        self.draft_simulator = DraftSimulator(scorer, synergy, self.rng)
        self.engine = TickEngine(
            power_model=PowerModel(scorer, synergy),
            resolver=CombatResolver(self.rng),
            rng=self.rng,
            max_minutes=max_minutes,
        )
        self.evaluator = PostGameEvaluator(role_bonus_variant)

    def _roster(self, team: TeamRoster | str) -> TeamRoster:
        if isinstance(team, TeamRoster):
            return team
        return self.repository.get_roster(team)

    # ------------------------------------------------------------------
    # Lineups
    # ------------------------------------------------------------------

    def condition_modifier(self, player: Player) -> float:
        """Per-set form: steadier players swing less around 1.0."""
        stability = player.detail.stability or 50
        variance = (100 - stability) / stability * 10
        fluctuation = self.rng.random() * variance * 2 - variance
        return 1 + fluctuation / 100

    def build_lineup(self, side: Side, picks: list[DraftPick]) -> tuple[PlayerRuntimeState, ...]:
        return tuple(
            PlayerRuntimeState(
                side=side,
                role=pick.role,
                player=pick.player,
                champion=pick.champion,
                condition=self.condition_modifier(pick.player),
            )
            for pick in picks
        )

    # ------------------------------------------------------------------
    # Sets
    # ------------------------------------------------------------------

    def _aborted_set(
        self,
        blue: TeamRoster,
        red: TeamRoster,
        set_number: int,
        draft: DraftResult,
    ) -> SetResult:
        logger.warning("Set %d %s vs %s aborted: incomplete draft", set_number, blue.name, red.name)
        return SetResult(
            set_number=set_number,
            blue_team=blue.name,
            red_team=red.name,
            winner_name=None,
            summary=ABORTED_SUMMARY,
            picks=draft.picks,
            bans=draft.bans,
            used_champions=draft.used_champions,
            fearless_bans=draft.fearless_bans,
            draft_actions=draft.actions,
            event_log=list(draft.log),
        )

    @staticmethod
    def _pog_lines(pog: Optional[MvpScore]) -> list[str]:
        if pog is None:
            return ["POG: no eligible player"]
        return [
            f"POG: [{role_label(pog.role)}] {pog.player_name} ({pog.champion_name}) - Score: {pog.score:.1f}",
            f"KDA: {pog.kills}/{pog.deaths}/{pog.assists} | DPM: {int(pog.damage_per_minute)} | LV: {pog.level}",
        ]

    def simulate_set(
        self,
        blue: TeamRoster | str,
        red: TeamRoster | str,
        set_number: int = 1,
        fearless_bans: Optional[list[str]] = None,
        options: Optional[SimOptions] = None,
    ) -> SetResult:
        """Draft and play one game.

        An incomplete draft does not raise: it returns a SetResult whose
        ``winner_name`` is None.
        """
        options = options or SimOptions()
        blue, red = self._roster(blue), self._roster(red)
        champions = options.champion_list or self.repository.get_champions()

        draft = self.draft_simulator.run(blue, red, champions, fearless_bans or [])
        if not draft.is_complete:
            return self._aborted_set(blue, red, set_number, draft)

        team_names = {Side.BLUE: blue.name, Side.RED: red.name}
        game = self.engine.run(
            self.build_lineup(Side.BLUE, draft.picks[Side.BLUE]),
            self.build_lineup(Side.RED, draft.picks[Side.RED]),
            team_names,
            difficulty=options.difficulty,
            player_team_name=options.player_team_name,
        )
        winner_name = team_names[game.winner]
        pog = self.evaluator.player_of_the_game(game, team_names)

        summary = (
            f"{game.clock} | {blue.name} {game.kills[Side.BLUE]} : {game.kills[Side.RED]} {red.name}"
            f" | Winner: {winner_name}"
        )
        event_log = [
            "========== [ DRAFT ] ==========",
            *draft.log,
            "========== [ RESULT ] ==========",
            summary,
            *self._pog_lines(pog),
            "================================",
            *(entry.message for entry in game.log),
        ]
        level_progress = [
            LevelProgress(player_name=p.player_name, start_level=1, end_level=p.level)
            for side in Side
            for p in game.players(side)
        ]
        logger.debug("Set %d: %s", set_number, summary)

        return SetResult(
            set_number=set_number,
            blue_team=blue.name,
            red_team=red.name,
            winner_name=winner_name,
            summary=summary,
            picks=draft.picks,
            bans=draft.bans,
            used_champions=draft.used_champions,
            fearless_bans=draft.fearless_bans,
            draft_actions=draft.actions,
            pog=pog,
            event_log=event_log,
            duration_seconds=game.duration_seconds,
            kills=dict(game.kills),
            game=game,
            level_progress=level_progress,
            box_score={side: self.evaluator.side_scores(game, side, team_names[side]) for side in Side},
        )

    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------

    def _choose_sides(
        self,
        set_number: int,
        team_a: TeamRoster,
        team_b: TeamRoster,
        previous_loser: Optional[TeamRoster],
    ) -> tuple[TeamRoster, TeamRoster]:
        """(blue, red) for a set; after set 1 the previous loser usually takes blue."""
        if set_number == 1 or previous_loser is None:
            return team_a, team_b
        other = team_b if previous_loser.name == team_a.name else team_a
        if self.rng.random() < LOSER_PICKS_BLUE_CHANCE:
            return previous_loser, other
        return other, previous_loser

    def simulate_series(
        self,
        team_a: TeamRoster | str,
        team_b: TeamRoster | str,
        options: Optional[SimOptions] = None,
    ) -> SeriesResult:
        """Play sets until one team reaches the win target.

        Every champion picked in a completed set is banned for the rest of
        the series. An aborted set ends the series without a winner.
        """
        options = options or SimOptions()
        team_a, team_b = self._roster(team_a), self._roster(team_b)
        if team_a.name == team_b.name:
            raise ValueError(f"A team cannot play itself: {team_a.name}")

        series_format = SeriesFormat(options.series_format)
        target = series_format.wins_needed
        result = SeriesResult(team_a=team_a.name, team_b=team_b.name, series_format=series_format)
        fearless = list(options.fearless_bans)
        previous_loser: Optional[TeamRoster] = None
        set_number = 1
        aborted = False

        while result.wins_a < target and result.wins_b < target:
            blue, red = self._choose_sides(set_number, team_a, team_b, previous_loser)
            carried = list(fearless)
            set_result = self.simulate_set(blue, red, set_number, carried, options)
            result.history.append(history_entry(set_result, team_a.name, carried))

            if set_result.is_aborted:
                aborted = True
                break
            if set_result.winner_name == team_a.name:
                result.wins_a += 1
                previous_loser = team_b
            else:
                result.wins_b += 1
                previous_loser = team_a

            fearless = fearless + set_result.used_champions
            set_number += 1

        if aborted:
            logger.warning(
                "Series %s vs %s stopped after set %d without a winner",
                team_a.name,
                team_b.name,
                set_number,
            )
            return result

        result.winner = team_a.name if result.wins_a > result.wins_b else team_b.name
        if series_format is SeriesFormat.BO5:
            result.series_mvp = self.evaluator.player_of_the_series(
                (entry.result for entry in result.history), result.winner
            )
        logger.info(
            "%s %s %s (%s), winner %s",
            team_a.name,
            result.score_string,
            team_b.name,
            series_format.value,
            result.winner,
        )
        return result
