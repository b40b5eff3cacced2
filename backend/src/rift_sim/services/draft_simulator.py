"""Simulates a full professional ban/pick draft between two rosters."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from rift_sim.models.champion import Champion
from rift_sim.models.draft import (
    DRAFT_SEQUENCE,
    DraftAction,
    DraftPick,
    DraftResult,
    DraftState,
    DraftStep,
)
from rift_sim.models.side import Side
from rift_sim.models.team import Player, TeamRoster
from rift_sim.repositories.roster_repository import MISSING_PLAYER_RATING
from rift_sim.services.scorers.champion_scorer import ChampionScorer
from rift_sim.services.synergy_service import SynergyService
from rift_sim.utils.random_source import RandomSource, make_rng, weighted_choice
from rift_sim.utils.role_normalizer import ROLE_ORDER

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    """A scored champion option for one player."""

    champion: Champion
    player: Player
    score: float


class DraftSimulator:
    """Runs the fixed 20-step draft with weighted-random bans and picks."""

    TOP_N = 3
    COUNTER_PENALTY = 0.9
    COUNTER_BONUS = 1.1
    PROTECTIVE_BAN_BONUS = 1.1

    def __init__(
        self,
        scorer: Optional[ChampionScorer] = None,
        synergy: Optional[SynergyService] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.scorer = scorer or ChampionScorer()
        self.synergy = synergy or SynergyService()
        self.rng = rng or make_rng()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        blue: TeamRoster,
        red: TeamRoster,
        champions: list[Champion],
        fearless_bans: Iterable[str] = (),
    ) -> DraftResult:
        """Draft both lineups.

        Champions in ``fearless_bans`` are unavailable from the first step.
        A step with no legal candidate is logged and skipped; the caller
        checks ``DraftResult.is_complete``.
        """
        carried = list(fearless_bans)
        state = DraftState(unavailable=set(carried))
        rosters = {Side.BLUE: blue, Side.RED: red}

        for step in DRAFT_SEQUENCE:
            available = [c for c in champions if c.name not in state.unavailable]
            if step.action_type == "ban":
                self._ban_step(state, step, rosters[step.side.opponent], available)
            else:
                self._pick_step(state, step, rosters[step.side], available)

        picks = {
            side: [state.picks[side][role] for role in ROLE_ORDER if role in state.picks[side]]
            for side in Side
        }
        used = [p.champion_name for side in Side for p in picks[side]]
        result = DraftResult(
            picks=picks,
            bans={side: list(state.bans[side]) for side in Side},
            log=state.log,
            actions=state.actions,
            used_champions=used,
            fearless_bans=carried,
        )
        if not result.is_complete:
            logger.warning(
                "Draft %s vs %s ended with %d/%d picks",
                blue.name,
                red.name,
                len(picks[Side.BLUE]),
                len(picks[Side.RED]),
            )
        return result

    # ------------------------------------------------------------------
    # Bans
    # ------------------------------------------------------------------

    def ban_candidates(
        self,
        state: DraftState,
        side: Side,
        opponent: TeamRoster,
        available: list[Champion],
    ) -> list[Candidate]:
        """Top champions of every opponent player whose role is still open."""
        opponent_picks = state.pick_names(side.opponent)
        own_champions = state.picked_champions(side)
        candidates: list[Candidate] = []

        for role in state.remaining_roles[side.opponent]:
            player = opponent.player_for(role)
            if player is None:
                continue
            scored = []
            for champ in available:
                if champ.role != role:
                    continue
                score = self.scorer.champion_score(player, champ)
                score *= self.synergy.ban_multiplier(champ.name, opponent_picks)
                # Deny champions that our own picks struggle against
                for mine in own_champions:
                    if mine.is_countered_by(champ.name):
                        score *= self.PROTECTIVE_BAN_BONUS
                scored.append(Candidate(champ, player, score))
            scored.sort(key=lambda c: -c.score)
            candidates.extend(scored[: self.TOP_N])
        return candidates

    def select_ban(
        self,
        state: DraftState,
        side: Side,
        opponent: TeamRoster,
        available: list[Champion],
    ) -> Optional[Champion]:
        candidates = self.ban_candidates(state, side, opponent, available)
        if not candidates:
            return None

        total_score = sum(c.score for c in candidates) or 1.0
        total_overall = opponent.total_overall or 1.0
        weights = [c.score / total_score + c.player.overall / total_overall for c in candidates]
        return weighted_choice(self.rng, candidates, weights).champion

    def _ban_step(
        self,
        state: DraftState,
        step: DraftStep,
        opponent: TeamRoster,
        available: list[Champion],
    ) -> None:
        champ = self.select_ban(state, step.side, opponent, available)
        if champ is None:
            state.log.append(f"[{step.sequence}] {step.label}: (none)")
            return
        state.unavailable.add(champ.name)
        state.bans[step.side].append(champ.name)
        state.actions.append(DraftAction(step.sequence, "ban", step.side, champ.name))
        state.log.append(f"[{step.sequence}] {step.label}: BAN {champ.name}")

    # ------------------------------------------------------------------
    # Picks
    # ------------------------------------------------------------------

    def counter_multiplier(self, candidate: Champion, enemy_champions: list[Champion]) -> float:
        multiplier = 1.0
        for enemy in enemy_champions:
            if candidate.is_countered_by(enemy.name):
                multiplier *= self.COUNTER_PENALTY
            if enemy.is_countered_by(candidate.name):
                multiplier *= self.COUNTER_BONUS
        return multiplier

    def pick_candidates(
        self,
        state: DraftState,
        side: Side,
        player: Player,
        role: str,
        available: list[Champion],
    ) -> list[Candidate]:
        """Top-3 options for ``player``; any champion if the role pool is empty."""
        pool = [c for c in available if c.role == role] or available
        own_picks = state.pick_names(side)
        enemy_champions = state.picked_champions(side.opponent)
        available_names = {c.name for c in available}

        scored = []
        for champ in pool:
            score = self.scorer.champion_score(player, champ)
            score *= self.synergy.pick_multiplier(champ.name, own_picks, available_names)
            score *= self.counter_multiplier(champ, enemy_champions)
            scored.append(Candidate(champ, player, score))
        scored.sort(key=lambda c: -c.score)
        return scored[: self.TOP_N]

    def select_pick(
        self,
        state: DraftState,
        side: Side,
        roster: TeamRoster,
        available: list[Champion],
    ) -> Optional[tuple[str, Candidate]]:
        """Choose which role picks now and which champion it takes.

        The role whose best option scores highest goes first; its champion is
        then drawn among its top three by score.
        """
        best: Optional[tuple[str, list[Candidate]]] = None
        for role in state.remaining_roles[side]:
            player = roster.player_for(role) or Player.placeholder(roster.name, role, MISSING_PLAYER_RATING)
            options = self.pick_candidates(state, side, player, role, available)
            if options and (best is None or options[0].score > best[1][0].score):
                best = (role, options)

        if best is None:
            return None
        role, options = best
        return role, weighted_choice(self.rng, options, [c.score for c in options])

    def _pick_step(
        self,
        state: DraftState,
        step: DraftStep,
        roster: TeamRoster,
        available: list[Champion],
    ) -> None:
        selection = self.select_pick(state, step.side, roster, available)
        if selection is None:
            state.log.append(f"[{step.sequence}] {step.label}: (no pick)")
            return

        role, candidate = selection
        champ, player = candidate.champion, candidate.player
        state.unavailable.add(champ.name)
        state.picks[step.side][role] = DraftPick(role=role, champion=champ, player=player)
        state.remaining_roles[step.side].remove(role)
        state.actions.append(
            DraftAction(step.sequence, "pick", step.side, champ.name, role=role, player_name=player.name)
        )
        state.log.append(f"[{step.sequence}] {step.label}: {champ.name} ({player.name})")
