"""Minute-by-minute game simulation.

The engine rolls every random decision for a minute, packs the outcome into
``GameEvent`` records and folds them into the state with ``apply_event``.
It never mutates a state in place.
"""

import logging
from typing import Optional, Sequence

from rift_sim.models.events import EventKind, GameEvent
from rift_sim.models.game import GameState, PlayerRuntimeState
from rift_sim.models.options import Difficulty
from rift_sim.models.results import GameResult
from rift_sim.models.side import Side
from rift_sim.services.combat_resolver import CombatResolver
from rift_sim.services.economy import death_timer, passive_income
from rift_sim.services.event_renderer import EventRenderer
from rift_sim.services.power_model import PowerModel, death_penalty
from rift_sim.services.state_transitions import apply_event, apply_events
from rift_sim.utils.game_rules import (
    ASSIST_WEIGHTS,
    DRAGON_TYPES,
    GOLD,
    HARD_MINUTE_CAP,
    KILL_WEIGHTS,
    LANES,
    OBJECTIVES,
    PLAYER_DIFFICULTY_MULTIPLIERS,
    POWER_VARIANCE,
)
from rift_sim.utils.random_source import RandomSource, make_rng, weighted_choice

logger = logging.getLogger(__name__)

# (minute upper bound, chance) for an open skirmish, first match wins
SKIRMISH_CHANCES = [(4, 0.05), (7, 0.40), (13, 0.20), (14, 0.50), (19, 0.30)]
LATE_SKIRMISH_CHANCE = 0.25
BARON_SKIRMISH_CHANCE = 0.70
SOUL_SKIRMISH_CHANCE = 0.75
ELDER_SKIRMISH_CHANCE = 1.0
DRAGON_SKIRMISH_CHANCE = 0.40

SKIRMISH_WINDOW = 45
# (roll above, kills) for the size of a skirmish, first match wins
MULTIKILL_ROLLS = [(0.99, 5), (0.96, 4), (0.91, 3), (0.71, 2)]
FLASH_BURN_CHANCE = 0.35
COUNTER_KILL_CHANCE = 0.35
COUNTER_KILL_MAX_KILLS = 3

BARON_ATTEMPT_CHANCE = 0.4
BARON_ALWAYS_AFTER = 30

PUSH_CHANCES = {"plate": 0.4, "outer": 0.3, "inner": 0.25, "inhib_turret": 0.2, "inhibitor": 0.3, "nexus": 0.2}
INHIBITOR_RESPAWN_MINUTES = 5
NEXUS_ANNOUNCE_CHANCE = 0.5


def skirmish_base_chance(minute: int) -> float:
    for upper, chance in SKIRMISH_CHANCES:
        if minute <= upper:
            return chance
    return LATE_SKIRMISH_CHANCE


class _Game:
    """Event sink for one game: records each event and folds it into the state."""

    def __init__(self, state: GameState):
        self.initial_state = state
        self.state = state
        self.events: list[GameEvent] = []

    def emit(self, event: GameEvent) -> None:
        self.events.append(event)
        self.state = apply_event(self.state, event)


class TickEngine:
    """Runs one game from first minute to nexus (or time cap)."""

    def __init__(
        self,
        power_model: Optional[PowerModel] = None,
        resolver: Optional[CombatResolver] = None,
        rng: Optional[RandomSource] = None,
        max_minutes: int = HARD_MINUTE_CAP,
    ):
        self.rng = rng or make_rng()
        self.power_model = power_model or PowerModel()
        self.resolver = resolver or CombatResolver(self.rng)
        self.max_minutes = max(1, min(max_minutes, HARD_MINUTE_CAP))

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def initial_state(
        self,
        blue: Sequence[PlayerRuntimeState],
        red: Sequence[PlayerRuntimeState],
    ) -> GameState:
        """Fresh game; the first two dragons and the map element are rolled here."""
        order = list(DRAGON_TYPES)
        self.rng.shuffle(order)
        return GameState(
            players={Side.BLUE: tuple(blue), Side.RED: tuple(red)},
            dragon_order=tuple(order[:3]),
        )

    def run(
        self,
        blue: Sequence[PlayerRuntimeState],
        red: Sequence[PlayerRuntimeState],
        team_names: dict[Side, str],
        difficulty: Difficulty = Difficulty.NORMAL,
        player_team_name: Optional[str] = None,
    ) -> GameResult:
        game = _Game(self.initial_state(blue, red))
        multipliers = self._difficulty_multipliers(team_names, difficulty, player_team_name)

        for minute in range(1, self.max_minutes + 1):
            self._simulate_minute(game, minute, multipliers)
            if game.state.is_over:
                break

        if not game.state.is_over:
            self._end_at_time_limit(game)

        state, events = game.state, game.events
        end_second = state.end_second
        if any(e.second > end_second for e in events):
            # Events rolled later in the final minute never happened
            events = [e for e in events if e.second <= end_second]
            state = apply_events(game.initial_state, events)

        renderer = EventRenderer(state, team_names)
        result = GameResult(
            winner=state.winner,
            duration_seconds=end_second,
            kills=dict(state.kills),
            events=events,
            log=renderer.render_log(events, end_second),
            final_state=state,
            nexus_destroyed=any(e.kind == EventKind.NEXUS_DESTROYED for e in events),
        )
        logger.debug(
            "%s %d : %d %s after %s, winner %s",
            team_names.get(Side.BLUE),
            result.kills[Side.BLUE],
            result.kills[Side.RED],
            team_names.get(Side.RED),
            result.clock,
            team_names.get(result.winner),
        )
        return result

    # ------------------------------------------------------------------
    # Power helpers
    # ------------------------------------------------------------------

    def _difficulty_multipliers(
        self,
        team_names: dict[Side, str],
        difficulty: Difficulty,
        player_team_name: Optional[str],
    ) -> dict[Side, float]:
        multipliers = {Side.BLUE: 1.0, Side.RED: 1.0}
        if player_team_name:
            value = PLAYER_DIFFICULTY_MULTIPLIERS.get(Difficulty(difficulty).value, 1.0)
            for side, name in team_names.items():
                if name == player_team_name:
                    multipliers[side] = value
                    break
        return multipliers

    def side_power(self, state: GameState, side: Side, second: float) -> float:
        return self.power_model.team_power(state.lineup(side), state.minute, state.active_buffs(side), second)

    def _powers_at(self, state: GameState, second: float) -> dict[Side, float]:
        return {side: self.side_power(state, side, second) for side in Side}

    def _minute_powers(self, state: GameState, minute_start: int, multipliers: dict[Side, float]) -> dict[Side, float]:
        powers = {}
        for side in Side:
            power = self.side_power(state, side, minute_start)
            power *= death_penalty(state.dead_count(side, minute_start))
            power *= multipliers[side]
            power *= 1 + (self.rng.random() * POWER_VARIANCE * 2 - POWER_VARIANCE)
            powers[side] = power
        return powers

    # ------------------------------------------------------------------
    # One minute
    # ------------------------------------------------------------------

    def _simulate_minute(self, game: _Game, minute: int, multipliers: dict[Side, float]) -> None:
        minute_start = (minute - 1) * 60
        game.emit(GameEvent(EventKind.MINUTE_START, minute_start, payload={"minute": minute}))

        self._grant_income(game, minute, minute_start)
        self._respawn_inhibitors(game, minute, minute_start)

        powers = self._minute_powers(game.state, minute_start, multipliers)

        self._fixed_objectives(game, minute, minute_start, powers)
        self._dragon(game, minute_start)
        self._baron(game, minute, minute_start)
        self._elder(game, minute, minute_start)

        total = powers[Side.BLUE] + powers[Side.RED]
        diff_ratio = abs(powers[Side.BLUE] - powers[Side.RED]) / (total / 2) if total > 0 else 0.0

        if self.rng.random() < self._skirmish_chance(game.state, minute, minute_start):
            self._skirmish(game, minute, minute_start, diff_ratio)

    def _grant_income(self, game: _Game, minute: int, minute_start: int) -> None:
        income = {}
        for side in Side:
            for p in game.state.lineup(side):
                alive_ratio = 1.0 if p.is_alive(minute_start) else 0.0
                income[p.ref] = passive_income(p, minute, self.rng, alive_ratio)
        game.emit(GameEvent(EventKind.PASSIVE_INCOME, minute_start, payload={"income": income}))

    def _respawn_inhibitors(self, game: _Game, minute: int, minute_start: int) -> None:
        for side in Side:
            for lane in LANES:
                inhibitor = game.state.lanes[side][lane].inhibitor
                if inhibitor.destroyed and inhibitor.respawn_minute <= minute:
                    game.emit(GameEvent(EventKind.INHIBITOR_RESPAWN, minute_start, side=side, payload={"lane": lane}))

    def _fight_damage(self, game: _Game, winner: Side, second: int) -> None:
        """Record damage dealt and taken by everyone alive in a fight."""
        dealt: dict = {}
        taken: dict = {}
        state = game.state
        for side, divisor, spread in ((winner, 10, 500), (winner.opponent, 15, 300)):
            targets = state.lineup(side.opponent)
            for p in state.lineup(side):
                if not p.is_alive(second):
                    continue
                damage = p.gold / divisor + self.rng.random() * spread
                dealt[p.ref] = dealt.get(p.ref, 0.0) + damage
                if not targets:
                    continue
                target = self.rng.choice(targets)
                taken[target.ref] = taken.get(target.ref, 0.0) + damage
        game.emit(GameEvent(EventKind.FIGHT_DAMAGE, second, side=winner, payload={"dealt": dealt, "taken": taken}))

    # ------------------------------------------------------------------
    # Objectives
    # ------------------------------------------------------------------

    def _fixed_objectives(self, game: _Game, minute: int, minute_start: int, powers: dict[Side, float]) -> None:
        if minute == OBJECTIVES["grubs"]["minute"]:
            winner = self.resolver.resolve(powers[Side.BLUE], powers[Side.RED])
            second = minute_start + 5
            self._fight_damage(game, winner, second)
            game.emit(
                GameEvent(
                    EventKind.GRUBS,
                    second,
                    side=winner,
                    payload={
                        "count": OBJECTIVES["grubs"]["count"],
                        "gold_per_player": OBJECTIVES["grubs"]["gold"] // 5,
                    },
                )
            )

        if minute == OBJECTIVES["herald"]["minute"]:
            winner = self.resolver.resolve(powers[Side.BLUE], powers[Side.RED])
            self._fight_damage(game, winner, minute_start)
            game.emit(
                GameEvent(
                    EventKind.HERALD,
                    minute_start,
                    side=winner,
                    payload={"gold_per_player": OBJECTIVES["herald"]["gold"] // 5},
                )
            )

    def _spawn_second(self, minute_start: int, spawn_second: int) -> int:
        """Absolute second inside this minute, no earlier than the spawn."""
        earliest = max(0, spawn_second - minute_start)
        return minute_start + self.rng.randrange(earliest, 60)

    @staticmethod
    def _spawns_this_minute(minute_start: int, spawn_second: Optional[int]) -> bool:
        return spawn_second is not None and minute_start + 59 >= spawn_second

    def _contest(self, game: _Game, second: int, factor: float = 1.0) -> Side:
        powers = self._powers_at(game.state, second)
        winner = self.resolver.resolve(powers[Side.BLUE] * factor, powers[Side.RED] * factor)
        self._fight_damage(game, winner, second)
        return winner

    def _dragon(self, game: _Game, minute_start: int) -> None:
        state = game.state
        if state.soul is not None or not self._spawns_this_minute(minute_start, state.next_dragon_second):
            return

        second = self._spawn_second(minute_start, state.next_dragon_second)
        winner = self._contest(game, second)

        state = game.state
        map_element = state.dragon_order[-1]
        element = state.dragon_order[min(state.dragons_taken, len(state.dragon_order) - 1)]
        payload = {"element": element, "gold_per_player": OBJECTIVES["dragon"]["gold"] // 5}
        if len(state.dragons[winner]) + 1 >= OBJECTIVES["dragon"]["soul_at"]:
            payload["soul"] = map_element
        game.emit(GameEvent(EventKind.DRAGON, second, side=winner, payload=payload))

    def _baron(self, game: _Game, minute: int, minute_start: int) -> None:
        state = game.state
        if state.baron.is_active(minute) or not self._spawns_this_minute(minute_start, state.next_baron_second):
            return
        if not (self.rng.random() < BARON_ATTEMPT_CHANCE or minute > BARON_ALWAYS_AFTER):
            return

        second = self._spawn_second(minute_start, state.next_baron_second)
        winner = self._contest(game, second, OBJECTIVES["baron"]["contest_factor"])
        game.emit(
            GameEvent(
                EventKind.BARON,
                second,
                side=winner,
                payload={"gold_per_player": OBJECTIVES["baron"]["gold"] // 5},
            )
        )

    def _elder(self, game: _Game, minute: int, minute_start: int) -> None:
        state = game.state
        if state.elder.is_active(minute) or not self._spawns_this_minute(minute_start, state.next_elder_second):
            return

        second = self._spawn_second(minute_start, state.next_elder_second)
        winner = self._contest(game, second)
        game.emit(GameEvent(EventKind.ELDER, second, side=winner))

    # ------------------------------------------------------------------
    # Skirmishes
    # ------------------------------------------------------------------

    def _skirmish_chance(self, state: GameState, minute: int, minute_start: int) -> float:
        # Later conditions override earlier ones
        chance = skirmish_base_chance(minute)
        if state.baron.is_active(minute):
            chance = BARON_SKIRMISH_CHANCE
        if state.soul is not None:
            chance = SOUL_SKIRMISH_CHANCE
        if state.elder.is_active(minute):
            chance = ELDER_SKIRMISH_CHANCE
        if self._spawns_this_minute(minute_start, state.next_dragon_second):
            chance = DRAGON_SKIRMISH_CHANCE
        return chance

    def _weighted_player(
        self,
        candidates: list[PlayerRuntimeState],
        weights: dict[str, float],
        with_mechanics: bool = False,
    ) -> Optional[PlayerRuntimeState]:
        if not candidates:
            return None
        values = []
        for p in candidates:
            weight = weights.get(p.role, 10)
            if with_mechanics:
                weight += p.player.detail.mechanics / 10
            values.append(weight)
        return weighted_choice(self.rng, candidates, values)

    def _kill_count(self) -> int:
        roll = self.rng.random()
        for threshold, kills in MULTIKILL_ROLLS:
            if roll > threshold:
                return kills
        return 1

    def _flash_burned(self, p: PlayerRuntimeState, minute: int) -> bool:
        return self.rng.random() < FLASH_BURN_CHANCE and p.has_flash(minute)

    def _skirmish(self, game: _Game, minute: int, minute_start: int, diff_ratio: float) -> None:
        combat_offset = self.rng.randrange(0, SKIRMISH_WINDOW)
        second = minute_start + combat_offset
        winner = self._contest(game, second)
        loser = winner.opponent

        max_kills = self._kill_count()
        killer = self._weighted_player(game.state.alive(winner, second), KILL_WEIGHTS, with_mechanics=True)
        kills = 0
        for k in range(max_kills):
            victims = game.state.alive(loser, second)
            if killer is None or not victims:
                break
            victim = self.rng.choice(victims)
            kills += 1

            assists = []
            candidates = [p for p in game.state.alive(winner, second) if p.role != killer.role]
            for _ in range(self.rng.randrange(1, 4)):
                if not candidates:
                    break
                assister = self._weighted_player(candidates, ASSIST_WEIGHTS)
                if assister.ref not in assists:
                    assists.append(assister.ref)

            current_killer = game.state.player(killer.ref)
            game.emit(
                GameEvent(
                    EventKind.KILL,
                    second + k,
                    side=winner,
                    actor=killer.ref,
                    target=victim.ref,
                    assists=tuple(assists),
                    payload={
                        "respawn_second": second + death_timer(victim.level, minute),
                        "killer_flash": self._flash_burned(current_killer, minute),
                        "victim_flash": self._flash_burned(victim, minute),
                        "multikill": kills,
                        "gold": GOLD["kill"],
                        "assist_gold": GOLD["assist"],
                    },
                )
            )

        if kills < COUNTER_KILL_MAX_KILLS and self.rng.random() < COUNTER_KILL_CHANCE:
            self._counter_kill(game, winner, minute, second)

        self._push(game, winner, minute, minute_start, combat_offset, diff_ratio)

    def _counter_kill(self, game: _Game, winner: Side, minute: int, second: int) -> None:
        loser = winner.opponent
        defenders = game.state.alive(loser, second)
        attackers = game.state.alive(winner, second)
        if not defenders or not attackers:
            return
        killer = self._weighted_player(defenders, KILL_WEIGHTS, with_mechanics=True)
        victim = self.rng.choice(attackers)
        game.emit(
            GameEvent(
                EventKind.COUNTER_KILL,
                second + 2,
                side=loser,
                actor=killer.ref,
                target=victim.ref,
                payload={
                    "respawn_second": second + death_timer(victim.level, minute),
                    "gold": GOLD["kill"] + GOLD["assist"],
                },
            )
        )

    # ------------------------------------------------------------------
    # Structures
    # ------------------------------------------------------------------

    def _push(
        self,
        game: _Game,
        winner: Side,
        minute: int,
        minute_start: int,
        combat_offset: int,
        diff_ratio: float,
    ) -> None:
        base_offset = min(59, combat_offset + 5)
        lanes = [self.rng.choice(LANES)]
        baron = game.state.baron.is_active_for(winner, minute)
        elder = game.state.elder.is_active_for(winner, minute)
        if baron:
            lanes = list(LANES)

        push_power = 1.0 + diff_ratio * 2
        if baron:
            push_power += 1.0
        if elder:
            push_power += 2.0

        for idx, lane in enumerate(lanes):
            second = minute_start + min(59, base_offset + idx * 3)
            self._push_lane(game, winner, lane, minute, second, push_power, diff_ratio, baron, elder)
            if game.state.is_over:
                return

    def _push_lane(
        self,
        game: _Game,
        winner: Side,
        lane: str,
        minute: int,
        second: int,
        push_power: float,
        diff_ratio: float,
        baron: bool,
        elder: bool,
    ) -> None:
        """Attack the first standing structure of ``lane``."""
        loser = winner.opponent
        target = game.state.lanes[loser][lane]
        plates = OBJECTIVES["plates"]

        def structure(kind: EventKind, **payload) -> GameEvent:
            return GameEvent(kind, second, side=winner, payload={"lane": lane, **payload})

        if not target.outer.destroyed:
            if plates["start_minute"] <= minute < plates["end_minute"]:
                if self.rng.random() < PUSH_CHANCES["plate"] * push_power and target.outer.plates > 0:
                    gold = GOLD["outer_plate"]
                    game.emit(
                        structure(
                            EventKind.TURRET_PLATE,
                            plates_taken=plates["count"] - target.outer.plates + 1,
                            local_gold=gold["local"],
                            team_gold=gold["team"],
                        )
                    )
            elif minute >= plates["end_minute"]:
                if self.rng.random() < PUSH_CHANCES["outer"] * push_power:
                    gold = GOLD["outer_turret"]
                    game.emit(
                        structure(EventKind.TURRET, tier="outer", local_gold=gold["local"], team_gold=gold["team"])
                    )
        elif not target.inner.destroyed:
            if self.rng.random() < PUSH_CHANCES["inner"] * push_power:
                gold = GOLD["inner_mid"] if lane == "mid" else GOLD["inner_side"]
                game.emit(structure(EventKind.TURRET, tier="inner", local_gold=gold["local"], team_gold=gold["team"]))
        elif not target.inhib_turret.destroyed:
            if self.rng.random() < PUSH_CHANCES["inhib_turret"] * push_power:
                gold = GOLD["inhib_turret"]
                game.emit(
                    structure(EventKind.TURRET, tier="inhib_turret", local_gold=gold["local"], team_gold=gold["team"])
                )
        elif not target.inhibitor.destroyed:
            if self.rng.random() < PUSH_CHANCES["inhibitor"] * push_power:
                game.emit(
                    structure(
                        EventKind.INHIBITOR,
                        respawn_minute=minute + INHIBITOR_RESPAWN_MINUTES,
                        team_gold=GOLD["inhibitor"]["team"],
                    )
                )
        elif self.rng.random() < PUSH_CHANCES["nexus"] * push_power:
            damage = 10 + diff_ratio * 100
            if baron:
                damage *= 1.5
            if elder:
                damage *= 2.0
            if damage >= game.state.nexus_health[loser]:
                game.emit(structure(EventKind.NEXUS_DESTROYED, damage=damage))
            else:
                announce = self.rng.random() < NEXUS_ANNOUNCE_CHANCE
                game.emit(structure(EventKind.NEXUS_DAMAGE, damage=damage, announce=announce))

    # ------------------------------------------------------------------
    # Time cap
    # ------------------------------------------------------------------

    def _end_at_time_limit(self, game: _Game) -> None:
        """Pick a winner for a game that reached the minute cap."""
        state = game.state
        blue, red = Side.BLUE, Side.RED
        tiebreaks = [
            ("nexus health", state.nexus_health[blue], state.nexus_health[red]),
            ("structures", state.structures_destroyed(red), state.structures_destroyed(blue)),
            ("kills", state.kills[blue], state.kills[red]),
            ("gold", state.team_gold[blue], state.team_gold[red]),
        ]
        winner, reason = None, "coin flip"
        for name, blue_value, red_value in tiebreaks:
            if blue_value != red_value:
                winner, reason = (blue if blue_value > red_value else red), name
                break
        if winner is None:
            winner = blue if self.rng.random() < 0.5 else red

        logger.info("Game hit the %d minute cap; %s wins on %s", self.max_minutes, winner.value, reason)
        game.emit(GameEvent(EventKind.TIME_LIMIT, self.max_minutes * 60, side=winner, payload={"reason": reason}))
