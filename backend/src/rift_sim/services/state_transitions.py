"""Pure state transitions for the tick engine.

``apply_event(state, event)`` returns a new GameState and never touches the
one it was given. All randomness has already been rolled by the engine and
travels in the event payload, so replaying a list of events over the initial
state reproduces the game exactly.
"""

from dataclasses import replace
from typing import Callable

from rift_sim.models.events import EventKind, GameEvent
from rift_sim.models.game import (
    BuffTimer,
    EngineStatus,
    GameState,
    InhibitorState,
    LaneState,
    PlayerRef,
    PlayerRuntimeState,
    SoulState,
)
from rift_sim.models.side import Side
from rift_sim.services.economy import comeback_adjusted, gain_experience
from rift_sim.utils.game_rules import GOLD, LANE_OWNER, OBJECTIVES

FLASH_COOLDOWN_MINUTES = 5


def _with_side(mapping: dict, side: Side, value) -> dict:
    return {**mapping, side: value}


def _update_player(
    state: GameState,
    ref: PlayerRef,
    update: Callable[[PlayerRuntimeState], PlayerRuntimeState],
) -> GameState:
    lineup = tuple(update(p) if p.role == ref.role else p for p in state.players[ref.side])
    return replace(state, players=_with_side(state.players, ref.side, lineup))


def _update_stats(state: GameState, ref: PlayerRef, **deltas) -> GameState:
    def bump(p: PlayerRuntimeState) -> PlayerRuntimeState:
        changes = {name: getattr(p.stats, name) + delta for name, delta in deltas.items()}
        return replace(p, stats=replace(p.stats, **changes))

    return _update_player(state, ref, bump)


def _comeback(state: GameState, side: Side, amount: int) -> int:
    return comeback_adjusted(amount, state.team_gold[side], state.team_gold[side.opponent])


def grant_player_gold(state: GameState, ref: PlayerRef, amount: int) -> GameState:
    amount = _comeback(state, ref.side, amount)
    state = _update_player(state, ref, lambda p: replace(p, gold=p.gold + amount))
    return replace(
        state,
        team_gold=_with_side(state.team_gold, ref.side, state.team_gold[ref.side] + amount),
    )


def grant_team_gold(state: GameState, side: Side, amount_per_player: int) -> GameState:
    amount = _comeback(state, side, amount_per_player)
    lineup = tuple(replace(p, gold=p.gold + amount) for p in state.players[side])
    return replace(
        state,
        players=_with_side(state.players, side, lineup),
        team_gold=_with_side(state.team_gold, side, state.team_gold[side] + amount * len(lineup)),
    )


def _update_lane(state: GameState, side: Side, lane: str, update: Callable[[LaneState], LaneState]) -> GameState:
    lanes = {**state.lanes[side], lane: update(state.lanes[side][lane])}
    return replace(state, lanes=_with_side(state.lanes, side, lanes))


def _end_game(state: GameState, winner: Side, second: int) -> GameState:
    return replace(state, status=EngineStatus.ENDED, winner=winner, end_second=second)


# --- handlers -------------------------------------------------------------


def _minute_start(state: GameState, event: GameEvent) -> GameState:
    return replace(state, minute=event.payload["minute"])


def _passive_income(state: GameState, event: GameEvent) -> GameState:
    income: dict[PlayerRef, tuple[int, int]] = event.payload["income"]
    team_gold = dict(state.team_gold)
    players = {}
    for side in Side:
        lineup = []
        for p in state.players[side]:
            gold, xp = income.get(p.ref, (0, 0))
            level, remaining_xp = gain_experience(p.level, p.xp, xp)
            lineup.append(replace(p, gold=p.gold + gold, level=level, xp=remaining_xp))
            team_gold[side] += gold
        players[side] = tuple(lineup)
    return replace(state, players=players, team_gold=team_gold)


def _inhibitor_respawn(state: GameState, event: GameEvent) -> GameState:
    return _update_lane(
        state, event.side, event.payload["lane"], lambda lane: replace(lane, inhibitor=InhibitorState())
    )


def _grubs(state: GameState, event: GameEvent) -> GameState:
    side = event.side
    state = replace(state, grubs=_with_side(state.grubs, side, state.grubs[side] + event.payload["count"]))
    return grant_team_gold(state, side, event.payload["gold_per_player"])


def _herald(state: GameState, event: GameEvent) -> GameState:
    return grant_team_gold(state, event.side, event.payload["gold_per_player"])


def _dragon(state: GameState, event: GameEvent) -> GameState:
    side = event.side
    dragons = state.dragons[side] + (event.payload["element"],)
    state = replace(
        state,
        dragons=_with_side(state.dragons, side, dragons),
        dragons_taken=state.dragons_taken + 1,
    )
    state = grant_team_gold(state, side, event.payload["gold_per_player"])

    soul = event.payload.get("soul")
    if soul:
        return replace(
            state,
            soul=SoulState(owner=side, element=soul),
            next_dragon_second=None,
            next_elder_second=event.second + OBJECTIVES["elder"]["spawn_after_soul"] * 60,
        )
    return replace(state, next_dragon_second=event.second + OBJECTIVES["dragon"]["respawn"] * 60)


def _baron(state: GameState, event: GameEvent) -> GameState:
    state = replace(
        state,
        baron=BuffTimer(owner=event.side, expires_minute=state.minute + OBJECTIVES["baron"]["duration"]),
        next_baron_second=event.second + OBJECTIVES["baron"]["respawn"] * 60,
    )
    return grant_team_gold(state, event.side, event.payload["gold_per_player"])


def _elder(state: GameState, event: GameEvent) -> GameState:
    return replace(
        state,
        elder=BuffTimer(owner=event.side, expires_minute=state.minute + OBJECTIVES["elder"]["duration"]),
        next_elder_second=event.second + OBJECTIVES["elder"]["respawn"] * 60,
    )


def _fight_damage(state: GameState, event: GameEvent) -> GameState:
    for ref, amount in event.payload.get("dealt", {}).items():
        state = _update_stats(state, ref, damage=amount)
    for ref, amount in event.payload.get("taken", {}).items():
        state = _update_stats(state, ref, damage_taken=amount)
    return state


def _kill(state: GameState, event: GameEvent) -> GameState:
    killer, victim = event.actor, event.target
    payload = event.payload
    state = replace(state, kills=_with_side(state.kills, killer.side, state.kills[killer.side] + 1))
    state = _update_stats(state, killer, kills=1)
    state = _update_stats(state, victim, deaths=1)
    state = _update_player(state, victim, lambda p: replace(p, dead_until=payload["respawn_second"]))
    state = grant_player_gold(state, killer, payload["gold"])

    for assister in event.assists:
        state = _update_stats(state, assister, assists=1)
        state = grant_player_gold(state, assister, payload.get("assist_gold", GOLD["assist"]))

    flash_ready = state.minute + FLASH_COOLDOWN_MINUTES
    if payload.get("killer_flash"):
        state = _update_player(state, killer, lambda p: replace(p, flash_ready_minute=flash_ready))
    if payload.get("victim_flash"):
        state = _update_player(state, victim, lambda p: replace(p, flash_ready_minute=flash_ready))
    return state


def _turret_plate(state: GameState, event: GameEvent) -> GameState:
    lane, loser = event.payload["lane"], event.side.opponent

    def strip_plate(lane_state: LaneState) -> LaneState:
        plates = max(0, lane_state.outer.plates - 1)
        return replace(lane_state, outer=replace(lane_state.outer, plates=plates, destroyed=plates == 0))

    state = _update_lane(state, loser, lane, strip_plate)
    state = grant_player_gold(state, PlayerRef(event.side, LANE_OWNER[lane]), event.payload["local_gold"])
    return grant_team_gold(state, event.side, event.payload["team_gold"])


def _turret(state: GameState, event: GameEvent) -> GameState:
    lane, tier, loser = event.payload["lane"], event.payload["tier"], event.side.opponent

    def destroy(lane_state: LaneState) -> LaneState:
        return replace(lane_state, **{tier: replace(getattr(lane_state, tier), destroyed=True, plates=0)})

    state = _update_lane(state, loser, lane, destroy)
    state = grant_player_gold(state, PlayerRef(event.side, LANE_OWNER[lane]), event.payload["local_gold"])
    return grant_team_gold(state, event.side, event.payload["team_gold"])


def _inhibitor(state: GameState, event: GameEvent) -> GameState:
    lane, loser = event.payload["lane"], event.side.opponent
    inhibitor = InhibitorState(destroyed=True, respawn_minute=event.payload["respawn_minute"])
    state = _update_lane(state, loser, lane, lambda lane_state: replace(lane_state, inhibitor=inhibitor))
    return grant_team_gold(state, event.side, event.payload["team_gold"])


def _nexus_damage(state: GameState, event: GameEvent) -> GameState:
    loser = event.side.opponent
    health = max(0.0, state.nexus_health[loser] - event.payload["damage"])
    state = replace(state, nexus_health=_with_side(state.nexus_health, loser, health))
    if health <= 0:
        return _end_game(state, event.side, event.second)
    return state


def _nexus_destroyed(state: GameState, event: GameEvent) -> GameState:
    loser = event.side.opponent
    state = replace(state, nexus_health=_with_side(state.nexus_health, loser, 0.0))
    return _end_game(state, event.side, event.second)


def _time_limit(state: GameState, event: GameEvent) -> GameState:
    return _end_game(state, event.side, event.second)


_HANDLERS: dict[EventKind, Callable[[GameState, GameEvent], GameState]] = {
    EventKind.MINUTE_START: _minute_start,
    EventKind.PASSIVE_INCOME: _passive_income,
    EventKind.INHIBITOR_RESPAWN: _inhibitor_respawn,
    EventKind.GRUBS: _grubs,
    EventKind.HERALD: _herald,
    EventKind.DRAGON: _dragon,
    EventKind.BARON: _baron,
    EventKind.ELDER: _elder,
    EventKind.FIGHT_DAMAGE: _fight_damage,
    EventKind.KILL: _kill,
    EventKind.COUNTER_KILL: _kill,
    EventKind.TURRET_PLATE: _turret_plate,
    EventKind.TURRET: _turret,
    EventKind.INHIBITOR: _inhibitor,
    EventKind.NEXUS_DAMAGE: _nexus_damage,
    EventKind.NEXUS_DESTROYED: _nexus_destroyed,
    EventKind.TIME_LIMIT: _time_limit,
}


def apply_event(state: GameState, event: GameEvent) -> GameState:
    """Return the state that results from ``event``.

    Events arriving after the game has ended are ignored.
    """
    if state.is_over:
        return state
    return _HANDLERS[event.kind](state, event)


def apply_events(state: GameState, events: list[GameEvent]) -> GameState:
    for event in events:
        state = apply_event(state, event)
    return state
