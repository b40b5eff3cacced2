"""Render structured game events as human-readable log lines."""

from typing import Optional

from rift_sim.models.events import EventKind, EventLogEntry, GameEvent, format_clock
from rift_sim.models.game import GameState, PlayerRef
from rift_sim.models.side import Side
from rift_sim.utils.game_rules import OBJECTIVES
from rift_sim.utils.role_normalizer import role_label

MULTIKILL_LABELS = {2: "Double Kill!", 3: "Triple Kill!", 4: "Quadra Kill!", 5: "Penta Kill!"}

TURRET_NAMES = {"outer": "outer", "inner": "inner", "inhib_turret": "inhibitor"}


class EventRenderer:
    """Turns events into log text for one game.

    Player and champion names are looked up on ``state``; lineups never change
    during a game so any snapshot of it will do.
    """

    def __init__(self, state: GameState, team_names: dict[Side, str]):
        self.state = state
        self.team_names = team_names

    def _team(self, side: Optional[Side]) -> str:
        if side is None:
            return "?"
        return self.team_names.get(side, side.label)

    def _player(self, ref: PlayerRef) -> str:
        p = self.state.player(ref)
        return f"[{role_label(p.role)}] {p.player_name} ({p.champion_name})"

    def _kill(self, event: GameEvent) -> str:
        line = f"{self._player(event.actor)} -> {self._player(event.target)}"
        if event.assists:
            names = ", ".join(self.state.player(ref).player_name for ref in event.assists)
            line += f" | assists: {names}"
        if event.payload.get("killer_flash"):
            line += " (Flash used)"
        label = MULTIKILL_LABELS.get(event.payload.get("multikill", 1))
        if label:
            line += f" [{label}]"
        return line

    def message(self, event: GameEvent) -> Optional[str]:
        """Message text without the clock; None for events that are not logged."""
        kind, team, payload = event.kind, self._team(event.side), event.payload
        lane = payload.get("lane", "").upper()

        if kind.is_bookkeeping:
            return None
        if kind == EventKind.INHIBITOR_RESPAWN:
            return f"{team}'s {lane} inhibitor has respawned"
        if kind == EventKind.GRUBS:
            return f"{team} secures the Void Grubs"
        if kind == EventKind.HERALD:
            return f"{team} takes the Rift Herald"
        if kind == EventKind.DRAGON:
            line = f"{team} slays the {payload['element'].title()} Drake"
            if payload.get("soul"):
                line += f" ({payload['soul'].title()} Soul claimed!)"
            return line
        if kind == EventKind.BARON:
            return f"{team} slays Baron Nashor!"
        if kind == EventKind.ELDER:
            return f"{team} slays the Elder Dragon!"
        if kind == EventKind.KILL:
            return self._kill(event)
        if kind == EventKind.COUNTER_KILL:
            return f"{self._kill(event)} (counter-attack)"
        if kind == EventKind.TURRET_PLATE:
            total = OBJECTIVES["plates"]["count"]
            if payload["plates_taken"] >= total:
                return f"{team} destroys the {lane} outer turret (all plates taken)"
            return f"{team} mines a {lane} turret plate ({payload['plates_taken']}/{total})"
        if kind == EventKind.TURRET:
            return f"{team} destroys the {lane} {TURRET_NAMES[payload['tier']]} turret"
        if kind == EventKind.INHIBITOR:
            return f"{team} destroys the {lane} inhibitor! Super minions incoming"
        if kind == EventKind.NEXUS_DAMAGE:
            if payload.get("announce"):
                return f"{team} is hitting the nexus turrets..."
            return None
        if kind == EventKind.NEXUS_DESTROYED:
            return f"{team} destroys the nexus! GG"
        if kind == EventKind.TIME_LIMIT:
            return f"Time limit reached: {team} wins on {payload.get('reason', 'tiebreak')}"
        return None

    def render(self, event: GameEvent) -> Optional[str]:
        message = self.message(event)
        if message is None:
            return None
        return f"{format_clock(event.second)} {message}"

    def render_log(self, events: list[GameEvent], end_second: Optional[int] = None) -> list[EventLogEntry]:
        """Time-sorted log entries; anything after ``end_second`` is dropped."""
        entries = []
        for event in events:
            if end_second is not None and event.second > end_second:
                continue
            line = self.render(event)
            if line is not None:
                entries.append(EventLogEntry(second=event.second, message=line))
        # Stable: same-second events keep emission order
        return sorted(entries, key=lambda e: e.second)
