"""REST endpoints for set, series and quick simulation."""

import random
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from rift_sim.config import settings
from rift_sim.models.champion import Champion
from rift_sim.models.draft import DraftPick
from rift_sim.models.options import Difficulty, SeriesFormat, SimOptions
from rift_sim.models.results import MvpScore, SeriesResult, SetResult
from rift_sim.models.side import Side
from rift_sim.models.team import TeamRoster
from rift_sim.repositories.roster_repository import RosterRepository
from rift_sim.services.match_orchestrator import MatchOrchestrator
from rift_sim.services.quick_simulator import QuickSimulator

router = APIRouter(prefix="/api/matches", tags=["matches"])


class SeriesRequest(BaseModel):
    team_a: str
    team_b: str
    series_format: Optional[Literal["BO3", "BO5"]] = None
    difficulty: Literal["easy", "normal", "hard", "insane"] = "normal"
    player_team: Optional[str] = None
    fearless_bans: list[str] = Field(default_factory=list)
    seed: Optional[int] = None
    strict: bool = False  # 404 for teams without roster data
    include_logs: bool = True


class SetRequest(BaseModel):
    blue_team: str
    red_team: str
    set_number: int = Field(default=1, ge=1, le=5)
    difficulty: Literal["easy", "normal", "hard", "insane"] = "normal"
    player_team: Optional[str] = None
    fearless_bans: list[str] = Field(default_factory=list)
    seed: Optional[int] = None
    strict: bool = False


def _get_repository(request: Request) -> RosterRepository:
    return request.app.state.repository


def _resolve_team(repo: RosterRepository, name: str, strict: bool) -> TeamRoster:
    if strict and not repo.has_team(name):
        raise HTTPException(status_code=404, detail=f"Team not found: {name}")
    return repo.get_roster(name)


def _options(body: SeriesRequest | SetRequest, series_format: Optional[str] = None) -> SimOptions:
    return SimOptions(
        difficulty=Difficulty(body.difficulty),
        player_team_name=body.player_team,
        series_format=SeriesFormat(series_format or settings.default_series_format),
        fearless_bans=list(body.fearless_bans),
    )


def _orchestrator(repo: RosterRepository, seed: Optional[int]) -> MatchOrchestrator:
    return MatchOrchestrator(
        repo,
        rng=random.Random(seed),
        max_minutes=settings.max_game_minutes,
        role_bonus_variant=settings.mvp_role_bonus_variant,
    )


@router.post("/series")
async def simulate_series(request: Request, body: SeriesRequest):
    """Simulate a full fearless series with the tick engine."""
    repo = _get_repository(request)
    team_a = _resolve_team(repo, body.team_a, body.strict)
    team_b = _resolve_team(repo, body.team_b, body.strict)
    if team_a.name == team_b.name:
        raise HTTPException(status_code=400, detail="Teams must be different")

    result = _orchestrator(repo, body.seed).simulate_series(
        team_a, team_b, _options(body, body.series_format)
    )
    return _serialize_series(result, body.include_logs)


@router.post("/set")
async def simulate_set(request: Request, body: SetRequest):
    """Draft and play a single set."""
    repo = _get_repository(request)
    blue = _resolve_team(repo, body.blue_team, body.strict)
    red = _resolve_team(repo, body.red_team, body.strict)
    if blue.name == red.name:
        raise HTTPException(status_code=400, detail="Teams must be different")

    result = _orchestrator(repo, body.seed).simulate_set(
        blue, red, body.set_number, list(body.fearless_bans), _options(body)
    )
    return _serialize_set(result, include_logs=True)


@router.post("/quick")
async def quick_simulate(request: Request, body: SeriesRequest):
    """Series result without the minute-by-minute engine."""
    repo = _get_repository(request)
    team_a = _resolve_team(repo, body.team_a, body.strict)
    team_b = _resolve_team(repo, body.team_b, body.strict)
    if team_a.name == team_b.name:
        raise HTTPException(status_code=400, detail="Teams must be different")

    simulator = QuickSimulator(
        repo,
        rng=random.Random(body.seed),
        role_bonus_variant=settings.mvp_role_bonus_variant,
    )
    result = simulator.simulate_series(team_a, team_b, _options(body, body.series_format))
    return _serialize_series(result, body.include_logs)


@router.get("/teams")
async def list_teams(request: Request):
    """Teams with roster data."""
    return {"teams": _get_repository(request).get_team_names()}


@router.get("/teams/{team_name}/roster")
async def get_roster(request: Request, team_name: str):
    repo = _get_repository(request)
    if not repo.has_team(team_name):
        raise HTTPException(status_code=404, detail="Team not found")
    return _serialize_roster(repo.get_roster(team_name))


@router.get("/champions")
async def list_champions(request: Request, role: Optional[str] = None):
    """Champion catalog, optionally filtered to one canonical role."""
    champions = _get_repository(request).get_champions()
    if role:
        champions = [c for c in champions if c.role == role]
    return {"champions": [_serialize_champion(c) for c in champions]}


# Helper functions

def _serialize_champion(champion: Champion) -> dict:
    return {
        "name": champion.name,
        "role": champion.role,
        "tier": champion.tier,
        "damage_type": champion.damage_type.value,
        "class": champion.champion_class.value,
        "counters": list(champion.counters),
    }


def _serialize_roster(roster: TeamRoster) -> dict:
    return {
        "name": roster.name,
        "players": [
            {"name": p.name, "role": p.role, "overall": p.overall} for p in roster.players
        ],
    }


def _serialize_pick(pick: DraftPick) -> dict:
    return {
        "role": pick.role,
        "champion": pick.champion_name,
        "player": pick.player.name,
    }


def _serialize_mvp(score: Optional[MvpScore]) -> Optional[dict]:
    """Serialize a POG/POS entry."""
    if score is None:
        return None
    return {
        "player": score.player_name,
        "team": score.team,
        "role": score.role,
        "champion": score.champion_name,
        "score": round(score.score, 2),
        "kills": score.kills,
        "deaths": score.deaths,
        "assists": score.assists,
        "dpm": round(score.damage_per_minute, 1),
        "gold": score.gold,
        "level": score.level,
        "sets_played": score.sets_played,
    }


def _serialize_set(result: SetResult, include_logs: bool) -> dict:
    """Serialize SetResult to dict, keyed by map side."""
    payload = {
        "set_number": result.set_number,
        "blue_team": result.blue_team,
        "red_team": result.red_team,
        "winner": result.winner_name,
        "summary": result.summary,
        "duration_seconds": result.duration_seconds,
        "kills": {side.value: result.kills.get(side, 0) for side in Side},
        "picks": {
            side.value: [_serialize_pick(p) for p in result.picks.get(side, [])] for side in Side
        },
        "bans": {side.value: result.bans.get(side, []) for side in Side},
        "used_champions": result.used_champions,
        "fearless_bans": result.fearless_bans,
        "pog": _serialize_mvp(result.pog),
        "box_score": {
            side.value: [_serialize_mvp(s) for s in result.box_score.get(side, [])] for side in Side
        },
        "level_progress": [
            {"player": lp.player_name, "start": lp.start_level, "end": lp.end_level}
            for lp in result.level_progress
        ],
    }
    if include_logs:
        payload["event_log"] = result.event_log
    return payload


def _serialize_series(result: SeriesResult, include_logs: bool) -> dict:
    """Serialize SeriesResult to dict; history is keyed by team slot A/B."""
    return {
        "team_a": result.team_a,
        "team_b": result.team_b,
        "format": result.series_format.value,
        "winner": result.winner,
        "score": result.score_string,
        "series_mvp": _serialize_mvp(result.series_mvp),
        "fearless_bans": result.fearless_bans,
        "history": [
            {
                "set_number": entry.set_number,
                "winner": entry.winner,
                "blue_team": entry.blue_team,
                "scores": entry.scores,
                "picks": {slot: [_serialize_pick(p) for p in picks] for slot, picks in entry.picks.items()},
                "bans": entry.bans,
                "fearless_bans": entry.fearless_bans,
                "summary": entry.summary,
                "duration_seconds": entry.duration_seconds,
                "pog": _serialize_mvp(entry.pog),
                **({"logs": entry.logs} if include_logs else {}),
            }
            for entry in result.history
        ],
    }
