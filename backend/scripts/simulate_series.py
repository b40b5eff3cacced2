#!/usr/bin/env python3
"""Simulate a fearless series between two teams and print the log.

Usage:
    uv run python backend/scripts/simulate_series.py "Azure Dragons" "Crimson Tide" --format BO5 --seed 7
    uv run python backend/scripts/simulate_series.py "Iron Wolves" "Golden Owls" --quick

Reads reference data from knowledge/ (or --knowledge-dir).
"""
import argparse
import logging
import random
import sys
from pathlib import Path

from rift_sim.config import settings
from rift_sim.models.options import Difficulty, SeriesFormat, SimOptions
from rift_sim.models.results import SeriesResult
from rift_sim.repositories.roster_repository import RosterRepository, default_knowledge_dir
from rift_sim.services.match_orchestrator import MatchOrchestrator
from rift_sim.services.quick_simulator import QuickSimulator


def print_series(result: SeriesResult, verbose: bool) -> None:
    print(f"{result.team_a} vs {result.team_b} ({result.series_format.value})")
    for entry in result.history:
        print()
        print(f"--- Set {entry.set_number} | blue: {entry.blue_team} ---")
        lines = entry.logs if verbose else [entry.summary]
        for line in lines:
            print(line)
        if entry.fearless_bans:
            print(f"Fearless: {', '.join(entry.fearless_bans)}")

    print()
    if result.winner is None:
        print(f"Series stopped without a winner ({result.score_string})")
        return
    print(f"Winner: {result.winner} {result.score_string}")
    if result.series_mvp:
        mvp = result.series_mvp
        print(
            f"Series MVP: {mvp.player_name} ({mvp.team}) - {mvp.kills}/{mvp.deaths}/{mvp.assists}"
            f" over {mvp.sets_played} sets, score {mvp.score:.1f}"
        )


def main():
    parser = argparse.ArgumentParser(description="Simulate a fearless series")
    parser.add_argument("team_a", help="Team A (blue in set 1)")
    parser.add_argument("team_b", help="Team B")
    parser.add_argument("--format", "-f", choices=[f.value for f in SeriesFormat],
                        default=settings.default_series_format.value)
    parser.add_argument("--difficulty", "-d", choices=[d.value for d in Difficulty], default="normal")
    parser.add_argument("--player-team", help="Team the difficulty setting applies to")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible series")
    parser.add_argument("--knowledge-dir", type=Path, default=default_knowledge_dir(),
                        help="Directory with champions/players/mastery/synergies JSON")
    parser.add_argument("--quick", "-q", action="store_true", help="Skip the minute-by-minute engine")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print full draft and game logs")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    repo = RosterRepository(args.knowledge_dir)
    if not repo.get_champions():
        print(f"No champions found in {args.knowledge_dir}", file=sys.stderr)
        sys.exit(1)

    options = SimOptions(
        difficulty=Difficulty(args.difficulty),
        player_team_name=args.player_team,
        series_format=SeriesFormat(args.format),
    )
    rng = random.Random(args.seed)
    if args.quick:
        simulator = QuickSimulator(repo, rng=rng, role_bonus_variant=settings.mvp_role_bonus_variant)
    else:
        simulator = MatchOrchestrator(
            repo,
            rng=rng,
            max_minutes=settings.max_game_minutes,
            role_bonus_variant=settings.mvp_role_bonus_variant,
        )

    try:
        result = simulator.simulate_series(args.team_a, args.team_b, options)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print_series(result, args.verbose)


if __name__ == "__main__":
    main()
