"""Simulation services."""

from rift_sim.services.combat_resolver import CombatResolver
from rift_sim.services.draft_simulator import Candidate, DraftSimulator
from rift_sim.services.event_renderer import EventRenderer
from rift_sim.services.match_orchestrator import MatchOrchestrator
from rift_sim.services.post_game_evaluator import PostGameEvaluator
from rift_sim.services.power_model import PowerModel
from rift_sim.services.quick_simulator import GamePace, QuickSimulator
from rift_sim.services.synergy_service import SynergyService
from rift_sim.services.tick_engine import TickEngine

__all__ = [
    "Candidate",
    "CombatResolver",
    "DraftSimulator",
    "EventRenderer",
    "GamePace",
    "MatchOrchestrator",
    "PostGameEvaluator",
    "PowerModel",
    "QuickSimulator",
    "SynergyService",
    "TickEngine",
]
