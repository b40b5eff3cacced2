"""Scoring components shared by the draft and the power model."""
from rift_sim.services.scorers.champion_scorer import ChampionScorer

__all__ = ["ChampionScorer"]
