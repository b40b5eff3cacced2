"""Utility modules for rift_sim."""

from rift_sim.utils.role_normalizer import (
    CANONICAL_ROLES,
    ROLE_ALIASES,
    ROLE_ORDER,
    normalize_role,
    normalize_role_strict,
    role_index,
    role_label,
)
from rift_sim.utils.random_source import RandomSource, make_rng, weighted_choice

__all__ = [
    "CANONICAL_ROLES",
    "ROLE_ALIASES",
    "ROLE_ORDER",
    "normalize_role",
    "normalize_role_strict",
    "role_index",
    "role_label",
    "RandomSource",
    "make_rng",
    "weighted_choice",
]
