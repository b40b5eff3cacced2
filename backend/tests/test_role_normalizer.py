"""Tests for role normalization."""
import pytest

from rift_sim.utils.role_normalizer import (
    ROLE_ORDER,
    normalize_role,
    normalize_role_strict,
    role_index,
    role_label,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("TOP", "top"),
        ("JGL", "jungle"),
        ("jungle", "jungle"),
        ("MID", "mid"),
        ("ADC", "bot"),
        ("bot", "bot"),
        ("SUP", "support"),
        ("SPT", "support"),
        ("  Support ", "support"),
    ],
)
def test_normalize_role_aliases(raw, expected):
    assert normalize_role(raw) == expected


def test_normalize_role_unknown_returns_none():
    assert normalize_role("coach") is None
    assert normalize_role(None) is None


def test_normalize_role_strict_raises():
    with pytest.raises(ValueError, match="Unknown role"):
        normalize_role_strict("coach")


def test_role_label_round_trip():
    """Every canonical role has a short log label."""
    assert [role_label(r) for r in ROLE_ORDER] == ["TOP", "JGL", "MID", "ADC", "SUP"]


def test_role_index_orders_unknown_last():
    assert role_index("ADC") == ROLE_ORDER.index("bot")
    assert role_index("coach") > role_index("support")
