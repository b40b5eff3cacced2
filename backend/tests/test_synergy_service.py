"""Tests for synergy service."""
import pytest

from rift_sim.models.champion import SynergyCombo
from rift_sim.services.synergy_service import SynergyService


@pytest.fixture
def service():
    return SynergyService(
        [
            SynergyCombo(("Xayah", "Rakan"), 1.10),
            SynergyCombo(("Sejuani", "Taliyah", "Rell"), 1.08),
        ]
    )


def test_team_multiplier_requires_every_member(service):
    assert service.team_multiplier(["Xayah", "Azir"]) == 1.0
    assert service.team_multiplier(["Xayah", "Rakan", "Azir"]) == pytest.approx(1.10)
    assert service.team_multiplier(["Xayah", "Rakan", "Sejuani", "Taliyah", "Rell"]) == pytest.approx(1.10 * 1.08)


def test_pick_completing_a_combo_gets_full_bonus(service):
    assert service.pick_multiplier("Rakan", ["Xayah"], []) == pytest.approx(1.10)


def test_pick_with_available_partner_gets_partial_bonus(service):
    partial = service.pick_multiplier("Xayah", [], ["Rakan"])
    assert partial == pytest.approx(1 + 0.10 * SynergyService.POTENTIAL_SHARE)


def test_pick_with_partner_gone_gets_nothing(service):
    assert service.pick_multiplier("Xayah", [], ["Azir"]) == 1.0


def test_three_piece_combo_counts_partner_already_picked(service):
    partial = service.pick_multiplier("Rell", ["Sejuani"], ["Taliyah"])
    assert partial == pytest.approx(1 + 0.08 * SynergyService.POTENTIAL_SHARE)


def test_ban_denies_last_combo_piece(service):
    assert service.ban_multiplier("Rakan", ["Xayah"]) == SynergyService.DENIAL_BAN_MULTIPLIER
    assert service.ban_multiplier("Rakan", []) == 1.0


def test_empty_service_is_neutral():
    service = SynergyService()
    assert service.team_multiplier(["Xayah", "Rakan"]) == 1.0
    assert service.pick_multiplier("Xayah", ["Rakan"], []) == 1.0
