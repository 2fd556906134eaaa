"""Тесты для Asset Registry.

Coverage:
- Назначение активов (только администратор)
- owner_of / asset_uri / balance_of
- approve_controller и сброс approval при передаче
- check_transfer / transfer_custody
"""

import pytest

from src.core.domain import (
    NULL_ADDRESS,
    AssetAlreadyAssigned,
    InvalidRecipient,
    NotAdministrator,
    NotApproved,
    NotAssetOwner,
    RegistryError,
    UnknownAsset,
)
from src.registry import AssetRegistry, RegistryConfig


OWNER = "0x" + "1" * 40
HOLDER = "0x" + "a" * 40
CONTROLLER = "0x" + "b" * 40
OTHER = "0x" + "c" * 40

ASSET_URI = "https://www.assetinfo.com"


@pytest.fixture
def registry() -> AssetRegistry:
    registry = AssetRegistry(OWNER)
    registry.assign_asset(OWNER, 1, ASSET_URI, HOLDER)
    return registry


class TestAssignment:
    """Тесты назначения активов."""

    def test_assign_asset(self, registry):
        assert registry.owner_of(1) == HOLDER
        assert registry.asset_uri(1) == ASSET_URI
        assert registry.exists(1)
        assert registry.balance_of(HOLDER) == 1

    def test_assign_requires_administrator(self, registry):
        with pytest.raises(NotAdministrator):
            registry.assign_asset(OTHER, 2, ASSET_URI, OTHER)
        assert not registry.exists(2)

    def test_assign_twice_rejected(self, registry):
        with pytest.raises(AssetAlreadyAssigned):
            registry.assign_asset(OWNER, 1, ASSET_URI, OTHER)
        assert registry.owner_of(1) == HOLDER

    def test_assign_zero_asset(self, registry):
        with pytest.raises(UnknownAsset):
            registry.assign_asset(OWNER, 0, ASSET_URI, HOLDER)

    def test_assign_to_null_address(self, registry):
        with pytest.raises(InvalidRecipient):
            registry.assign_asset(OWNER, 2, ASSET_URI, NULL_ADDRESS)

    def test_null_administrator(self):
        with pytest.raises(ValueError):
            AssetRegistry(NULL_ADDRESS)

    def test_default_config(self, registry):
        assert registry.config == RegistryConfig(name="House Asset", symbol="HSA")

    def test_unknown_asset(self, registry):
        with pytest.raises(UnknownAsset):
            registry.owner_of(99)
        with pytest.raises(UnknownAsset):
            registry.asset_uri(99)

    def test_address_comparison_case_insensitive(self, registry):
        assert registry.balance_of(HOLDER.upper().replace("0X", "0x")) == 1


class TestApproval:
    """Тесты approve_controller."""

    def test_approve_by_holder(self, registry):
        registry.approve_controller(HOLDER, 1, CONTROLLER)
        assert registry.get_approved(1) == CONTROLLER

    def test_approve_by_non_holder(self, registry):
        with pytest.raises(NotAssetOwner):
            registry.approve_controller(OTHER, 1, CONTROLLER)
        assert registry.get_approved(1) is None

    def test_revoke_approval(self, registry):
        registry.approve_controller(HOLDER, 1, CONTROLLER)
        registry.approve_controller(HOLDER, 1, None)
        assert registry.get_approved(1) is None

    def test_approval_replaced(self, registry):
        registry.approve_controller(HOLDER, 1, CONTROLLER)
        registry.approve_controller(HOLDER, 1, OTHER)
        assert registry.get_approved(1) == OTHER


class TestCustodyTransfer:
    """Тесты check_transfer / transfer_custody."""

    def test_holder_can_transfer(self, registry):
        registry.transfer_custody(HOLDER, 1, HOLDER, OTHER)
        assert registry.owner_of(1) == OTHER

    def test_approved_controller_can_transfer(self, registry):
        registry.approve_controller(HOLDER, 1, CONTROLLER)
        registry.transfer_custody(CONTROLLER, 1, HOLDER, OTHER)

        assert registry.owner_of(1) == OTHER
        assert registry.get_approved(1) is None

    def test_unapproved_transfer(self, registry):
        with pytest.raises(NotApproved):
            registry.transfer_custody(CONTROLLER, 1, HOLDER, OTHER)
        assert registry.owner_of(1) == HOLDER

    def test_wrong_from_holder(self, registry):
        registry.approve_controller(HOLDER, 1, CONTROLLER)
        with pytest.raises(NotAssetOwner):
            registry.transfer_custody(CONTROLLER, 1, OTHER, CONTROLLER)

    def test_transfer_to_null_address(self, registry):
        with pytest.raises(InvalidRecipient):
            registry.transfer_custody(HOLDER, 1, HOLDER, NULL_ADDRESS)
        assert registry.owner_of(1) == HOLDER

    def test_check_transfer_has_no_side_effects(self, registry):
        registry.approve_controller(HOLDER, 1, CONTROLLER)
        registry.check_transfer(CONTROLLER, 1, HOLDER)

        assert registry.owner_of(1) == HOLDER
        assert registry.get_approved(1) == CONTROLLER

    def test_approval_does_not_survive_transfer(self, registry):
        registry.approve_controller(HOLDER, 1, CONTROLLER)
        registry.transfer_custody(HOLDER, 1, HOLDER, OTHER)

        with pytest.raises(NotApproved):
            registry.check_transfer(CONTROLLER, 1, OTHER)

    def test_errors_share_base(self, registry):
        with pytest.raises(RegistryError):
            registry.transfer_custody(CONTROLLER, 1, HOLDER, OTHER)
