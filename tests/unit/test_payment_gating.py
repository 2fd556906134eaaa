"""Тесты payment gating Swap Coordinator.

Проверяет:
1. perform_swap заблокирован до выполнения обязательного платежа
2. Платёж может выполнить только обязанная сторона и только в своём направлении
3. Отказ ledger → PaymentFailed, статус и балансы не меняются, retry возможен
"""

import pytest

from src.core.domain import (
    InsufficientAuthorization,
    InsufficientBalance,
    NotObligatedParty,
    PaymentFailed,
    PaymentSettled,
    SwapStatus,
    WrongState,
)
from src.swap import deploy_swap_environment


OWNER = "0x" + "1" * 40
ORIGIN = "0x" + "a" * 40
TARGET = "0x" + "b" * 40
OTHER = "0x" + "c" * 40

TOKEN_ORIGIN = 1
TOKEN_TARGET = 2
AMOUNT = 1653


@pytest.fixture
def deployment():
    env = deploy_swap_environment(OWNER, ORIGIN, origin_asset=TOKEN_ORIGIN)
    env.registry.assign_asset(OWNER, TOKEN_TARGET, "https://www.tokenUriTarget.com", TARGET)
    return env


@pytest.fixture
def origin_pays(deployment):
    """Принят offer, по которому origin holder должен AMOUNT."""
    swap = deployment.coordinator
    deployment.ledger.mint(OWNER, ORIGIN, 2000)
    swap.add_offer(TARGET, TOKEN_TARGET, AMOUNT, 0)
    swap.accept_offer(ORIGIN, TOKEN_TARGET)
    return deployment


@pytest.fixture
def target_pays(deployment):
    """Принят offer, по которому proposer должен AMOUNT."""
    swap = deployment.coordinator
    deployment.ledger.mint(OWNER, TARGET, 2000)
    swap.add_offer(TARGET, TOKEN_TARGET, 0, AMOUNT)
    swap.accept_offer(ORIGIN, TOKEN_TARGET)
    return deployment


class TestPaymentRequired:
    """perform_swap до оплаты."""

    def test_perform_swap_blocked_until_paid(self, origin_pays):
        swap = origin_pays.coordinator
        origin_pays.registry.approve_controller(ORIGIN, TOKEN_ORIGIN, swap.address)
        origin_pays.registry.approve_controller(TARGET, TOKEN_TARGET, swap.address)

        with pytest.raises(WrongState):
            swap.perform_swap(ORIGIN)
        assert origin_pays.registry.owner_of(TOKEN_ORIGIN) == ORIGIN

        origin_pays.ledger.preauthorize(ORIGIN, swap.address, AMOUNT)
        swap.pay_from_origin_to_target(ORIGIN)
        swap.perform_swap(ORIGIN)
        assert swap.status == SwapStatus.SETTLED

    def test_payment_not_allowed_before_acceptance(self, deployment):
        with pytest.raises(WrongState):
            deployment.coordinator.pay_from_origin_to_target(ORIGIN)

    def test_payment_not_allowed_without_obligation(self, deployment):
        swap = deployment.coordinator
        swap.add_offer(TARGET, TOKEN_TARGET)
        swap.accept_offer(ORIGIN, TOKEN_TARGET)

        with pytest.raises(WrongState):
            swap.pay_from_origin_to_target(ORIGIN)

    def test_second_payment_is_wrong_state(self, origin_pays):
        swap = origin_pays.coordinator
        origin_pays.ledger.preauthorize(ORIGIN, swap.address, AMOUNT * 2)
        swap.pay_from_origin_to_target(ORIGIN)

        with pytest.raises(WrongState):
            swap.pay_from_origin_to_target(ORIGIN)
        assert origin_pays.ledger.balance_of(TARGET) == AMOUNT


class TestObligatedParty:
    """Только обязанная сторона в своём направлении."""

    def test_wrong_direction(self, origin_pays):
        swap = origin_pays.coordinator
        with pytest.raises(NotObligatedParty):
            swap.pay_from_target_to_origin(TARGET)
        assert swap.status == SwapStatus.AWAITING_PAYMENT

    def test_wrong_payer(self, origin_pays):
        swap = origin_pays.coordinator
        origin_pays.ledger.preauthorize(ORIGIN, swap.address, AMOUNT)

        for caller in (TARGET, OTHER, OWNER):
            with pytest.raises(NotObligatedParty):
                swap.pay_from_origin_to_target(caller)
        assert origin_pays.ledger.balance_of(ORIGIN) == 2000

    def test_target_pays_origin(self, target_pays):
        swap = target_pays.coordinator
        target_pays.ledger.preauthorize(TARGET, swap.address, AMOUNT)

        with pytest.raises(NotObligatedParty):
            swap.pay_from_target_to_origin(ORIGIN)

        swap.pay_from_target_to_origin(TARGET)
        assert swap.status == SwapStatus.READY
        assert swap.payment_settled is True
        assert target_pays.ledger.balance_of(ORIGIN) == AMOUNT
        assert target_pays.ledger.allowance(TARGET, swap.address) == 0


class TestLedgerFailures:
    """Отказ ledger → PaymentFailed, состояние не меняется."""

    def test_missing_preauthorization(self, origin_pays):
        swap = origin_pays.coordinator

        with pytest.raises(PaymentFailed) as exc_info:
            swap.pay_from_origin_to_target(ORIGIN)

        assert isinstance(exc_info.value.__cause__, InsufficientAuthorization)
        assert swap.status == SwapStatus.AWAITING_PAYMENT
        assert swap.payment_settled is False
        assert origin_pays.ledger.balance_of(ORIGIN) == 2000

    def test_partial_preauthorization(self, origin_pays):
        swap = origin_pays.coordinator
        origin_pays.ledger.preauthorize(ORIGIN, swap.address, AMOUNT - 1)

        with pytest.raises(PaymentFailed):
            swap.pay_from_origin_to_target(ORIGIN)
        assert origin_pays.ledger.allowance(ORIGIN, swap.address) == AMOUNT - 1

    def test_insufficient_balance(self, deployment):
        swap = deployment.coordinator
        deployment.ledger.mint(OWNER, ORIGIN, 100)
        swap.add_offer(TARGET, TOKEN_TARGET, AMOUNT, 0)
        swap.accept_offer(ORIGIN, TOKEN_TARGET)
        deployment.ledger.preauthorize(ORIGIN, swap.address, AMOUNT)

        with pytest.raises(PaymentFailed) as exc_info:
            swap.pay_from_origin_to_target(ORIGIN)

        assert isinstance(exc_info.value.__cause__, InsufficientBalance)
        assert deployment.ledger.balance_of(ORIGIN) == 100
        assert deployment.ledger.allowance(ORIGIN, swap.address) == AMOUNT
        assert swap.status == SwapStatus.AWAITING_PAYMENT

    def test_retry_after_funding(self, origin_pays):
        swap = origin_pays.coordinator

        with pytest.raises(PaymentFailed):
            swap.pay_from_origin_to_target(ORIGIN)

        origin_pays.ledger.preauthorize(ORIGIN, swap.address, AMOUNT)
        swap.pay_from_origin_to_target(ORIGIN)

        assert swap.status == SwapStatus.READY
        event = swap.events[-1]
        assert isinstance(event, PaymentSettled)
        assert event.payer == ORIGIN
        assert event.payee == TARGET
        assert event.amount == AMOUNT
