"""Swap Coordinator — state machine атомарного обмена двух активов.

Состояния:
- OPEN: принимаются offers, origin holder может отклонить или принять offer
- AWAITING_PAYMENT: offer принят, обязанная сторона должна оплатить через ledger
- READY: платёж не требуется или выполнен, ожидается perform_swap
- SETTLED: custody обоих активов передана (terminal)

Гарантии:
- Каждая операция либо применяется целиком, либо не меняет состояние
- Offers, не принятые до acceptance, становятся недействительными через
  проверку статуса, а не через удаление
- Approval на передачу активов хранится только в registry и проверяется
  в момент perform_swap
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from src.core.contracts import EVENT_CONTRACT, SNAPSHOT_CONTRACT
from src.core.domain.errors import (
    InvalidAsset,
    InvalidCaller,
    InvalidPaymentTerms,
    LedgerError,
    NotAssetHolder,
    NotObligatedParty,
    OfferLimitReached,
    PaymentFailed,
    RegistryError,
    SwapFailed,
    SwapPartiallyApplied,
    Unauthorized,
    UnknownAsset,
    UnknownOffer,
    WrongState,
)
from src.core.domain.events import (
    NewOffer,
    OfferAccepted,
    OfferDeclined,
    PaymentSettled,
    SwapEvent,
    SwapSettled,
)
from src.core.domain.identities import is_null_address, is_null_asset, new_address, same_address
from src.core.domain.swap_state import Offer, PaymentDirection, SwapSnapshot, SwapStatus

from .collaborators import AssetCustody, UnitOfAccount
from .config import SwapConfig

log = logging.getLogger(__name__)

EventListener = Callable[[SwapEvent], None]


class SwapCoordinator:
    """Swap Coordinator для одного origin asset.

    Вызывающий передаётся явно (caller) в каждую операцию.

    Порядок проверок в операциях:
    1. Нулевой caller / нулевой актив
    2. Статус (WrongState)
    3. Права caller
    4. Наличие offer / корректность условий
    """

    def __init__(
        self,
        origin_asset: int,
        registry: AssetCustody,
        ledger: UnitOfAccount,
        deployer: str,
        address: Optional[str] = None,
        config: Optional[SwapConfig] = None
    ):
        """
        Args:
            origin_asset: актив, выставленный на обмен
            registry: Asset Registry
            ledger: Unit-of-Account Ledger
            deployer: адрес администратора, развернувшего coordinator
            address: собственный адрес coordinator (для approve/preauthorize);
                генерируется, если не задан
            config: политики coordinator

        Raises:
            InvalidAsset: нулевой или не назначенный origin_asset
            InvalidCaller: нулевой deployer или явно заданный нулевой address
        """
        if is_null_asset(origin_asset):
            raise InvalidAsset("origin asset id must be greater than 0")
        if is_null_address(deployer):
            raise InvalidCaller("deployer cannot be the null address")
        if address is not None and is_null_address(address):
            raise InvalidCaller("coordinator address cannot be the null address")

        try:
            origin_holder = registry.owner_of(origin_asset)
        except UnknownAsset as exc:
            raise InvalidAsset(f"origin asset {origin_asset} is not assigned") from exc

        self.origin_asset = origin_asset
        self.origin_holder = origin_holder
        self.registry = registry
        self.ledger = ledger
        self.deployer = deployer
        self.address = address if address is not None else new_address()
        self.config = config or SwapConfig()

        self._status = SwapStatus.OPEN
        self._offers: Dict[int, Offer] = {}
        self._accepted_offer: Optional[Offer] = None
        self._payment_settled = False

        self._events: List[SwapEvent] = []
        self._listeners: List[EventListener] = []

        log.info(
            f"Swap coordinator {self.address} deployed for asset {origin_asset} "
            f"(holder {origin_holder})"
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_status(self) -> int:
        """Статус как ordinal 0-3."""
        return int(self._status)

    @property
    def status(self) -> SwapStatus:
        return self._status

    def get_open_offer_count(self) -> int:
        return len(self._offers)

    def get_offer(self, target_asset: int) -> Optional[Offer]:
        return self._offers.get(target_asset)

    def list_offers(self) -> List[Offer]:
        """Offers в порядке добавления (перезапись переносит offer в конец)."""
        return list(self._offers.values())

    @property
    def accepted_offer(self) -> Optional[Offer]:
        return self._accepted_offer

    @property
    def payment_settled(self) -> bool:
        return self._payment_settled

    @property
    def events(self) -> Tuple[SwapEvent, ...]:
        return tuple(self._events)

    def snapshot(self) -> SwapSnapshot:
        accepted = self._accepted_offer
        return SwapSnapshot(
            coordinator_address=self.address,
            origin_asset=self.origin_asset,
            origin_holder=self.origin_holder,
            status=self._status,
            status_name=self._status.name,
            accepted_offer=accepted,
            amount_origin_owes_target=accepted.amount_origin_owes_target if accepted else 0,
            amount_target_owes_origin=accepted.amount_target_owes_origin if accepted else 0,
            payment_settled=self._payment_settled,
            open_offer_count=self.get_open_offer_count(),
        )

    def export_snapshot(self) -> Dict[str, Any]:
        """JSON-представление snapshot, проверенное по контракту swap_snapshot.

        Raises:
            ValidationError: snapshot не соответствует JSON Schema
        """
        return SNAPSHOT_CONTRACT.validate_model(self.snapshot())

    def export_events(self) -> List[Dict[str, Any]]:
        """JSON-представление журнала событий, проверенное по контракту swap_event."""
        return [EVENT_CONTRACT.validate_model(event) for event in self._events]

    def subscribe(self, listener: EventListener) -> None:
        """Регистрация синхронного получателя событий."""
        self._listeners.append(listener)

    # =========================================================================
    # NEGOTIATION
    # =========================================================================

    def add_offer(
        self,
        caller: str,
        target_asset: int,
        amount_origin_owes_target: int = 0,
        amount_target_owes_origin: int = 0
    ) -> None:
        """Добавление (или перезапись) offer для target_asset.

        Raises:
            InvalidCaller: нулевой caller
            InvalidAsset: нулевой target_asset или target_asset == origin_asset
            WrongState: статус не OPEN
            InvalidPaymentTerms: отрицательная сумма или оба направления ненулевые
            NotAssetHolder: caller не владеет target_asset или является origin holder
            OfferLimitReached: достигнут max_open_offers
        """
        if is_null_address(caller):
            raise InvalidCaller("Cannot be 0 address")
        if is_null_asset(target_asset):
            raise InvalidAsset("Target asset id must be greater than 0")
        if target_asset == self.origin_asset:
            raise InvalidAsset(f"Target asset {target_asset} is the origin asset")
        self._require_status(SwapStatus.OPEN, "add_offer")

        if amount_origin_owes_target < 0 or amount_target_owes_origin < 0:
            raise InvalidPaymentTerms(
                f"Payment amounts must be non-negative, got "
                f"{amount_origin_owes_target}/{amount_target_owes_origin}"
            )
        if amount_origin_owes_target > 0 and amount_target_owes_origin > 0:
            raise InvalidPaymentTerms("Only one payment direction may be non-zero")

        if same_address(caller, self.origin_holder):
            raise NotAssetHolder("Origin holder cannot make an offer on its own swap")
        try:
            target_holder = self.registry.owner_of(target_asset)
        except UnknownAsset as exc:
            raise InvalidAsset(f"Target asset {target_asset} does not exist") from exc
        if not same_address(caller, target_holder):
            raise NotAssetHolder(f"{caller} does not hold asset {target_asset}")

        limit = self.config.max_open_offers
        if limit is not None and target_asset not in self._offers and len(self._offers) >= limit:
            raise OfferLimitReached(f"Open offer limit {limit} reached")

        offer = Offer(
            target_asset=target_asset,
            proposer=caller,
            amount_origin_owes_target=amount_origin_owes_target,
            amount_target_owes_origin=amount_target_owes_origin,
        )
        self._offers.pop(target_asset, None)
        self._offers[target_asset] = offer

        log.info(
            f"New offer on swap {self.address}: asset {target_asset} from {caller}, "
            f"direction={offer.payment_direction().value}, amount={offer.payment_amount()}"
        )
        self._emit(NewOffer, target_asset=target_asset, proposer=caller)

    def decline_offer(self, caller: str, target_asset: int) -> None:
        """Отклонение offer origin holder (или отзыв offer его proposer).

        Raises:
            WrongState: статус не OPEN
            InvalidCaller: нулевой caller
            Unauthorized: caller не origin holder и не proposer offer
            UnknownOffer: offer для target_asset отсутствует
        """
        self._require_status(SwapStatus.OPEN, "decline_offer")
        if is_null_address(caller):
            raise InvalidCaller("Cannot be 0 address")

        offer = self._offers.get(target_asset)
        is_origin = same_address(caller, self.origin_holder)
        is_proposer = (
            offer is not None
            and self.config.allow_proposer_withdrawal
            and same_address(caller, offer.proposer)
        )
        if not (is_origin or is_proposer):
            raise Unauthorized(f"{caller} cannot decline offers on swap {self.address}")
        if offer is None:
            raise UnknownOffer(f"No offer for asset {target_asset}")

        del self._offers[target_asset]
        log.info(f"Offer for asset {target_asset} declined by {caller}")
        self._emit(OfferDeclined, target_asset=target_asset, declined_by=caller)

    def accept_offer(self, caller: str, target_asset: int) -> None:
        """Принятие offer: фиксирует условия и завершает переговоры.

        Raises:
            WrongState: статус не OPEN (в том числе повторное принятие)
            InvalidCaller: нулевой caller
            Unauthorized: caller не origin holder
            UnknownOffer: offer для target_asset отсутствует
        """
        self._require_status(SwapStatus.OPEN, "accept_offer")
        if is_null_address(caller):
            raise InvalidCaller("Cannot be 0 address")
        if not same_address(caller, self.origin_holder):
            raise Unauthorized(f"Only the origin holder can accept offers, got {caller}")

        offer = self._offers.get(target_asset)
        if offer is None:
            raise UnknownOffer(f"No offer for asset {target_asset}")

        self._accepted_offer = offer
        if offer.requires_payment():
            self._status = SwapStatus.AWAITING_PAYMENT
        else:
            self._payment_settled = True
            self._status = SwapStatus.READY

        log.info(
            f"Swap {self.address}: offer for asset {target_asset} accepted, "
            f"status={self._status.name}"
        )
        self._emit(
            OfferAccepted,
            target_asset=target_asset,
            proposer=offer.proposer,
            status=self._status,
        )

    # =========================================================================
    # PAYMENT
    # =========================================================================

    def pay_from_origin_to_target(self, caller: str) -> None:
        """Оплата origin holder → proposer (см. _settle_payment)."""
        self._settle_payment(caller, PaymentDirection.ORIGIN_TO_TARGET)

    def pay_from_target_to_origin(self, caller: str) -> None:
        """Оплата proposer → origin holder (см. _settle_payment)."""
        self._settle_payment(caller, PaymentDirection.TARGET_TO_ORIGIN)

    def _settle_payment(self, caller: str, direction: PaymentDirection) -> None:
        """Conditional transfer через ledger от имени coordinator.

        Плательщик должен заранее выполнить ledger.preauthorize(coordinator, amount).

        Raises:
            WrongState: статус не AWAITING_PAYMENT
            NotObligatedParty: направление не совпадает с условиями или caller не плательщик
            PaymentFailed: ledger отклонил перевод (статус не меняется)
        """
        self._require_status(SwapStatus.AWAITING_PAYMENT, f"pay {direction.value}")
        offer = self._accepted_offer

        if direction == PaymentDirection.ORIGIN_TO_TARGET:
            payer, payee = self.origin_holder, offer.proposer
        else:
            payer, payee = offer.proposer, self.origin_holder

        if offer.payment_direction() != direction:
            raise NotObligatedParty(
                f"Accepted terms require {offer.payment_direction().value}, not {direction.value}"
            )
        if not same_address(caller, payer):
            raise NotObligatedParty(f"{caller} is not the obligated party ({payer})")

        amount = offer.payment_amount()
        try:
            self.ledger.transfer_conditional(self.address, payer, payee, amount)
        except LedgerError as exc:
            log.warning(f"Swap {self.address}: payment of {amount} from {payer} failed: {exc}")
            raise PaymentFailed(f"Payment of {amount} from {payer} to {payee} failed: {exc}") from exc

        self._payment_settled = True
        self._status = SwapStatus.READY
        log.info(f"Swap {self.address}: payment {amount} {payer} -> {payee} settled")
        self._emit(PaymentSettled, payer=payer, payee=payee, amount=amount)

    # =========================================================================
    # SETTLEMENT
    # =========================================================================

    def perform_swap(self, caller: str) -> None:
        """Атомарная передача custody обоих активов.

        Оба перевода предварительно проверяются registry (check_transfer);
        если хотя бы один отклонён, не выполняется ни один.

        Raises:
            WrongState: статус не READY
            InvalidCaller: нулевой caller
            Unauthorized: caller не участник swap (и не deployer при разрешённой политике)
            SwapFailed: registry отклонил передачу любого из активов (custody не изменилась)
            SwapPartiallyApplied: registry отклонил вторую передачу, а первую не удалось вернуть
        """
        self._require_status(SwapStatus.READY, "perform_swap")
        if is_null_address(caller):
            raise InvalidCaller("Cannot be 0 address")
        if not self._may_settle(caller):
            raise Unauthorized(f"{caller} cannot perform swap {self.address}")

        offer = self._accepted_offer
        legs = (
            (self.origin_asset, self.origin_holder, offer.proposer),
            (offer.target_asset, offer.proposer, self.origin_holder),
        )

        try:
            for asset_id, from_holder, _ in legs:
                self.registry.check_transfer(self.address, asset_id, from_holder)
        except RegistryError as exc:
            log.warning(f"Swap {self.address}: custody transfer rejected: {exc}")
            raise SwapFailed(f"Custody transfer rejected: {exc}") from exc

        applied = []
        try:
            for leg in legs:
                asset_id, from_holder, to = leg
                self.registry.transfer_custody(self.address, asset_id, from_holder, to)
                applied.append(leg)
        except RegistryError as exc:
            self._revert_legs(applied, exc)

        self._status = SwapStatus.SETTLED
        log.info(
            f"Swap {self.address} settled: asset {self.origin_asset} -> {offer.proposer}, "
            f"asset {offer.target_asset} -> {self.origin_holder}"
        )
        self._emit(SwapSettled, origin_asset=self.origin_asset, target_asset=offer.target_asset)

    def _revert_legs(self, applied: List[Tuple[int, str, str]], cause: RegistryError) -> None:
        """Возврат уже переданных legs после отказа registry на этапе передачи.

        Registry нарушил контракт AssetCustody: check_transfer принял передачу,
        которую transfer_custody отклонил.

        Raises:
            SwapFailed: все переданные legs возвращены, custody не изменилась
            SwapPartiallyApplied: возврат не удался, часть custody передана
        """
        log.error(
            f"Swap {self.address}: registry rejected an accepted transfer after "
            f"{len(applied)} leg(s) were applied: {cause}"
        )
        stuck = []
        for leg in reversed(applied):
            asset_id, from_holder, to = leg
            try:
                self.registry.transfer_custody(self.address, asset_id, to, from_holder)
            except RegistryError as exc:
                log.error(f"Swap {self.address}: cannot return asset {asset_id} to {from_holder}: {exc}")
                stuck.append(leg)

        if stuck:
            raise SwapPartiallyApplied(
                f"Custody transfer rejected after partial settlement: {cause}; "
                f"assets not returned: {[leg[0] for leg in stuck]}",
                applied=reversed(stuck),
            ) from cause
        raise SwapFailed(f"Custody transfer rejected, applied legs returned: {cause}") from cause

    def _may_settle(self, caller: str) -> bool:
        if same_address(caller, self.origin_holder):
            return True
        if same_address(caller, self._accepted_offer.proposer):
            return True
        return self.config.allow_administrator_settlement and same_address(caller, self.deployer)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _require_status(self, expected: SwapStatus, operation: str) -> None:
        if self._status != expected:
            raise WrongState(
                f"{operation} requires status {expected.name}, current status is {self._status.name}"
            )

    def _emit(self, event_type, **payload) -> None:
        event = event_type(
            sequence=len(self._events) + 1,
            coordinator_address=self.address,
            **payload,
        )
        self._events.append(event)
        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                # Состояние уже применено; сбой получателя не откатывает операцию
                log.exception(f"Event listener failed on {event.event}")
