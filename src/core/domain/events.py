"""
Events — уведомления Swap Coordinator

Каждое событие — immutable Pydantic модель с полем `event` (имя события)
и монотонным `sequence` в пределах одного coordinator.

Обязательные события:
- NewOffer(target_asset, proposer)
- SwapSettled(origin_asset, target_asset)

Дополнительные:
- OfferDeclined, OfferAccepted, PaymentSettled

Совместимость с JSON Schema (src/core/contracts/schema/swap_event.json).
"""

from typing import Literal

from pydantic import BaseModel, Field

from .swap_state import SwapStatus


class SwapEvent(BaseModel):
    """Базовая модель события."""

    event: str = Field(..., min_length=1, description="Имя события")
    sequence: int = Field(..., ge=1, description="Порядковый номер события в coordinator")
    coordinator_address: str = Field(..., min_length=1, description="Адрес coordinator")

    model_config = {"frozen": True}


class NewOffer(SwapEvent):
    """Новый (или перезаписанный) offer."""

    event: Literal["NewOffer"] = "NewOffer"
    target_asset: int = Field(..., gt=0)
    proposer: str = Field(..., min_length=1)


class OfferDeclined(SwapEvent):
    """Offer отклонён origin holder или отозван proposer."""

    event: Literal["OfferDeclined"] = "OfferDeclined"
    target_asset: int = Field(..., gt=0)
    declined_by: str = Field(..., min_length=1)


class OfferAccepted(SwapEvent):
    """Offer принят, переговоры завершены."""

    event: Literal["OfferAccepted"] = "OfferAccepted"
    target_asset: int = Field(..., gt=0)
    proposer: str = Field(..., min_length=1)
    status: SwapStatus = Field(..., description="Статус после принятия (AWAITING_PAYMENT или READY)")


class PaymentSettled(SwapEvent):
    """Обязательный платёж выполнен через ledger."""

    event: Literal["PaymentSettled"] = "PaymentSettled"
    payer: str = Field(..., min_length=1)
    payee: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)


class SwapSettled(SwapEvent):
    """Custody обоих активов передана, swap завершён."""

    event: Literal["SwapSettled"] = "SwapSettled"
    origin_asset: int = Field(..., gt=0)
    target_asset: int = Field(..., gt=0)
