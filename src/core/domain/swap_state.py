"""
SwapState — Модели состояния swap instance

Immutable Pydantic модели:
- Offer: предложение контрагента (target asset + условия оплаты)
- SwapSnapshot: read-only снапшот swap instance для экспорта

Полная совместимость с JSON Schema (src/core/contracts/schema/swap_snapshot.json).
"""

from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .identities import is_null_address


# =============================================================================
# ENUMS
# =============================================================================


class SwapStatus(IntEnum):
    """
    Статус swap instance.

    Ordinal (0-3) является частью внешнего контракта (getStatus).
    """

    OPEN = 0  # offer ещё не принят
    AWAITING_PAYMENT = 1  # offer принят, ожидается платёж
    READY = 2  # платёж не требуется или уже выполнен
    SETTLED = 3  # swap завершён (terminal)


class PaymentDirection(str, Enum):
    """Направление нетто-платежа по условиям offer"""

    NONE = "none"
    ORIGIN_TO_TARGET = "origin_to_target"
    TARGET_TO_ORIGIN = "target_to_origin"


# =============================================================================
# OFFER MODEL
# =============================================================================


class Offer(BaseModel):
    """
    Предложение обмена от потенциального контрагента.

    Ключ в реестре offers — target_asset. Не более одного ненулевого
    направления оплаты на offer.

    Immutable модель (frozen=True).
    """

    target_asset: int = Field(..., gt=0, description="Актив, предлагаемый в обмен")
    proposer: str = Field(..., min_length=1, description="Адрес автора offer (holder target asset)")
    amount_origin_owes_target: int = Field(
        0, ge=0, description="Сумма, которую origin holder платит proposer"
    )
    amount_target_owes_origin: int = Field(
        0, ge=0, description="Сумма, которую proposer платит origin holder"
    )

    model_config = {"frozen": True}

    @field_validator("proposer")
    @classmethod
    def validate_proposer_not_null(cls, v: str) -> str:
        """Proposer не может быть нулевым адресом"""
        if is_null_address(v):
            raise ValueError("proposer cannot be the null address")
        return v

    @model_validator(mode="after")
    def validate_single_payment_direction(self) -> "Offer":
        """Проверка, что ненулевым является не более одного направления оплаты"""
        if self.amount_origin_owes_target > 0 and self.amount_target_owes_origin > 0:
            raise ValueError(
                f"Only one payment direction may be non-zero, got "
                f"origin->target={self.amount_origin_owes_target}, "
                f"target->origin={self.amount_target_owes_origin}"
            )
        return self

    def payment_direction(self) -> PaymentDirection:
        """
        Направление платежа по условиям offer.

        Returns:
            PaymentDirection.NONE если обе суммы нулевые
        """
        if self.amount_origin_owes_target > 0:
            return PaymentDirection.ORIGIN_TO_TARGET
        if self.amount_target_owes_origin > 0:
            return PaymentDirection.TARGET_TO_ORIGIN
        return PaymentDirection.NONE

    def requires_payment(self) -> bool:
        return self.payment_direction() != PaymentDirection.NONE

    def payment_amount(self) -> int:
        """Нетто-сумма платежа (в любом направлении)"""
        return self.amount_origin_owes_target + self.amount_target_owes_origin


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class SwapSnapshot(BaseModel):
    """
    Снапшот swap instance.

    Содержит:
    - Идентификацию (coordinator_address, origin_asset, origin_holder)
    - Статус (ordinal + имя)
    - Принятый offer и зафиксированные условия оплаты
    - Счётчик открытых offers
    """

    coordinator_address: str = Field(..., min_length=1, description="Адрес coordinator")
    origin_asset: int = Field(..., gt=0, description="Origin asset")
    origin_holder: str = Field(..., min_length=1, description="Holder origin asset при создании")

    status: SwapStatus = Field(..., description="Статус (0-3)")
    status_name: str = Field(..., description="Имя статуса")

    accepted_offer: Optional[Offer] = Field(None, description="Принятый offer")
    amount_origin_owes_target: int = Field(0, ge=0, description="Зафиксированная сумма origin → target")
    amount_target_owes_origin: int = Field(0, ge=0, description="Зафиксированная сумма target → origin")
    payment_settled: bool = Field(False, description="Платёж выполнен (или не требуется)")

    open_offer_count: int = Field(..., ge=0, description="Количество открытых offers")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_accepted_offer_matches_status(self) -> "SwapSnapshot":
        """accepted_offer присутствует тогда и только тогда, когда status >= AWAITING_PAYMENT"""
        has_offer = self.accepted_offer is not None
        if has_offer != (self.status >= SwapStatus.AWAITING_PAYMENT):
            raise ValueError(
                f"accepted_offer presence ({has_offer}) inconsistent with status {self.status.name}"
            )
        return self

    def is_terminal(self) -> bool:
        return self.status == SwapStatus.SETTLED
