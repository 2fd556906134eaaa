"""
Errors — иерархия исключений House Swap

Все ошибки синхронные. Ни один компонент не делает внутренних retry:
вызывающая сторона исправляет предусловие (баланс, approve) и повторяет вызов.

Иерархия:
- HouseSwapError
  - NotAdministrator (registry и ledger)
  - SwapError (Swap Coordinator)
  - RegistryError (Asset Registry)
  - LedgerError (Unit-of-Account Ledger)
"""


class HouseSwapError(Exception):
    """Базовое исключение пакета."""


class NotAdministrator(HouseSwapError):
    """Операция доступна только администратору (registry или ledger)."""


# =============================================================================
# SWAP COORDINATOR
# =============================================================================


class SwapError(HouseSwapError):
    """Базовое исключение Swap Coordinator."""


class InvalidCaller(SwapError):
    """Вызывающий — нулевой адрес."""


class NotAssetHolder(InvalidCaller):
    """Вызывающий не владеет предлагаемым активом (или является origin holder)."""


class InvalidAsset(SwapError):
    """Нулевой идентификатор актива или актив совпадает с origin asset."""


class UnknownOffer(SwapError):
    """Нет активного offer для указанного target asset."""


class WrongState(SwapError):
    """Операция запрещена в текущем статусе."""


class Unauthorized(SwapError):
    """Вызывающий не имеет права на операцию (не origin holder / не участник)."""


class NotObligatedParty(SwapError):
    """Платёж инициирован не той стороной (или в этом направлении ничего не должно)."""


class InvalidPaymentTerms(SwapError):
    """Некорректные условия оплаты: отрицательная сумма или оба направления ненулевые."""


class OfferLimitReached(SwapError):
    """Достигнут лимит одновременно открытых offers (SwapConfig.max_open_offers)."""


class PaymentFailed(SwapError):
    """Ledger отклонил conditional transfer."""


class SwapFailed(SwapError):
    """Registry отклонил передачу custody одного из активов."""


class SwapPartiallyApplied(SwapFailed):
    """Registry отклонил передачу после того, как часть custody уже передана,
    и обратная передача не удалась.

    applied: переданные и не возвращённые legs (asset_id, from_holder, to).
    """

    def __init__(self, message: str, applied=()):
        super().__init__(message)
        self.applied = tuple(applied)


# =============================================================================
# ASSET REGISTRY
# =============================================================================


class RegistryError(HouseSwapError):
    """Базовое исключение Asset Registry."""


class UnknownAsset(RegistryError):
    """Актив не был назначен ни одному владельцу."""


class AssetAlreadyAssigned(RegistryError):
    """Актив уже назначен."""


class NotAssetOwner(RegistryError):
    """Вызывающий (или from_holder) не является текущим владельцем актива."""


class NotApproved(RegistryError):
    """Вызывающий не является ни владельцем, ни approved controller актива."""


class InvalidRecipient(RegistryError):
    """Получатель — нулевой адрес."""


# =============================================================================
# UNIT-OF-ACCOUNT LEDGER
# =============================================================================


class LedgerError(HouseSwapError):
    """Базовое исключение Unit-of-Account Ledger."""


class InvalidAmount(LedgerError):
    """Отрицательная сумма в операции ledger."""


class InvalidAddress(LedgerError):
    """Нулевой адрес плательщика, получателя или spender в операции ledger."""


class InsufficientAuthorization(LedgerError):
    """Allowance spender'а меньше запрошенной суммы."""


class InsufficientBalance(LedgerError):
    """Баланс плательщика меньше запрошенной суммы."""
