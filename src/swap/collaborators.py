"""Collaborators — узкие интерфейсы внешних компонентов Swap Coordinator.

Coordinator зависит только от этих Protocol'ов; in-memory реализации —
src.registry.AssetRegistry и src.ledger.UnitLedger.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AssetCustody(Protocol):
    """Asset Registry: custody query, capability check и передача custody.

    check_transfer и transfer_custody сигнализируют отказ через RegistryError.

    Контракт: transfer_custody не должен отклонять передачу, которую
    check_transfer принял в той же операции. Coordinator проверяет оба leg
    обмена до передачи; при нарушении контракта он пытается вернуть уже
    переданные активы и сообщает SwapPartiallyApplied, если возврат не удался.
    """

    def owner_of(self, asset_id: int) -> str: ...

    def check_transfer(self, caller: str, asset_id: int, from_holder: str) -> None: ...

    def transfer_custody(self, caller: str, asset_id: int, from_holder: str, to: str) -> None: ...


@runtime_checkable
class UnitOfAccount(Protocol):
    """Ledger: conditional transfer в пределах preauthorization.

    Отказ сигнализируется через LedgerError.
    """

    def transfer_conditional(self, caller: str, from_holder: str, to: str, amount: int) -> None: ...
