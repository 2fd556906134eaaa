"""Unit-of-Account Ledger — баланс fungible единиц с preauthorization.

Возможности:
- mint (только администратор)
- transfer: прямой перевод с баланса caller
- preauthorize: holder разрешает spender списать до amount
- transfer_conditional: списание spender'ом в пределах allowance

Все суммы — целые неотрицательные числа в минимальных единицах.
Каждая операция либо применяется целиком, либо ничего не меняет.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from src.core.domain.errors import (
    InsufficientAuthorization,
    InsufficientBalance,
    InvalidAddress,
    InvalidAmount,
    NotAdministrator,
)
from src.core.domain.identities import is_null_address, same_address

log = logging.getLogger(__name__)


def _key(address: str) -> str:
    return address.strip().lower()


@dataclass(frozen=True)
class LedgerConfig:
    """Конфигурация ledger (метаданные единицы учёта)."""
    name: str = "DollarTest"
    symbol: str = "DTS"
    decimals: int = 18


class UnitLedger:
    """In-memory fungible ledger.

    Адреса нормализуются к нижнему регистру при хранении.
    """

    def __init__(self, administrator: str, config: Optional[LedgerConfig] = None):
        """
        Args:
            administrator: адрес администратора (mint)
            config: метаданные единицы учёта
        """
        if is_null_address(administrator):
            raise ValueError("administrator cannot be the null address")
        self.administrator = administrator
        self.config = config or LedgerConfig()

        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._total_supply = 0

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, holder: str) -> int:
        if is_null_address(holder):
            return 0
        return self._balances.get(_key(holder), 0)

    def allowance(self, owner: str, spender: str) -> int:
        if is_null_address(owner) or is_null_address(spender):
            return 0
        return self._allowances.get((_key(owner), _key(spender)), 0)

    def mint(self, caller: str, to: str, amount: int) -> None:
        """Выпуск единиц на адрес to.

        Raises:
            NotAdministrator: caller не администратор
            InvalidAmount: отрицательная сумма
            InvalidAddress: нулевой получатель
        """
        if not same_address(caller, self.administrator):
            raise NotAdministrator(f"caller {caller} is not the ledger administrator")
        self._validate(to, amount, "mint")

        self._balances[_key(to)] = self.balance_of(to) + amount
        self._total_supply += amount
        log.info(f"Minted {amount} {self.config.symbol} to {to}")

    def preauthorize(self, caller: str, spender: str, amount: int) -> None:
        """Установка allowance (перезаписывает предыдущее значение)."""
        if is_null_address(caller):
            raise InvalidAddress("cannot preauthorize from the null address")
        self._validate(spender, amount, "preauthorize")

        self._allowances[(_key(caller), _key(spender))] = amount
        log.info(f"{caller} preauthorized {spender} for {amount} {self.config.symbol}")

    def transfer(self, caller: str, to: str, amount: int) -> None:
        """Прямой перевод с баланса caller.

        Raises:
            InsufficientBalance: баланс caller меньше amount
        """
        if is_null_address(caller):
            raise InvalidAddress("cannot transfer from the null address")
        self._validate(to, amount, "transfer")
        self._move(caller, to, amount)

    def transfer_conditional(self, caller: str, from_holder: str, to: str, amount: int) -> None:
        """Списание spender'ом (caller) с баланса from_holder в пределах allowance.

        Raises:
            InsufficientAuthorization: allowance(from_holder, caller) < amount
            InsufficientBalance: баланс from_holder меньше amount
        """
        if is_null_address(from_holder):
            raise InvalidAddress("cannot transfer from the null address")
        self._validate(to, amount, "transfer_conditional")

        authorized = self.allowance(from_holder, caller)
        if authorized < amount:
            raise InsufficientAuthorization(
                f"{caller} is authorized for {authorized} of {from_holder}'s balance, requested {amount}"
            )
        # Проверка баланса до изменения allowance (all-or-nothing)
        self._move(from_holder, to, amount)
        self._allowances[(_key(from_holder), _key(caller))] = authorized - amount

    def _move(self, from_holder: str, to: str, amount: int) -> None:
        balance = self.balance_of(from_holder)
        if balance < amount:
            raise InsufficientBalance(
                f"{from_holder} balance {balance} is less than requested {amount}"
            )
        self._balances[_key(from_holder)] = balance - amount
        self._balances[_key(to)] = self.balance_of(to) + amount
        log.info(f"Transferred {amount} {self.config.symbol}: {from_holder} -> {to}")

    @staticmethod
    def _validate(counterparty: str, amount: int, operation: str) -> None:
        if is_null_address(counterparty):
            raise InvalidAddress(f"{operation}: counterparty cannot be the null address")
        if amount < 0:
            raise InvalidAmount(f"{operation}: amount must be non-negative, got {amount}")
