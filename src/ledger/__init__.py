"""Unit-of-Account Ledger — fungible балансы и conditional transfer."""

from .unit_ledger import LedgerConfig, UnitLedger

__all__ = [
    "LedgerConfig",
    "UnitLedger",
]
