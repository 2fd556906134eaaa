"""
Contract Validation Module

Модуль для валидации JSON контрактов swap coordinator (снапшоты и события).
"""

from .validators import (
    EVENT_CONTRACT,
    SCHEMA_DIR,
    SNAPSHOT_CONTRACT,
    ContractValidator,
    SchemaLoader,
    SwapEventValidator,
    SwapSnapshotValidator,
    validate_swap_event,
    validate_swap_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SwapSnapshotValidator",
    "SwapEventValidator",
    # Shared contracts
    "SCHEMA_DIR",
    "SNAPSHOT_CONTRACT",
    "EVENT_CONTRACT",
    # Functions
    "validate_swap_snapshot",
    "validate_swap_event",
]
