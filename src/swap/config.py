"""Конфигурация Swap Coordinator."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SwapConfig:
    """Политики Swap Coordinator.

    - allow_proposer_withdrawal: proposer может отозвать свой offer через decline_offer
    - allow_administrator_settlement: deployer может вызвать perform_swap
    - max_open_offers: лимит одновременно открытых offers (None — без лимита)
    """
    allow_proposer_withdrawal: bool = True
    allow_administrator_settlement: bool = True
    max_open_offers: Optional[int] = None

    def __post_init__(self):
        if self.max_open_offers is not None and self.max_open_offers < 1:
            raise ValueError(f"max_open_offers must be >= 1, got {self.max_open_offers}")
