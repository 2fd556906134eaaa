"""Swap — атомарный обмен двух активов через escrow coordinator.

- SwapCoordinator: state machine OPEN → AWAITING_PAYMENT → READY → SETTLED
- SwapConfig: политики coordinator
- deploy_swap_environment: registry + ledger + coordinator
"""

from .collaborators import AssetCustody, UnitOfAccount
from .config import SwapConfig
from .coordinator import SwapCoordinator
from .deployment import SwapDeployment, deploy_swap_environment

__all__ = [
    "AssetCustody",
    "UnitOfAccount",
    "SwapConfig",
    "SwapCoordinator",
    "SwapDeployment",
    "deploy_swap_environment",
]
