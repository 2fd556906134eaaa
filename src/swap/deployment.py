"""Deployment — развёртывание окружения swap (registry + ledger + coordinator).

Порядок:
1. Registry и ledger под управлением administrator
2. Назначение origin asset его holder
3. Coordinator для origin asset (deployer = administrator)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.ledger.unit_ledger import LedgerConfig, UnitLedger
from src.registry.asset_registry import AssetRegistry, RegistryConfig

from .config import SwapConfig
from .coordinator import SwapCoordinator

log = logging.getLogger(__name__)

DEFAULT_ORIGIN_URI = "https://www.hasset.com"


@dataclass
class SwapDeployment:
    """Развёрнутое окружение swap."""
    administrator: str
    registry: AssetRegistry
    ledger: UnitLedger
    coordinator: SwapCoordinator


def deploy_swap_environment(
    administrator: str,
    origin_holder: str,
    origin_asset: int = 1,
    origin_uri: str = DEFAULT_ORIGIN_URI,
    swap_config: Optional[SwapConfig] = None,
    registry_config: Optional[RegistryConfig] = None,
    ledger_config: Optional[LedgerConfig] = None
) -> SwapDeployment:
    """Создание registry, ledger и coordinator для origin asset.

    Args:
        administrator: администратор registry/ledger и deployer coordinator
        origin_holder: владелец origin asset
        origin_asset: идентификатор origin asset
        origin_uri: URI описания origin asset
        swap_config, registry_config, ledger_config: конфигурации компонентов

    Returns:
        SwapDeployment
    """
    registry = AssetRegistry(administrator, registry_config)
    ledger = UnitLedger(administrator, ledger_config)
    registry.assign_asset(administrator, origin_asset, origin_uri, origin_holder)

    coordinator = SwapCoordinator(
        origin_asset=origin_asset,
        registry=registry,
        ledger=ledger,
        deployer=administrator,
        config=swap_config,
    )
    log.info(
        f"Swap environment deployed: registry={registry.config.symbol}, "
        f"ledger={ledger.config.symbol}, coordinator={coordinator.address}"
    )
    return SwapDeployment(
        administrator=administrator,
        registry=registry,
        ledger=ledger,
        coordinator=coordinator,
    )
