"""Asset Registry — custody уникальных активов."""

from .asset_registry import AssetRegistry, RegistryConfig

__all__ = [
    "AssetRegistry",
    "RegistryConfig",
]
