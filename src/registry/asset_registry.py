"""Asset Registry — реестр уникальных активов (title tokens) и их владельцев.

Возможности:
- Назначение актива владельцу (только администратор), с URI описания
- Запрос владельца (owner_of) и количества активов у владельца
- Approve controller: владелец разрешает одному адресу передать актив
- Capability check (check_transfer) и передача custody (transfer_custody)

Approval хранится только здесь и сбрасывается при каждой передаче custody.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from src.core.domain.errors import (
    AssetAlreadyAssigned,
    InvalidRecipient,
    NotAdministrator,
    NotApproved,
    NotAssetOwner,
    UnknownAsset,
)
from src.core.domain.identities import is_null_address, is_null_asset, same_address

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryConfig:
    """Конфигурация реестра (метаданные коллекции)."""
    name: str = "House Asset"
    symbol: str = "HSA"


class AssetRegistry:
    """In-memory реестр активов с моделью approve/transfer.

    Правила:
    - assign_asset: только administrator, актив назначается один раз
    - approve_controller: только текущий holder
    - transfer_custody: holder или approved controller; approval сбрасывается
    """

    def __init__(self, administrator: str, config: Optional[RegistryConfig] = None):
        """
        Args:
            administrator: адрес администратора (назначает активы)
            config: метаданные коллекции
        """
        if is_null_address(administrator):
            raise ValueError("administrator cannot be the null address")
        self.administrator = administrator
        self.config = config or RegistryConfig()

        self._holders: Dict[int, str] = {}
        self._uris: Dict[int, str] = {}
        self._approved: Dict[int, str] = {}

    # -------------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------------

    def assign_asset(self, caller: str, asset_id: int, uri: str, to: str) -> None:
        """Назначение нового актива владельцу.

        Raises:
            NotAdministrator: caller не администратор
            UnknownAsset: нулевой asset_id
            InvalidRecipient: to — нулевой адрес
            AssetAlreadyAssigned: актив уже назначен
        """
        if not same_address(caller, self.administrator):
            raise NotAdministrator(f"caller {caller} is not the registry administrator")
        if is_null_asset(asset_id):
            raise UnknownAsset("asset id must be greater than 0")
        if is_null_address(to):
            raise InvalidRecipient("cannot assign an asset to the null address")
        if asset_id in self._holders:
            raise AssetAlreadyAssigned(f"asset {asset_id} is already assigned")

        self._holders[asset_id] = to
        self._uris[asset_id] = uri
        log.info(f"Asset {asset_id} assigned to {to}")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def exists(self, asset_id: int) -> bool:
        return asset_id in self._holders

    def owner_of(self, asset_id: int) -> str:
        """Текущий holder актива.

        Raises:
            UnknownAsset: актив не назначен
        """
        try:
            return self._holders[asset_id]
        except KeyError:
            raise UnknownAsset(f"asset {asset_id} does not exist") from None

    def asset_uri(self, asset_id: int) -> str:
        self.owner_of(asset_id)
        return self._uris[asset_id]

    def balance_of(self, holder: str) -> int:
        """Количество активов у holder."""
        return sum(1 for h in self._holders.values() if same_address(h, holder))

    def get_approved(self, asset_id: int) -> Optional[str]:
        self.owner_of(asset_id)
        return self._approved.get(asset_id)

    # -------------------------------------------------------------------------
    # Approval / custody
    # -------------------------------------------------------------------------

    def approve_controller(self, caller: str, asset_id: int, controller: Optional[str]) -> None:
        """Разрешение controller передать актив (None — отзыв разрешения).

        Raises:
            NotAssetOwner: caller не является holder актива
        """
        holder = self.owner_of(asset_id)
        if not same_address(caller, holder):
            raise NotAssetOwner(f"caller {caller} does not hold asset {asset_id}")

        if is_null_address(controller):
            self._approved.pop(asset_id, None)
            log.info(f"Approval for asset {asset_id} revoked by {caller}")
            return

        self._approved[asset_id] = controller
        log.info(f"Asset {asset_id}: {caller} approved controller {controller}")

    def check_transfer(self, caller: str, asset_id: int, from_holder: str) -> None:
        """Capability check: может ли caller передать актив от from_holder.

        Ничего не изменяет; вызывается coordinator перед атомарным обменом.

        Raises:
            UnknownAsset: актив не назначен
            NotAssetOwner: from_holder не является текущим holder
            NotApproved: caller не holder и не approved controller
        """
        holder = self.owner_of(asset_id)
        if not same_address(from_holder, holder):
            raise NotAssetOwner(f"{from_holder} does not hold asset {asset_id} (holder: {holder})")
        if same_address(caller, holder):
            return
        if not same_address(caller, self._approved.get(asset_id)):
            raise NotApproved(f"{caller} is not approved to transfer asset {asset_id}")

    def transfer_custody(self, caller: str, asset_id: int, from_holder: str, to: str) -> None:
        """Передача custody актива.

        Raises:
            NotAssetOwner, NotApproved: см. check_transfer
            InvalidRecipient: to — нулевой адрес
        """
        self.check_transfer(caller, asset_id, from_holder)
        if is_null_address(to):
            raise InvalidRecipient(f"cannot transfer asset {asset_id} to the null address")

        self._holders[asset_id] = to
        self._approved.pop(asset_id, None)
        log.info(f"Asset {asset_id} custody: {from_holder} -> {to} (by {caller})")
