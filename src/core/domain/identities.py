"""
Identities — адреса участников и идентификаторы активов

Единственный допустимый способ проверки "нулевых" значений:
- адрес участника (holder, controller, spender)
- идентификатор актива (asset_id)

ЗАПРЕЩЕНО сравнивать адреса напрямую с литералами — только через этот модуль.
"""

import secrets
from typing import Any, Final, Optional


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Нулевой адрес (null identity)
NULL_ADDRESS: Final[str] = "0x" + "0" * 40

# Нулевой идентификатор актива (null asset)
NULL_ASSET: Final[int] = 0

# Длина адреса в hex-символах (без префикса 0x)
ADDRESS_HEX_LENGTH: Final[int] = 40


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_null_address(address: Any) -> bool:
    """
    Проверка, является ли адрес нулевым.

    Нулевыми считаются: None, пустая строка, NULL_ADDRESS (в любом регистре),
    а также любое значение, не являющееся строкой (например, 0).

    Args:
        address: Адрес участника

    Returns:
        True если адрес нулевой
    """
    if not isinstance(address, str):
        return True
    normalized = address.strip().lower()
    return normalized == "" or normalized == NULL_ADDRESS


def is_null_asset(asset_id: Optional[int]) -> bool:
    """
    Проверка, является ли идентификатор актива нулевым.

    Args:
        asset_id: Идентификатор актива

    Returns:
        True если asset_id is None или равен NULL_ASSET
    """
    return asset_id is None or asset_id == NULL_ASSET


def same_address(left: Optional[str], right: Optional[str]) -> bool:
    """Сравнение адресов без учёта регистра (нулевые адреса не равны ничему)."""
    if is_null_address(left) or is_null_address(right):
        return False
    return left.strip().lower() == right.strip().lower()


def new_address() -> str:
    """Генерация случайного адреса (0x + 40 hex)."""
    return "0x" + secrets.token_hex(ADDRESS_HEX_LENGTH // 2)
