"""
Domain models and value objects.

Contains fundamental swap entities: identities, Offer, SwapSnapshot, events, errors.
"""

from src.core.domain.errors import (
    AssetAlreadyAssigned,
    HouseSwapError,
    InsufficientAuthorization,
    InsufficientBalance,
    InvalidAddress,
    InvalidAmount,
    InvalidAsset,
    InvalidCaller,
    InvalidPaymentTerms,
    InvalidRecipient,
    LedgerError,
    NotAdministrator,
    NotApproved,
    NotAssetHolder,
    NotAssetOwner,
    NotObligatedParty,
    OfferLimitReached,
    PaymentFailed,
    RegistryError,
    SwapError,
    SwapFailed,
    SwapPartiallyApplied,
    Unauthorized,
    UnknownAsset,
    UnknownOffer,
    WrongState,
)
from src.core.domain.events import (
    NewOffer,
    OfferAccepted,
    OfferDeclined,
    PaymentSettled,
    SwapEvent,
    SwapSettled,
)
from src.core.domain.identities import (
    NULL_ADDRESS,
    NULL_ASSET,
    is_null_address,
    is_null_asset,
    new_address,
    same_address,
)
from src.core.domain.swap_state import Offer, PaymentDirection, SwapSnapshot, SwapStatus

__all__ = [
    # Identities
    "NULL_ADDRESS",
    "NULL_ASSET",
    "is_null_address",
    "is_null_asset",
    "same_address",
    "new_address",
    # Swap state
    "SwapStatus",
    "PaymentDirection",
    "Offer",
    "SwapSnapshot",
    # Events
    "SwapEvent",
    "NewOffer",
    "OfferDeclined",
    "OfferAccepted",
    "PaymentSettled",
    "SwapSettled",
    # Errors
    "HouseSwapError",
    "NotAdministrator",
    "SwapError",
    "InvalidCaller",
    "NotAssetHolder",
    "InvalidAsset",
    "UnknownOffer",
    "WrongState",
    "Unauthorized",
    "NotObligatedParty",
    "InvalidPaymentTerms",
    "OfferLimitReached",
    "PaymentFailed",
    "SwapFailed",
    "SwapPartiallyApplied",
    "RegistryError",
    "UnknownAsset",
    "AssetAlreadyAssigned",
    "NotAssetOwner",
    "NotApproved",
    "InvalidRecipient",
    "LedgerError",
    "InvalidAmount",
    "InvalidAddress",
    "InsufficientAuthorization",
    "InsufficientBalance",
]
