"""Data models for pool records and the HTTP API."""

from simpleswap.models.events import (
    LiquidityAdded,
    LiquidityRemoved,
    PoolEvent,
    SharesTransferred,
    TokensSwapped,
)
from simpleswap.models.types import Address, Uint256, normalize_address

__all__ = [
    # Types
    "Address",
    "Uint256",
    "normalize_address",
    # Events
    "PoolEvent",
    "LiquidityAdded",
    "LiquidityRemoved",
    "TokensSwapped",
    "SharesTransferred",
]
