"""Caller-order to pool-order mapping.

Callers may name the pair in either order. Each operation resolves an
Orientation once, computes in pool (x, y) order, and uses the same
Orientation to report results back in the order the caller used.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from simpleswap.errors import InvalidPair
from simpleswap.models.types import normalize_address

T = TypeVar("T")


@dataclass(frozen=True)
class Orientation:
    """Whether the caller's (a, b) is the pool's (x, y) or (y, x)."""

    reversed: bool

    @classmethod
    def resolve(cls, token_a: str, token_b: str, asset_x: str, asset_y: str) -> Orientation:
        """Match (token_a, token_b) against the pool pair.

        Raises:
            InvalidPair: Unless {token_a, token_b} is exactly {asset_x, asset_y}
        """
        a, b = normalize_address(token_a), normalize_address(token_b)
        if a == asset_x and b == asset_y:
            return cls(reversed=False)
        if a == asset_y and b == asset_x:
            return cls(reversed=True)
        raise InvalidPair()

    def to_pool(self, a: T, b: T) -> tuple[T, T]:
        """Caller (a, b) -> pool (x, y)."""
        return (b, a) if self.reversed else (a, b)

    def to_caller(self, x: T, y: T) -> tuple[T, T]:
        """Pool (x, y) -> caller (a, b)."""
        return (y, x) if self.reversed else (x, y)
