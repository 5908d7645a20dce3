"""Records emitted by the pool after each committed state transition.

Amounts are reported in the caller's token order, not the pool's internal
order, so an indexer sees the same orientation the caller asked for.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class PoolEvent:
    """Base class for pool records."""

    name: ClassVar[str] = "PoolEvent"

    def to_dict(self) -> dict[str, Any]:
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class LiquidityAdded(PoolEvent):
    name: ClassVar[str] = "LiquidityAdded"

    provider: str
    amount_a: int
    amount_b: int
    liquidity: int


@dataclass(frozen=True)
class LiquidityRemoved(PoolEvent):
    name: ClassVar[str] = "LiquidityRemoved"

    provider: str
    amount_a: int
    amount_b: int
    liquidity: int


@dataclass(frozen=True)
class TokensSwapped(PoolEvent):
    name: ClassVar[str] = "TokensSwapped"

    user: str
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int


@dataclass(frozen=True)
class SharesTransferred(PoolEvent):
    name: ClassVar[str] = "SharesTransferred"

    sender: str
    recipient: str
    amount: int
