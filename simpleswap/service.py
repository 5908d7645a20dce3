"""A pool wired to an in-memory token ledger, as served over HTTP."""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from simpleswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from simpleswap.constants import DEFAULT_POOL_ADDRESS, DEFAULT_TOKEN_A, DEFAULT_TOKEN_B
from simpleswap.events import EventLog
from simpleswap.pool import Pool
from simpleswap.tokens import LedgerTransfer, TokenLedger

logger = structlog.get_logger()


@dataclass
class PoolService:
    """A pool, the ledger holding its assets, and a log of its records."""

    pool: Pool
    ledger: TokenLedger
    events: EventLog = field(default_factory=EventLog)


def build_service(
    token_a: str = DEFAULT_TOKEN_A,
    token_b: str = DEFAULT_TOKEN_B,
    *,
    pool_address: str = DEFAULT_POOL_ADDRESS,
    clock: Callable[[], float] = time.time,
    config: PoolConfig = DEFAULT_POOL_CONFIG,
) -> PoolService:
    """Create a pool over a fresh TokenLedger."""
    ledger = TokenLedger()
    events = EventLog()
    pool = Pool(
        token_a,
        token_b,
        address=pool_address,
        transfers=LedgerTransfer(ledger, pool_address),
        clock=clock,
        config=config,
        sinks=[events],
    )
    return PoolService(pool=pool, ledger=ledger, events=events)


def _create_default_service() -> PoolService:
    """Create the default service from environment variables.

    - SIMPLESWAP_TOKEN_A / SIMPLESWAP_TOKEN_B: the pool pair
    - SIMPLESWAP_POOL_ADDRESS: the pool's custody account
    """
    token_a = os.environ.get("SIMPLESWAP_TOKEN_A", DEFAULT_TOKEN_A)
    token_b = os.environ.get("SIMPLESWAP_TOKEN_B", DEFAULT_TOKEN_B)
    pool_address = os.environ.get("SIMPLESWAP_POOL_ADDRESS", DEFAULT_POOL_ADDRESS)
    logger.info("pool_service_created", token_a=token_a, token_b=token_b, pool=pool_address)
    return build_service(token_a, token_b, pool_address=pool_address)


_default_service: PoolService | None = None


def get_default_service() -> PoolService:
    """Return the process-wide service, creating it on first use."""
    global _default_service
    if _default_service is None:
        _default_service = _create_default_service()
    return _default_service
