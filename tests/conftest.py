"""Pytest configuration and fixtures."""

import pytest

from simpleswap.events import EventLog
from simpleswap.pool import Pool
from simpleswap.tokens import TokenLedger
from tests.helpers import ETHER, FixedClock, make_ledger, make_pool, seed


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at NOW; tests may move it by setting .now."""
    return FixedClock()


@pytest.fixture
def ledger() -> TokenLedger:
    """Ledger with OWNER and USER funded and the pool approved."""
    return make_ledger()


@pytest.fixture
def events() -> EventLog:
    return EventLog()


@pytest.fixture
def pool(ledger: TokenLedger, clock: FixedClock, events: EventLog) -> Pool:
    """Empty TOKEN_A/TOKEN_B pool."""
    return make_pool(ledger=ledger, clock=clock, events=events)


@pytest.fixture
def small_pool(pool: Pool) -> Pool:
    """Pool seeded by OWNER with reserves (100, 200) in raw units."""
    seed(pool, 100, 200)
    return pool


@pytest.fixture
def ether_pool(pool: Pool) -> Pool:
    """Pool seeded by OWNER with reserves (100 ether, 200 ether)."""
    seed(pool, 100 * ETHER, 200 * ETHER)
    return pool
