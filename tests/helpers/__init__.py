"""Test helpers module for shared test utilities.

- constants: Token addresses, accounts, times and amounts
- factories: Pool and ledger factory functions
"""

from tests.helpers.constants import (
    DEADLINE,
    ETHER,
    FAKE_TOKEN,
    INITIAL_BALANCE,
    NOW,
    OWNER,
    PAST_DEADLINE,
    POOL_ADDRESS,
    TOKEN_A,
    TOKEN_B,
    USER,
    ZERO,
)
from tests.helpers.factories import FixedClock, make_ledger, make_pool, seed

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "FAKE_TOKEN",
    "POOL_ADDRESS",
    "OWNER",
    "USER",
    "ZERO",
    "NOW",
    "DEADLINE",
    "PAST_DEADLINE",
    "ETHER",
    "INITIAL_BALANCE",
    # Factories
    "FixedClock",
    "make_ledger",
    "make_pool",
    "seed",
]
