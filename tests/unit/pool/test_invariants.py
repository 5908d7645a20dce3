"""Accounting invariants across random operation sequences."""

import random

import pytest

from simpleswap.errors import InvariantViolation, PoolError
from simpleswap.pool import PoolState, ShareLedger
from tests.helpers import (
    DEADLINE,
    OWNER,
    POOL_ADDRESS,
    TOKEN_A,
    TOKEN_B,
    USER,
    make_ledger,
    make_pool,
)

ACCOUNTS = (OWNER, USER)


def random_step(rng: random.Random, pool) -> None:
    account = rng.choice(ACCOUNTS)
    kind = rng.choice(("add", "add_reversed", "remove", "swap", "transfer"))
    if kind == "add":
        pool.add_liquidity(
            TOKEN_A, TOKEN_B, rng.randint(0, 10**6), rng.randint(0, 10**6), 0, 0,
            account, DEADLINE, sender=account,
        )
    elif kind == "add_reversed":
        pool.add_liquidity(
            TOKEN_B, TOKEN_A, rng.randint(0, 10**6), rng.randint(0, 10**6), 0, 0,
            account, DEADLINE, sender=account,
        )
    elif kind == "remove":
        held = pool.balance_of(account)
        pool.remove_liquidity(
            TOKEN_A, TOKEN_B, rng.randint(0, held + 1), 0, 0, account, DEADLINE, sender=account
        )
    elif kind == "swap":
        path = rng.choice(([TOKEN_A, TOKEN_B], [TOKEN_B, TOKEN_A]))
        pool.swap_exact_tokens_for_tokens(
            rng.randint(0, 10**5), 0, path, account, DEADLINE, sender=account
        )
    else:
        other = USER if account == OWNER else OWNER
        pool.transfer_shares(account, other, rng.randint(0, pool.balance_of(account) + 1))


class TestInvariants:
    """Share sum, joint-zero reserves and custody hold after every step."""

    @pytest.mark.parametrize("seed_value", range(5))
    def test_random_sequence(self, seed_value):
        rng = random.Random(seed_value)
        ledger = make_ledger()
        pool = make_pool(ledger=ledger)

        for _ in range(200):
            try:
                random_step(rng, pool)
            except PoolError:
                pass

            pool.check_invariants()
            reserve_x, reserve_y = pool.reserves
            assert ledger.balance_of(TOKEN_A, POOL_ADDRESS) == reserve_x
            assert ledger.balance_of(TOKEN_B, POOL_ADDRESS) == reserve_y
            assert sum(pool.share_balances().values()) == pool.total_supply
            assert 0 not in pool.share_balances().values()

    def test_swaps_only_grow_product(self):
        rng = random.Random(42)
        pool = make_pool()
        pool.add_liquidity(TOKEN_A, TOKEN_B, 10**9, 3 * 10**9, 0, 0, OWNER, DEADLINE, sender=OWNER)

        for _ in range(100):
            x, y = pool.reserves
            path = rng.choice(([TOKEN_A, TOKEN_B], [TOKEN_B, TOKEN_A]))
            pool.swap_exact_tokens_for_tokens(
                rng.randint(1, 10**8), 0, path, USER, DEADLINE, sender=USER
            )
            new_x, new_y = pool.reserves
            assert new_x * new_y >= x * y
            assert new_x > 0 and new_y > 0


class TestCheckInvariants:
    """Tests for PoolState.check_invariants on inconsistent state."""

    def test_consistent_state_passes(self):
        PoolState(100, 200, ShareLedger({OWNER: 141}, 141)).check_invariants()
        PoolState().check_invariants()

    @pytest.mark.parametrize(
        "state,reason",
        [
            (PoolState(-1, 200, ShareLedger({OWNER: 141}, 141)), "negative reserve"),
            (PoolState(100, 0, ShareLedger({OWNER: 141}, 141)), "one-sided reserves"),
            (PoolState(100, 200), "supply/reserve mismatch"),
            (PoolState(100, 200, ShareLedger({OWNER: 100}, 141)), "share sum"),
        ],
    )
    def test_violations_raise(self, state, reason):
        with pytest.raises(InvariantViolation, match=reason):
            state.check_invariants()

    def test_pool_reports_corrupted_state(self, small_pool):
        small_pool._state.reserve_y = 0
        with pytest.raises(InvariantViolation, match="one-sided reserves"):
            small_pool.check_invariants()
