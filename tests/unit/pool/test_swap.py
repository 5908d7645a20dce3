"""Tests for Pool.swap_exact_tokens_for_tokens."""

import pytest

from simpleswap.errors import (
    Expired,
    InsufficientOutputAmount,
    InvalidInput,
    InvalidPair,
    InvalidPathLength,
    InvalidRecipient,
    NoLiquidity,
    SlippageExceeded,
    TransferFailed,
)
from simpleswap.models.events import TokensSwapped
from simpleswap.safe_int import UINT256_MAX, Uint256Overflow
from tests.helpers import (
    DEADLINE,
    ETHER,
    FAKE_TOKEN,
    INITIAL_BALANCE,
    OWNER,
    PAST_DEADLINE,
    POOL_ADDRESS,
    TOKEN_A,
    TOKEN_B,
    USER,
    ZERO,
    make_ledger,
    make_pool,
    seed,
)


class TestSwap:
    """Tests for exact-input swaps."""

    def test_a_for_b(self, small_pool, ledger):
        """Pool (100, 200), 10 A in: floor(10 * 200 / 110) = 18 B out."""
        amounts = small_pool.swap_exact_tokens_for_tokens(
            10, 0, [TOKEN_A, TOKEN_B], USER, DEADLINE, sender=USER
        )

        assert amounts == [10, 18]
        assert small_pool.reserves == (110, 182)
        assert ledger.balance_of(TOKEN_A, USER) == INITIAL_BALANCE - 10
        assert ledger.balance_of(TOKEN_B, USER) == INITIAL_BALANCE + 18
        assert ledger.balance_of(TOKEN_A, POOL_ADDRESS) == 110
        assert ledger.balance_of(TOKEN_B, POOL_ADDRESS) == 182

    def test_b_for_a(self, small_pool):
        """Pool (100, 200), 10 B in: floor(10 * 100 / 210) = 4 A out."""
        amounts = small_pool.swap_exact_tokens_for_tokens(
            10, 0, [TOKEN_B, TOKEN_A], USER, DEADLINE, sender=USER
        )
        assert amounts == [10, 4]
        assert small_pool.reserves == (96, 210)

    def test_emits_tokens_swapped(self, ether_pool, events):
        amount_in = 10 * ETHER
        ether_pool.swap_exact_tokens_for_tokens(
            amount_in, 0, [TOKEN_B, TOKEN_A], OWNER, DEADLINE, sender=OWNER
        )

        event = events.last()
        assert isinstance(event, TokensSwapped)
        assert event.user == OWNER
        assert event.token_in == TOKEN_B
        assert event.token_out == TOKEN_A
        assert event.amount_in == amount_in
        assert event.amount_out > 0

    def test_output_goes_to_recipient(self, small_pool, ledger):
        small_pool.swap_exact_tokens_for_tokens(
            10, 0, [TOKEN_A, TOKEN_B], USER, DEADLINE, sender=OWNER
        )
        assert ledger.balance_of(TOKEN_B, USER) == INITIAL_BALANCE + 18

    def test_matches_standalone_quote(self, ether_pool):
        reserve_in, reserve_out = ether_pool.get_reserves(TOKEN_A, TOKEN_B)
        expected = ether_pool.get_amount_out(3 * ETHER, reserve_in, reserve_out)

        _, amount_out = ether_pool.swap_exact_tokens_for_tokens(
            3 * ETHER, expected, [TOKEN_A, TOKEN_B], OWNER, DEADLINE, sender=OWNER
        )
        assert amount_out == expected

    def test_product_never_decreases(self, ether_pool):
        for amount_in, path in [
            (ETHER, [TOKEN_A, TOKEN_B]),
            (7 * ETHER + 3, [TOKEN_B, TOKEN_A]),
            (1, [TOKEN_A, TOKEN_B]),
            (50 * ETHER, [TOKEN_B, TOKEN_A]),
        ]:
            x, y = ether_pool.reserves
            ether_pool.swap_exact_tokens_for_tokens(
                amount_in, 0, path, USER, DEADLINE, sender=USER
            )
            new_x, new_y = ether_pool.reserves
            assert new_x * new_y >= x * y
            ether_pool.check_invariants()

    def test_large_swap_never_drains_pool(self, small_pool):
        _, amount_out = small_pool.swap_exact_tokens_for_tokens(
            10**20, 0, [TOKEN_A, TOKEN_B], OWNER, DEADLINE, sender=OWNER
        )
        assert amount_out == 199
        assert small_pool.reserves[1] == 1

    def test_symmetry(self):
        """Pools seeded in opposite orientation quote the same trade identically."""
        forward, backward = make_pool(), make_pool(token_a=TOKEN_B, token_b=TOKEN_A)
        seed(forward, 100, 200)
        seed(backward, 200, 100)

        assert forward.swap_exact_tokens_for_tokens(
            10, 0, [TOKEN_A, TOKEN_B], USER, DEADLINE, sender=USER
        ) == backward.swap_exact_tokens_for_tokens(
            10, 0, [TOKEN_A, TOKEN_B], USER, DEADLINE, sender=USER
        )
        assert forward.get_reserves(TOKEN_A, TOKEN_B) == backward.get_reserves(TOKEN_A, TOKEN_B)


class TestSwapFailures:
    """Tests for rejected swaps."""

    def test_output_below_minimum_leaves_reserves(self, small_pool, ledger):
        with pytest.raises(InsufficientOutputAmount, match="Insufficient output amount"):
            small_pool.swap_exact_tokens_for_tokens(
                10, 19, [TOKEN_A, TOKEN_B], USER, DEADLINE, sender=USER
            )
        assert small_pool.reserves == (100, 200)
        assert ledger.balance_of(TOKEN_A, USER) == INITIAL_BALANCE

    def test_insufficient_output_is_slippage(self):
        assert issubclass(InsufficientOutputAmount, SlippageExceeded)

    def test_expired(self, ether_pool):
        with pytest.raises(Expired, match="Transaction expired"):
            ether_pool.swap_exact_tokens_for_tokens(
                10 * ETHER, 0, [TOKEN_A, TOKEN_B], OWNER, PAST_DEADLINE, sender=OWNER
            )

    @pytest.mark.parametrize("path", [[TOKEN_A], [], [TOKEN_A, TOKEN_B, TOKEN_A]])
    def test_invalid_path_length(self, ether_pool, path):
        with pytest.raises(InvalidPathLength, match="Invalid path length"):
            ether_pool.swap_exact_tokens_for_tokens(
                10 * ETHER, 0, path, OWNER, DEADLINE, sender=OWNER
            )

    @pytest.mark.parametrize(
        "path",
        [[FAKE_TOKEN, TOKEN_B], [TOKEN_A, FAKE_TOKEN], [TOKEN_A, TOKEN_A], [TOKEN_B, TOKEN_B]],
    )
    def test_invalid_tokens(self, ether_pool, path):
        with pytest.raises(InvalidPair, match="Invalid tokens"):
            ether_pool.swap_exact_tokens_for_tokens(
                10 * ETHER, 0, path, OWNER, DEADLINE, sender=OWNER
            )

    def test_zero_recipient(self, ether_pool):
        with pytest.raises(InvalidRecipient, match="Invalid 'to' address"):
            ether_pool.swap_exact_tokens_for_tokens(
                10 * ETHER, 0, [TOKEN_A, TOKEN_B], ZERO, DEADLINE, sender=OWNER
            )

    def test_short_zero_recipient(self, ether_pool):
        with pytest.raises(InvalidRecipient):
            ether_pool.swap_exact_tokens_for_tokens(
                10 * ETHER, 0, [TOKEN_A, TOKEN_B], "0x0", DEADLINE, sender=OWNER
            )

    def test_zero_amount(self, ether_pool):
        with pytest.raises(InvalidInput):
            ether_pool.swap_exact_tokens_for_tokens(
                0, 0, [TOKEN_A, TOKEN_B], OWNER, DEADLINE, sender=OWNER
            )

    def test_empty_pool(self, pool):
        with pytest.raises(NoLiquidity):
            pool.swap_exact_tokens_for_tokens(
                10, 0, [TOKEN_A, TOKEN_B], OWNER, DEADLINE, sender=OWNER
            )

    def test_failed_pull_restores_reserves(self):
        ledger = make_ledger()
        pool = make_pool(ledger=ledger)
        seed(pool, 100, 200)
        broke = "0x3333333333333333333333333333333333333333"

        with pytest.raises(TransferFailed):
            pool.swap_exact_tokens_for_tokens(
                10, 0, [TOKEN_A, TOKEN_B], broke, DEADLINE, sender=broke
            )

        assert pool.reserves == (100, 200)
        assert ledger.balance_of(TOKEN_B, broke) == 0
        pool.check_invariants()

    def test_reserve_overflow_rejected(self):
        """Pool (2^256 - 6, 1000): 10 A in would push reserve_x past uint256."""
        ledger = make_ledger(balance=UINT256_MAX)
        pool = make_pool(ledger=ledger)
        seed(pool, UINT256_MAX - 5, 1000)

        with pytest.raises(Uint256Overflow):
            pool.swap_exact_tokens_for_tokens(
                10, 0, [TOKEN_A, TOKEN_B], USER, DEADLINE, sender=USER
            )

        assert pool.reserves == (UINT256_MAX - 5, 1000)
        assert ledger.balance_of(TOKEN_A, USER) == UINT256_MAX
        pool.check_invariants()
