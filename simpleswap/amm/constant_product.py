"""Constant product math for a fee-less two-asset pool.

The pool keeps reserve_x * reserve_y = k across swaps. Every formula here
floors, so results are never larger than the exact rational value and the
pool never owes more than it holds:

    amount_out = amount_in * reserve_out // (reserve_in + amount_in)

These are pure functions of their arguments. The Pool calls them with its
reserves and commits the results; the API layer calls get_amount_out
directly as a standalone quoter.
"""

from __future__ import annotations

from dataclasses import dataclass

from simpleswap.constants import PRICE_SCALE
from simpleswap.errors import (
    InsufficientLiquidityMinted,
    InvalidInput,
    NoLiquidity,
    SlippageExceeded,
)
from simpleswap.safe_int import S


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Calculate output amount for an exact input.

    Derived from (reserve_in + amount_in) * (reserve_out - amount_out) >= k,
    solved for amount_out and floored. Because amount_in / (reserve_in + amount_in)
    is strictly below 1, the result is strictly below reserve_out.

    Args:
        amount_in: Input token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool

    Returns:
        Output token amount

    Raises:
        InvalidInput: If any argument is not strictly positive
    """
    if amount_in <= 0:
        raise InvalidInput("Insufficient input amount")
    if reserve_in <= 0 or reserve_out <= 0:
        raise InvalidInput("Insufficient liquidity")

    numerator = S(amount_in) * S(reserve_out)
    denominator = S(reserve_in) + S(amount_in)
    return (numerator // denominator).value


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B matching amount_a at the current reserve ratio, floored.

    Raises:
        InvalidInput: If amount_a is negative or either reserve is not positive
    """
    if amount_a < 0:
        raise InvalidInput("Insufficient amount")
    if reserve_a <= 0 or reserve_b <= 0:
        raise InvalidInput("Insufficient liquidity")
    return S(amount_a).mul_div(reserve_b, reserve_a).value


def get_price(reserve_in: int, reserve_out: int, scale: int = PRICE_SCALE) -> int:
    """Units of the out-asset per one unit of the in-asset, fixed-point scaled.

    Raises:
        NoLiquidity: If either reserve is zero
    """
    if reserve_in <= 0 or reserve_out <= 0:
        raise NoLiquidity()
    return S(reserve_out).mul_div(scale, reserve_in).value


@dataclass(frozen=True)
class DepositAmounts:
    """Amounts accepted by the optimal-amount solver, in pool order."""

    amount_x: int
    amount_y: int


def optimal_deposit(
    desired_x: int,
    desired_y: int,
    min_x: int,
    min_y: int,
    reserve_x: int,
    reserve_y: int,
) -> DepositAmounts:
    """Choose the deposit that matches the current ratio without exceeding either desired amount.

    An empty pool accepts the desired amounts as-is; the first depositor sets
    the price. Otherwise the solver first tries to keep all of desired_x and
    scales y down to the ratio; if that needs more y than offered, it keeps
    all of desired_y and scales x down instead.

    Raises:
        SlippageExceeded: If the scaled-down side falls below its floor
    """
    if reserve_x == 0 and reserve_y == 0:
        return DepositAmounts(desired_x, desired_y)

    optimal_y = quote(desired_x, reserve_x, reserve_y)
    if optimal_y <= desired_y:
        if optimal_y < min_y:
            raise SlippageExceeded("Insufficient B amount")
        return DepositAmounts(desired_x, optimal_y)

    optimal_x = quote(desired_y, reserve_y, reserve_x)
    if optimal_x < min_x:
        raise SlippageExceeded("Insufficient A amount")
    return DepositAmounts(optimal_x, desired_y)


def shares_to_mint(
    amount_x: int,
    amount_y: int,
    reserve_x: int,
    reserve_y: int,
    total_supply: int,
) -> int:
    """Shares issued for a deposit of (amount_x, amount_y).

    First deposit: floor(sqrt(x * y)). Afterwards: the smaller of the two
    floored proportional claims, so neither asset's contribution is
    over-credited.

    Raises:
        InsufficientLiquidityMinted: If the deposit rounds to zero shares
    """
    if total_supply == 0:
        minted = (S(amount_x) * S(amount_y)).sqrt()
    else:
        if reserve_x == 0 or reserve_y == 0:
            raise InsufficientLiquidityMinted()
        minted = S(amount_x).mul_div(total_supply, reserve_x).min(
            S(amount_y).mul_div(total_supply, reserve_y)
        )

    if minted == 0:
        raise InsufficientLiquidityMinted()
    return minted.value


def redemption_amounts(
    liquidity: int,
    reserve_x: int,
    reserve_y: int,
    total_supply: int,
) -> tuple[int, int]:
    """Assets owed for burning `liquidity` shares, floored, in pool order."""
    if total_supply <= 0:
        raise NoLiquidity()
    owed_x = S(liquidity).mul_div(reserve_x, total_supply)
    owed_y = S(liquidity).mul_div(reserve_y, total_supply)
    return owed_x.value, owed_y.value
