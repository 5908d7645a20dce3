"""Constant product AMM math."""

from simpleswap.amm.constant_product import (
    DepositAmounts,
    get_amount_out,
    get_price,
    optimal_deposit,
    quote,
    redemption_amounts,
    shares_to_mint,
)

__all__ = [
    "DepositAmounts",
    "get_amount_out",
    "get_price",
    "optimal_deposit",
    "quote",
    "redemption_amounts",
    "shares_to_mint",
]
