"""Pydantic models for the HTTP API.

Field names use camelCase aliases to match the contract ABI the web front
end already speaks (amountADesired, amountOutMin, ...). Amounts are Uint256
decimal strings.
"""

from pydantic import BaseModel, Field

from simpleswap.models.types import Address, Uint256

_ALIASED = {"populate_by_name": True}


class AddLiquidityRequest(BaseModel):
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    amount_a_desired: Uint256 = Field(alias="amountADesired")
    amount_b_desired: Uint256 = Field(alias="amountBDesired")
    amount_a_min: Uint256 = Field(default="0", alias="amountAMin")
    amount_b_min: Uint256 = Field(default="0", alias="amountBMin")
    to: Address
    deadline: int = Field(ge=0)
    sender: Address

    model_config = _ALIASED


class RemoveLiquidityRequest(BaseModel):
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    liquidity: Uint256
    amount_a_min: Uint256 = Field(default="0", alias="amountAMin")
    amount_b_min: Uint256 = Field(default="0", alias="amountBMin")
    to: Address
    deadline: int = Field(ge=0)
    sender: Address

    model_config = _ALIASED


class SwapRequest(BaseModel):
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out_min: Uint256 = Field(default="0", alias="amountOutMin")
    path: list[Address]
    to: Address
    deadline: int = Field(ge=0)
    sender: Address

    model_config = _ALIASED


class FaucetRequest(BaseModel):
    """Mint test tokens on the in-memory ledger."""

    token: Address
    account: Address
    amount: Uint256


class ApproveRequest(BaseModel):
    """Let the pool spend `amount` of owner's `token`."""

    token: Address
    owner: Address
    amount: Uint256


class PoolResponse(BaseModel):
    address: str
    token_a: str = Field(alias="tokenA")
    token_b: str = Field(alias="tokenB")
    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")
    total_supply: Uint256 = Field(alias="totalSupply")
    name: str
    symbol: str

    model_config = _ALIASED


class PriceResponse(BaseModel):
    token_a: str = Field(alias="tokenA")
    token_b: str = Field(alias="tokenB")
    price: Uint256

    model_config = _ALIASED


class QuoteResponse(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = _ALIASED


class SharesResponse(BaseModel):
    account: str
    balance: Uint256


class AddLiquidityResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")
    liquidity: Uint256

    model_config = _ALIASED


class RemoveLiquidityResponse(BaseModel):
    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = _ALIASED


class SwapResponse(BaseModel):
    amounts: list[Uint256]


class BalanceResponse(BaseModel):
    token: str
    account: str
    balance: Uint256


class ErrorResponse(BaseModel):
    error: str
    detail: str
