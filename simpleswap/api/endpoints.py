"""API endpoints for the pool service."""

import structlog
from fastapi import APIRouter, Depends, Query

from simpleswap.models.api import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ApproveRequest,
    BalanceResponse,
    FaucetRequest,
    PoolResponse,
    PriceResponse,
    QuoteResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SharesResponse,
    SwapRequest,
    SwapResponse,
)
from simpleswap.models.types import normalize_address
from simpleswap.service import PoolService, get_default_service

logger = structlog.get_logger()

router = APIRouter()

# Query-string amounts are plain decimal integers
DECIMAL = r"^[0-9]+$"


def get_service() -> PoolService:
    """Dependency provider for the pool service.

    Override this in tests to inject a fresh pool:
        app.dependency_overrides[get_service] = lambda: service
    """
    return get_default_service()


@router.get("/pool")
async def pool_state(service: PoolService = Depends(get_service)) -> PoolResponse:
    """Reserves, share supply and share token metadata."""
    pool = service.pool
    reserve_a, reserve_b = pool.reserves
    return PoolResponse(
        address=pool.address,
        token_a=pool.asset_x,
        token_b=pool.asset_y,
        reserve_a=str(reserve_a),
        reserve_b=str(reserve_b),
        total_supply=str(pool.total_supply),
        name=pool.name,
        symbol=pool.symbol,
    )


@router.get("/price")
async def price(
    token_a: str = Query(alias="tokenA"),
    token_b: str = Query(alias="tokenB"),
    service: PoolService = Depends(get_service),
) -> PriceResponse:
    """Units of tokenB per one tokenA, scaled by 1e18."""
    value = service.pool.get_price(token_a, token_b)
    return PriceResponse(
        token_a=normalize_address(token_a),
        token_b=normalize_address(token_b),
        price=str(value),
    )


@router.get("/quote")
async def quote_out(
    amount_in: str = Query(alias="amountIn", pattern=DECIMAL),
    reserve_in: str = Query(alias="reserveIn", pattern=DECIMAL),
    reserve_out: str = Query(alias="reserveOut", pattern=DECIMAL),
    service: PoolService = Depends(get_service),
) -> QuoteResponse:
    """Standalone constant product quote."""
    amount_out = service.pool.get_amount_out(int(amount_in), int(reserve_in), int(reserve_out))
    return QuoteResponse(amount_out=str(amount_out))


@router.get("/shares/{account}")
async def shares(account: str, service: PoolService = Depends(get_service)) -> SharesResponse:
    """Liquidity share balance of an account."""
    return SharesResponse(
        account=normalize_address(account),
        balance=str(service.pool.balance_of(account)),
    )


@router.get("/balances/{token}/{account}")
async def token_balance(
    token: str, account: str, service: PoolService = Depends(get_service)
) -> BalanceResponse:
    """Ledger balance of an account in one asset."""
    return BalanceResponse(
        token=normalize_address(token),
        account=normalize_address(account),
        balance=str(service.ledger.balance_of(token, account)),
    )


@router.post("/liquidity/add")
def add_liquidity(
    request: AddLiquidityRequest, service: PoolService = Depends(get_service)
) -> AddLiquidityResponse:
    """Deposit both assets and mint shares."""
    amount_a, amount_b, liquidity = service.pool.add_liquidity(
        request.token_a,
        request.token_b,
        int(request.amount_a_desired),
        int(request.amount_b_desired),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        request.deadline,
        sender=request.sender,
    )
    return AddLiquidityResponse(
        amount_a=str(amount_a), amount_b=str(amount_b), liquidity=str(liquidity)
    )


@router.post("/liquidity/remove")
def remove_liquidity(
    request: RemoveLiquidityRequest, service: PoolService = Depends(get_service)
) -> RemoveLiquidityResponse:
    """Burn shares and withdraw both assets."""
    amount_a, amount_b = service.pool.remove_liquidity(
        request.token_a,
        request.token_b,
        int(request.liquidity),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        request.deadline,
        sender=request.sender,
    )
    return RemoveLiquidityResponse(amount_a=str(amount_a), amount_b=str(amount_b))


@router.post("/swap")
def swap(request: SwapRequest, service: PoolService = Depends(get_service)) -> SwapResponse:
    """Exact-input swap along a two-token path."""
    amounts = service.pool.swap_exact_tokens_for_tokens(
        int(request.amount_in),
        int(request.amount_out_min),
        request.path,
        request.to,
        request.deadline,
        sender=request.sender,
    )
    return SwapResponse(amounts=[str(a) for a in amounts])


@router.post("/faucet")
def faucet(request: FaucetRequest, service: PoolService = Depends(get_service)) -> BalanceResponse:
    """Mint in-memory test tokens to an account."""
    service.ledger.mint(request.token, request.account, int(request.amount))
    logger.info("faucet_mint", token=request.token, account=request.account, amount=request.amount)
    return BalanceResponse(
        token=normalize_address(request.token),
        account=normalize_address(request.account),
        balance=str(service.ledger.balance_of(request.token, request.account)),
    )


@router.post("/approve")
def approve(request: ApproveRequest, service: PoolService = Depends(get_service)) -> dict[str, str]:
    """Set the pool's allowance over the owner's tokens."""
    service.ledger.approve(request.token, request.owner, service.pool.address, int(request.amount))
    return {"allowance": request.amount}
