"""Pool configuration."""

from dataclasses import dataclass

from simpleswap.constants import PRICE_SCALE, SHARE_TOKEN_NAME, SHARE_TOKEN_SYMBOL


@dataclass(frozen=True)
class PoolConfig:
    """Settings shared by every pool instance.

    Attributes:
        price_scale: Fixed-point scale of get_price results (default: 1e18)
        share_name: Display name of the liquidity share token
        share_symbol: Ticker of the liquidity share token
        deadline_grace: Seconds a deadline may lag the clock and still pass.
            Zero matches on-chain behaviour (deadline >= block timestamp).
    """

    price_scale: int = PRICE_SCALE
    share_name: str = SHARE_TOKEN_NAME
    share_symbol: str = SHARE_TOKEN_SYMBOL
    deadline_grace: int = 0


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()
