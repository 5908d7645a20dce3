"""SimpleSwap - two-asset constant product pool."""

from simpleswap.pool import Pool
from simpleswap.tokens import AssetTransfer, LedgerTransfer, TokenLedger

__version__ = "0.1.0"
__all__ = ["Pool", "AssetTransfer", "LedgerTransfer", "TokenLedger", "__version__"]
