"""Asset-transfer collaborators."""

from simpleswap.tokens.base import AssetTransfer
from simpleswap.tokens.ledger import LedgerTransfer, TokenLedger

__all__ = ["AssetTransfer", "LedgerTransfer", "TokenLedger"]
