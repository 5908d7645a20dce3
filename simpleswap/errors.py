"""Pool error classes.

Every failed pool operation raises one of these. Messages follow the revert
reasons of the on-chain SimpleSwap contract where one exists, so logs and
API responses read the same as a failed transaction would.
"""


class PoolError(Exception):
    """Base error for pool operations."""

    default_message = "Pool operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidConfiguration(PoolError):
    """Pool constructed with identical asset identifiers."""

    default_message = "tokens equals!"


class Expired(PoolError):
    """Current time is past the caller's deadline."""

    default_message = "Transaction expired"


class InvalidRecipient(PoolError):
    """Recipient is missing or the zero address."""

    default_message = "Invalid 'to' address"


class InvalidPair(PoolError):
    """Asset identifiers do not match the pool pair."""

    default_message = "Invalid token pair"


class InvalidPathLength(PoolError):
    """Swap path does not have exactly two elements."""

    default_message = "Invalid path length"


class InvalidInput(PoolError):
    """Non-positive amount or reserve, or a non-integer amount."""

    default_message = "Invalid input"


class NoLiquidity(PoolError):
    """Query or swap against an empty pool."""

    default_message = "No liquidity"


class InsufficientLiquidityMinted(PoolError):
    """Deposit too small to mint a single share after rounding."""

    default_message = "Insufficient liquidity minted"


class InsufficientShares(PoolError):
    """Account holds fewer shares than it tried to redeem or transfer."""

    default_message = "Not enough liquidity"


class SlippageExceeded(PoolError):
    """Accepted or paid-out amount is below the caller's floor."""

    default_message = "Slippage limit"


class InsufficientOutputAmount(SlippageExceeded):
    """Swap output is below amount_out_min."""

    default_message = "Insufficient output amount"


class TransferFailed(PoolError):
    """The asset-transfer collaborator refused or failed a transfer."""

    default_message = "Transfer failed"


class ReentrantCall(PoolError):
    """A mutating pool operation was invoked while another was in progress."""

    default_message = "Reentrant call"


class InvariantViolation(PoolError):
    """Reserves and share supply no longer satisfy the accounting invariants."""

    default_message = "Invariant violated"
