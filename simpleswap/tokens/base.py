"""Asset-transfer collaborator interface.

The pool never moves assets itself. It asks an AssetTransfer to pull funds
from a payer into the pool's custody account, or to push funds out of
custody to a recipient. Implementations must be atomic per call: either the
full amount moves or TransferFailed is raised and nothing moves.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AssetTransfer(Protocol):
    """Protocol for moving fungible assets on behalf of a pool."""

    def transfer_from(self, asset: str, from_account: str, to_account: str, amount: int) -> None:
        """Move amount of asset from from_account to to_account using the pool's allowance.

        Raises:
            TransferFailed: On insufficient balance or allowance
        """
        ...

    def transfer(self, asset: str, to_account: str, amount: int) -> None:
        """Move amount of asset out of the pool's custody account.

        Raises:
            TransferFailed: On insufficient custody balance
        """
        ...
