"""In-memory fungible token ledger.

TokenLedger keeps ERC-20 style balances and allowances for any number of
assets. LedgerTransfer adapts it to the AssetTransfer protocol for one pool:
pulls spend the allowance granted to the pool's custody account, pushes
debit the custody account directly.

Used by the HTTP service and the tests as the asset-transfer collaborator.
"""

from __future__ import annotations

import threading
from collections import defaultdict

import structlog

from simpleswap.errors import InvalidInput, TransferFailed
from simpleswap.models.types import normalize_address

logger = structlog.get_logger()


class TokenLedger:
    """Balances and allowances keyed by (asset, account)."""

    def __init__(self) -> None:
        self._balances: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
        # asset -> owner -> spender -> remaining allowance
        self._allowances: dict[str, dict[str, dict[str, int]]] = defaultdict(
            lambda: defaultdict(lambda: defaultdict(int))
        )
        self._lock = threading.Lock()

    def mint(self, asset: str, account: str, amount: int) -> None:
        """Create amount of asset out of thin air and credit it to account."""
        _check_amount(amount)
        asset, account = normalize_address(asset), normalize_address(account)
        with self._lock:
            self._balances[asset][account] += amount
        logger.debug("tokens_minted", asset=asset, account=account, amount=amount)

    def balance_of(self, asset: str, account: str) -> int:
        asset, account = normalize_address(asset), normalize_address(account)
        with self._lock:
            return self._balances[asset].get(account, 0)

    def approve(self, asset: str, owner: str, spender: str, amount: int) -> None:
        """Set spender's allowance over owner's asset to amount (replaces, not adds)."""
        _check_amount(amount)
        asset, owner, spender = (normalize_address(x) for x in (asset, owner, spender))
        with self._lock:
            self._allowances[asset][owner][spender] = amount

    def allowance(self, asset: str, owner: str, spender: str) -> int:
        asset, owner, spender = (normalize_address(x) for x in (asset, owner, spender))
        with self._lock:
            return self._allowances[asset][owner].get(spender, 0)

    def transfer(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        """Move amount from sender to recipient.

        Raises:
            TransferFailed: If sender's balance is insufficient
        """
        _check_amount(amount)
        asset, sender, recipient = (normalize_address(x) for x in (asset, sender, recipient))
        with self._lock:
            self._move(asset, sender, recipient, amount)

    def transfer_from(
        self, asset: str, spender: str, owner: str, recipient: str, amount: int
    ) -> None:
        """Move amount from owner to recipient, spending spender's allowance.

        Raises:
            TransferFailed: If the allowance or owner's balance is insufficient
        """
        _check_amount(amount)
        asset, spender, owner, recipient = (
            normalize_address(x) for x in (asset, spender, owner, recipient)
        )
        with self._lock:
            allowed = self._allowances[asset][owner].get(spender, 0)
            if allowed < amount:
                raise TransferFailed(
                    f"Insufficient allowance: {owner} allows {spender} {allowed} of {asset}, "
                    f"needs {amount}"
                )
            self._move(asset, owner, recipient, amount)
            self._allowances[asset][owner][spender] = allowed - amount

    def _move(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        balance = self._balances[asset].get(sender, 0)
        if balance < amount:
            raise TransferFailed(
                f"Insufficient balance: {sender} holds {balance} of {asset}, needs {amount}"
            )
        self._balances[asset][sender] = balance - amount
        self._balances[asset][recipient] += amount


class LedgerTransfer:
    """AssetTransfer backed by a TokenLedger, acting as the pool's custody account."""

    def __init__(self, ledger: TokenLedger, custody_account: str) -> None:
        self.ledger = ledger
        self.custody_account = normalize_address(custody_account)

    def transfer_from(self, asset: str, from_account: str, to_account: str, amount: int) -> None:
        self.ledger.transfer_from(asset, self.custody_account, from_account, to_account, amount)

    def transfer(self, asset: str, to_account: str, amount: int) -> None:
        self.ledger.transfer(asset, self.custody_account, to_account, amount)


def _check_amount(amount: int) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
        raise InvalidInput(f"Amount must be a non-negative integer, got {amount!r}")
