"""Reserve and share state owned by a Pool.

PoolState is the single mutable aggregate behind a pool. The Pool takes a
snapshot before each transaction and restores it if a transfer fails, so
the state always matches asset custody.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from simpleswap.errors import InsufficientShares, InvariantViolation
from simpleswap.safe_int import S


@dataclass
class ShareLedger:
    """Liquidity share balances. Sum of balances equals total_supply."""

    balances: dict[str, int] = field(default_factory=dict)
    total_supply: int = 0

    def balance_of(self, account: str) -> int:
        return self.balances.get(account, 0)

    def mint(self, account: str, amount: int) -> None:
        if amount == 0:
            return
        self.balances[account] = self.balance_of(account) + amount
        self.total_supply += amount

    def burn(self, account: str, amount: int) -> None:
        """Destroy amount of account's shares.

        Raises:
            InsufficientShares: If account holds fewer than amount
        """
        held = self.balance_of(account)
        if held < amount:
            raise InsufficientShares()
        remaining = (S(held) - S(amount)).value
        if remaining:
            self.balances[account] = remaining
        else:
            self.balances.pop(account, None)
        self.total_supply = (S(self.total_supply) - S(amount)).value

    def move(self, sender: str, recipient: str, amount: int) -> None:
        """Reassign shares without changing supply.

        Raises:
            InsufficientShares: If sender holds fewer than amount
        """
        self.burn(sender, amount)
        self.mint(recipient, amount)

    def copy(self) -> ShareLedger:
        return ShareLedger(balances=dict(self.balances), total_supply=self.total_supply)


@dataclass
class PoolState:
    """Reserves in pool order plus the share ledger."""

    reserve_x: int = 0
    reserve_y: int = 0
    shares: ShareLedger = field(default_factory=ShareLedger)

    @property
    def is_empty(self) -> bool:
        return self.reserve_x == 0 and self.reserve_y == 0

    def snapshot(self) -> PoolState:
        return PoolState(self.reserve_x, self.reserve_y, self.shares.copy())

    def restore(self, snapshot: PoolState) -> None:
        self.reserve_x = snapshot.reserve_x
        self.reserve_y = snapshot.reserve_y
        self.shares = snapshot.shares.copy()

    def check_invariants(self) -> None:
        """Raise InvariantViolation if the accounting invariants do not hold."""
        if self.reserve_x < 0 or self.reserve_y < 0:
            raise InvariantViolation("negative reserve")
        if (self.reserve_x == 0) != (self.reserve_y == 0):
            raise InvariantViolation("one-sided reserves")
        if (self.shares.total_supply == 0) != self.is_empty:
            raise InvariantViolation("supply/reserve mismatch")
        if sum(self.shares.balances.values()) != self.shares.total_supply:
            raise InvariantViolation("share sum")
