"""Two-asset constant product pool.

The Pool owns reserves of two assets and a ledger of liquidity shares. It
changes state only through add_liquidity, remove_liquidity,
swap_exact_tokens_for_tokens and transfer_shares. Each of these runs as a
transaction:

1. Take the pool lock and set the reentrancy flag (nested calls fail).
2. Check every precondition before touching state.
3. Compute the result with the pure functions in simpleswap.amm.
4. Commit reserves and shares, then move assets via the AssetTransfer.
5. On any failure, restore the pre-transaction snapshot and reverse the
   transfers already made, then re-raise. A transfer that cannot be
   reversed is applied to the restored state again, so reserves keep
   matching what the custody account actually holds.
6. Emit the record to the log and to every sink.

Reserves are committed before any transfer is issued, so a transfer
callback that inspects the pool sees post-trade reserves, never a
half-applied trade.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import NamedTuple

import structlog

from simpleswap.amm.constant_product import (
    get_amount_out,
    get_price,
    optimal_deposit,
    quote,
    redemption_amounts,
    shares_to_mint,
)
from simpleswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from simpleswap.errors import (
    Expired,
    InsufficientOutputAmount,
    InsufficientShares,
    InvalidConfiguration,
    InvalidInput,
    InvalidPair,
    InvalidPathLength,
    InvalidRecipient,
    NoLiquidity,
    ReentrantCall,
    SlippageExceeded,
    TransferFailed,
)
from simpleswap.events import EventSink
from simpleswap.models.events import (
    LiquidityAdded,
    LiquidityRemoved,
    PoolEvent,
    SharesTransferred,
    TokensSwapped,
)
from simpleswap.models.types import is_valid_account, normalize_address
from simpleswap.pool.orientation import Orientation
from simpleswap.pool.state import PoolState
from simpleswap.safe_int import S
from simpleswap.tokens.base import AssetTransfer

logger = structlog.get_logger()


class _Leg(NamedTuple):
    asset: str
    counterparty: str
    amount: int
    inbound: bool


class _Transaction:
    """Transfers made and records produced by one pool transaction."""

    def __init__(self, transfers: AssetTransfer, custody_account: str) -> None:
        self._transfers = transfers
        self._custody = custody_account
        self._legs: list[_Leg] = []
        self.events: list[PoolEvent] = []
        # State changes that stand once an outbound transfer cannot be reversed
        self.partial_effects: list[Callable[[PoolState], None]] = []

    def pull(self, asset: str, payer: str, amount: int) -> None:
        self._transfers.transfer_from(asset, payer, self._custody, amount)
        self._legs.append(_Leg(asset, payer, amount, True))

    def push(self, asset: str, recipient: str, amount: int) -> None:
        self._transfers.transfer(asset, recipient, amount)
        self._legs.append(_Leg(asset, recipient, amount, False))

    def record(self, event: PoolEvent) -> None:
        self.events.append(event)

    def keep_on_partial(self, effect: Callable[[PoolState], None]) -> None:
        self.partial_effects.append(effect)

    def unwind(self) -> list[_Leg]:
        """Reverse completed transfers, newest first.

        Returns:
            The legs that could not be reversed
        """
        stuck = []
        for leg in reversed(self._legs):
            try:
                if leg.inbound:
                    self._transfers.transfer(leg.asset, leg.counterparty, leg.amount)
                else:
                    self._transfers.transfer_from(
                        leg.asset, leg.counterparty, self._custody, leg.amount
                    )
            except TransferFailed as err:
                logger.error(
                    "transfer_unwind_failed",
                    asset=leg.asset,
                    counterparty=leg.counterparty,
                    amount=leg.amount,
                    inbound=leg.inbound,
                    error=str(err),
                )
                stuck.append(leg)
        self._legs.clear()
        return stuck


class Pool:
    """Constant product pool over one asset pair.

    Args:
        token_a: First asset; becomes the pool's internal x
        token_b: Second asset; becomes the pool's internal y
        address: The pool's custody account (receives pulled assets)
        transfers: Asset-transfer collaborator acting for `address`
        clock: Returns current unix time in seconds
        config: Pool settings
        sinks: Receivers for committed records

    Raises:
        InvalidConfiguration: If the two assets are equal or blank
    """

    def __init__(
        self,
        token_a: str,
        token_b: str,
        *,
        address: str,
        transfers: AssetTransfer,
        clock: Callable[[], float] = time.time,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
        sinks: Sequence[EventSink] = (),
    ) -> None:
        if not is_valid_account(token_a) or not is_valid_account(token_b):
            raise InvalidConfiguration("Invalid token address")
        asset_x, asset_y = normalize_address(token_a), normalize_address(token_b)
        if asset_x == asset_y:
            raise InvalidConfiguration()

        self.asset_x = asset_x
        self.asset_y = asset_y
        self.address = normalize_address(address)
        self.config = config
        self._transfers = transfers
        self._clock = clock
        self._sinks: list[EventSink] = list(sinks)
        self._state = PoolState()
        self._lock = threading.RLock()
        self._entered = False

        logger.debug("pool_created", pool=self.address, asset_x=asset_x, asset_y=asset_y)

    # --- Queries ---

    @property
    def name(self) -> str:
        return self.config.share_name

    @property
    def symbol(self) -> str:
        return self.config.share_symbol

    @property
    def reserves(self) -> tuple[int, int]:
        """Current (reserve_x, reserve_y) in pool order."""
        with self._lock:
            return self._state.reserve_x, self._state.reserve_y

    @property
    def total_supply(self) -> int:
        with self._lock:
            return self._state.shares.total_supply

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self._state.shares.balance_of(normalize_address(account))

    def share_balances(self) -> dict[str, int]:
        """Copy of every non-zero share balance."""
        with self._lock:
            return dict(self._state.shares.balances)

    def get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        """Reserves in the caller's (token_a, token_b) order.

        Raises:
            InvalidPair: If the tokens are not the pool pair
        """
        orientation = self._orient(token_a, token_b)
        with self._lock:
            return orientation.to_caller(self._state.reserve_x, self._state.reserve_y)

    def get_price(self, token_a: str, token_b: str) -> int:
        """Units of token_b per one unit of token_a, scaled by config.price_scale.

        Raises:
            InvalidPair: If the tokens are not the pool pair
            NoLiquidity: If the pool is empty
        """
        try:
            orientation = self._orient(token_a, token_b)
        except InvalidPair:
            raise InvalidPair("Invalid tokens") from None
        with self._lock:
            state = self._state
            reserve_a, reserve_b = orientation.to_caller(state.reserve_x, state.reserve_y)
        return get_price(reserve_a, reserve_b, self.config.price_scale)

    @staticmethod
    def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Standalone quote; identical to the computation used by swaps."""
        return get_amount_out(amount_in, reserve_in, reserve_out)

    @staticmethod
    def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
        """Proportional amount of B for amount_a at the given reserves."""
        return quote(amount_a, reserve_a, reserve_b)

    def check_invariants(self) -> None:
        with self._lock:
            self._state.check_invariants()

    # --- State transitions ---

    def add_liquidity(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int, int]:
        """Deposit both assets at the current ratio and mint shares to `to`.

        Returns:
            (amount_a, amount_b, liquidity) with amounts in caller order
        """
        with self._transaction("add_liquidity") as tx:
            self._ensure_not_expired(deadline)
            recipient = self._require_recipient(to)
            orientation = self._orient(token_a, token_b)
            _require_amounts(
                amount_a_desired=amount_a_desired,
                amount_b_desired=amount_b_desired,
                amount_a_min=amount_a_min,
                amount_b_min=amount_b_min,
            )
            payer = normalize_address(sender)

            desired_x, desired_y = orientation.to_pool(amount_a_desired, amount_b_desired)
            min_x, min_y = orientation.to_pool(amount_a_min, amount_b_min)
            state = self._state
            try:
                accepted = optimal_deposit(
                    desired_x, desired_y, min_x, min_y, state.reserve_x, state.reserve_y
                )
            except SlippageExceeded as err:
                # Solver messages name pool sides; report the caller's side instead
                raise SlippageExceeded(_caller_side_message(str(err), orientation)) from None
            minted = shares_to_mint(
                accepted.amount_x,
                accepted.amount_y,
                state.reserve_x,
                state.reserve_y,
                state.shares.total_supply,
            )

            tx.pull(self.asset_x, payer, accepted.amount_x)
            tx.pull(self.asset_y, payer, accepted.amount_y)
            state.reserve_x = (S(state.reserve_x) + accepted.amount_x).to_uint256()
            state.reserve_y = (S(state.reserve_y) + accepted.amount_y).to_uint256()
            state.shares.mint(recipient, minted)

            amount_a, amount_b = orientation.to_caller(accepted.amount_x, accepted.amount_y)
            tx.record(LiquidityAdded(payer, amount_a, amount_b, minted))

        return amount_a, amount_b, minted

    def remove_liquidity(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int]:
        """Burn `liquidity` of sender's shares and pay out the proportional reserves.

        Returns:
            (amount_a, amount_b) in caller order
        """
        with self._transaction("remove_liquidity") as tx:
            self._ensure_not_expired(deadline)
            recipient = self._require_recipient(to)
            orientation = self._orient(token_a, token_b)
            _require_amounts(amount_a_min=amount_a_min, amount_b_min=amount_b_min)
            if not _is_uint(liquidity) or liquidity == 0:
                raise InvalidInput("Liquidity must be a positive integer")
            holder = normalize_address(sender)

            state = self._state
            if state.shares.balance_of(holder) < liquidity:
                raise InsufficientShares()

            owed_x, owed_y = redemption_amounts(
                liquidity, state.reserve_x, state.reserve_y, state.shares.total_supply
            )
            amount_a, amount_b = orientation.to_caller(owed_x, owed_y)
            if amount_a < amount_a_min or amount_b < amount_b_min:
                raise SlippageExceeded()

            state.reserve_x = (S(state.reserve_x) - owed_x).value
            state.reserve_y = (S(state.reserve_y) - owed_y).value
            state.shares.burn(holder, liquidity)
            tx.keep_on_partial(lambda s: s.shares.burn(holder, liquidity))

            tx.push(self.asset_x, recipient, owed_x)
            tx.push(self.asset_y, recipient, owed_y)
            tx.record(LiquidityRemoved(holder, amount_a, amount_b, liquidity))

        return amount_a, amount_b

    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        """Sell exactly amount_in of path[0] for as much path[1] as the curve gives.

        Returns:
            [amount_in, amount_out]
        """
        with self._transaction("swap") as tx:
            self._ensure_not_expired(deadline)
            if len(path) != 2:
                raise InvalidPathLength()
            token_in, token_out = normalize_address(path[0]), normalize_address(path[1])
            if token_in == token_out or {token_in, token_out} != {self.asset_x, self.asset_y}:
                raise InvalidPair("Invalid tokens")
            recipient = self._require_recipient(to)
            _require_amounts(amount_in=amount_in, amount_out_min=amount_out_min)
            payer = normalize_address(sender)

            state = self._state
            if state.is_empty:
                raise NoLiquidity()
            x_in = token_in == self.asset_x
            reserve_in, reserve_out = (
                (state.reserve_x, state.reserve_y) if x_in else (state.reserve_y, state.reserve_x)
            )

            amount_out = get_amount_out(amount_in, reserve_in, reserve_out)
            if amount_out < amount_out_min:
                raise InsufficientOutputAmount()

            new_in = (S(reserve_in) + amount_in).to_uint256()
            new_out = (S(reserve_out) - amount_out).value
            if x_in:
                state.reserve_x, state.reserve_y = new_in, new_out
            else:
                state.reserve_y, state.reserve_x = new_in, new_out

            tx.pull(token_in, payer, amount_in)
            tx.push(token_out, recipient, amount_out)
            tx.record(TokensSwapped(payer, token_in, token_out, amount_in, amount_out))

        return [amount_in, amount_out]

    def transfer_shares(self, sender: str, to: str, amount: int) -> None:
        """Move liquidity shares between accounts; reserves are untouched."""
        with self._transaction("transfer_shares") as tx:
            recipient = self._require_recipient(to)
            _require_amounts(amount=amount)
            holder = normalize_address(sender)
            self._state.shares.move(holder, recipient, amount)
            tx.record(SharesTransferred(holder, recipient, amount))

    # --- Internals ---

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[_Transaction]:
        with self._lock:
            if self._entered:
                logger.warning("reentrant_call_rejected", pool=self.address, operation=operation)
                raise ReentrantCall()
            self._entered = True
            snapshot = self._state.snapshot()
            tx = _Transaction(self._transfers, self.address)
            try:
                yield tx
            except Exception as err:
                self._state.restore(snapshot)
                stuck = tx.unwind()
                if stuck:
                    self._reconcile(stuck, tx)
                log = logger.warning if isinstance(err, TransferFailed) else logger.info
                log(
                    "operation_rejected",
                    pool=self.address,
                    operation=operation,
                    error=type(err).__name__,
                    reason=str(err),
                )
                raise
            finally:
                self._entered = False

            for event in tx.events:
                self._emit(event)

    def _reconcile(self, stuck: list[_Leg], tx: _Transaction) -> None:
        """Re-apply transfers that could not be reversed so reserves match custody."""
        state = self._state
        for leg in stuck:
            reserve = state.reserve_x if leg.asset == self.asset_x else state.reserve_y
            if leg.inbound:
                reserve = (S(reserve) + leg.amount).value
            else:
                reserve = (S(reserve) - leg.amount).value
            if leg.asset == self.asset_x:
                state.reserve_x = reserve
            else:
                state.reserve_y = reserve
        if any(not leg.inbound for leg in stuck):
            for effect in tx.partial_effects:
                effect(state)
        logger.error(
            "pool_state_reconciled",
            pool=self.address,
            reserve_x=state.reserve_x,
            reserve_y=state.reserve_y,
            total_supply=state.shares.total_supply,
            stuck_legs=len(stuck),
        )

    def _emit(self, event: PoolEvent) -> None:
        fields = event.to_dict()
        record = fields.pop("event")
        logger.info("pool_event", pool=self.address, record=record, **fields)
        for sink in self._sinks:
            try:
                sink.emit(event)
            except Exception as err:
                logger.error(
                    "event_sink_failed",
                    pool=self.address,
                    record=record,
                    sink=type(sink).__name__,
                    error=str(err),
                )

    def _orient(self, token_a: str, token_b: str) -> Orientation:
        if not isinstance(token_a, str) or not isinstance(token_b, str):
            raise InvalidPair()
        return Orientation.resolve(token_a, token_b, self.asset_x, self.asset_y)

    def _ensure_not_expired(self, deadline: int) -> None:
        now = self._clock()
        if now > deadline + self.config.deadline_grace:
            raise Expired()

    def _require_recipient(self, to: str) -> str:
        if not is_valid_account(to):
            raise InvalidRecipient()
        return normalize_address(to)


def _is_uint(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _require_amounts(**amounts: object) -> None:
    for name, value in amounts.items():
        if not _is_uint(value):
            raise InvalidInput(f"{name} must be a non-negative integer, got {value!r}")


def _caller_side_message(message: str, orientation: Orientation) -> str:
    if not orientation.reversed:
        return message
    swapped = {
        "Insufficient A amount": "Insufficient B amount",
        "Insufficient B amount": "Insufficient A amount",
    }
    return swapped.get(message, message)
