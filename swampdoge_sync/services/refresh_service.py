"""
Aggregate refresher for SwampDoge Sync.

This service is the only writer of the published Snapshot. It fans out
independent fetches concurrently, merges whatever came back into a single new
snapshot, and publishes it in one step. Each field carries a generation
number so a slow fetch can never overwrite the result of a newer one.
"""

import asyncio
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from swampdoge_sync.models.history import HistoryBuffer
from swampdoge_sync.models.snapshot import DataHealth, Snapshot
from swampdoge_sync.notifications import Notifier, NoticeKind
from swampdoge_sync.services.account_service import AccountService
from swampdoge_sync.services.base_service import BaseService
from swampdoge_sync.services.market_service import MarketService
from swampdoge_sync.services.token_service import TokenService
from swampdoge_sync.utils.cooldown import CooldownGate, RefreshClass
from swampdoge_sync.utils.errors import RateLimitedError
from swampdoge_sync.utils.generations import GenerationTracker

# Generation keys, named after the snapshot fields they guard
TOKEN_PRICE = "token_price_usd"
NATIVE_PRICE = "native_price_usd"
NATIVE_BALANCE = "native_balance"
TOKEN_BALANCE = "token_balance"
HOLDERS = "holders"

SnapshotCallback = Callable[[Snapshot], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _error_message(error: BaseException) -> str:
    return getattr(error, "message", None) or str(error) or type(error).__name__


class AggregateRefresher(BaseService):
    """Merges price, balance and holder fetches into one published snapshot."""

    def __init__(
        self,
        market_service: MarketService,
        account_service: AccountService,
        token_service: TokenService,
        notifier: Optional[Notifier] = None,
        cooldown_gate: Optional[CooldownGate] = None,
        history: Optional[HistoryBuffer] = None,
        now: Callable[[], datetime] = _utcnow
    ):
        """
        Initialize the refresher.

        Args:
            market_service: Price source (never raises)
            account_service: Balance source (raises on failure)
            token_service: Holder source (raises on failure)
            notifier: Sink for user-visible notices
            cooldown_gate: Gate over this refresher's CooldownState
            history: Rolling token-price history
            now: Wall clock used for the last-updated stamp
        """
        super().__init__()
        self.market = market_service
        self.accounts = account_service
        self.tokens = token_service
        self.notifier = notifier or Notifier()
        self.cooldown = cooldown_gate or CooldownGate()
        self.history = history if history is not None else HistoryBuffer()
        self.generations = GenerationTracker()
        self._now = now
        self._snapshot = Snapshot()
        self._subscribers: List[SnapshotCallback] = []
        self._inflight: Counter = Counter()

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register a snapshot listener; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, **changes: Any) -> Snapshot:
        self._snapshot = self._snapshot.with_changes(**changes)
        self.logger.debug(f"Published snapshot: {sorted(changes)}")
        for callback in list(self._subscribers):
            try:
                callback(self._snapshot)
            except Exception:
                self.logger.exception("Snapshot subscriber failed")
        return self._snapshot

    def _start_loading(self, kind: str) -> None:
        self._inflight[kind] += 1
        if self._inflight[kind] == 1:
            self._publish(**{f"loading_{kind}": True})

    def _finish_loading(self, kind: str, changes: Dict[str, Any]) -> None:
        self._inflight[kind] -= 1
        changes[f"loading_{kind}"] = self._inflight[kind] > 0
        self._publish(**changes)

    def _reject(self, refresh_class: RefreshClass, message: str) -> None:
        error = RateLimitedError(refresh_class.value, self.cooldown.remaining_ms(refresh_class))
        self.notifier.notify(NoticeKind.RATE_LIMITED, "Slow down", message, details=error.to_dict())

    # Wallet-scoped state

    def attach_wallet(self, address: str) -> Snapshot:
        """Record ``address`` as the attached wallet and forget any old balances."""
        self.generations.invalidate(NATIVE_BALANCE, TOKEN_BALANCE)
        self.logger.info(f"Wallet attached: {address}")
        return self._publish(wallet=address, native_balance=None, token_balance=None)

    def detach_wallet(self) -> Snapshot:
        """Clear the wallet and its balances; prices and holders stay as they are."""
        self.generations.invalidate(NATIVE_BALANCE, TOKEN_BALANCE)
        self.logger.info("Wallet detached")
        return self._publish(wallet=None, native_balance=None, token_balance=None)

    # Refresh operations

    async def refresh_prices(self, force: bool = False) -> bool:
        """
        Refresh the token and native prices concurrently.

        Args:
            force: Bypass the cooldown (scheduler ticks and refresh-all)

        Returns:
            False if the request was rejected by the cooldown gate
        """
        if not self.cooldown.try_acquire(RefreshClass.PRICES, force=force):
            self._reject(RefreshClass.PRICES, "Give it a few seconds, then refresh again.")
            return False

        token_gen = self.generations.begin(TOKEN_PRICE)
        native_gen = self.generations.begin(NATIVE_PRICE)
        changes: Dict[str, Any] = {}
        self._start_loading("prices")
        try:
            token_price, native_price = await asyncio.gather(
                self.market.get_token_price(),
                self.market.get_native_price(),
                return_exceptions=True
            )
            if isinstance(token_price, BaseException):
                token_price = None
            if isinstance(native_price, BaseException):
                native_price = None

            token_current = self.generations.is_current(TOKEN_PRICE, token_gen)
            native_current = self.generations.is_current(NATIVE_PRICE, native_gen)
            if not token_current and not native_current:
                self.logger.debug("Dropping superseded price results")
                return True

            if token_price is None and native_price is None:
                changes["health"] = DataHealth.OFFLINE
            else:
                changes["health"] = DataHealth.OK

            if token_current and token_price is not None:
                self.history.append(token_price)
                changes[TOKEN_PRICE] = token_price
                changes["price_history"] = tuple(self.history)
            if native_current and native_price is not None:
                changes[NATIVE_PRICE] = native_price

            changes["last_updated"] = self._now()
            self.logger.info(
                f"Prices refreshed: token={token_price} native={native_price} "
                f"health={changes['health'].value}"
            )
        finally:
            self._finish_loading("prices", changes)
        return True

    async def refresh_balances(self) -> bool:
        """
        Refresh both wallet balances concurrently.

        Failures are surfaced as notices and leave their field untouched; a
        sibling that succeeded is still applied.

        Returns:
            False when no wallet is attached or any balance failed
        """
        wallet = self._snapshot.wallet
        if wallet is None:
            return False

        native_gen = self.generations.begin(NATIVE_BALANCE)
        token_gen = self.generations.begin(TOKEN_BALANCE)
        changes: Dict[str, Any] = {}
        errors: List[BaseException] = []
        self._start_loading("balances")
        try:
            results = await asyncio.gather(
                self.accounts.get_native_balance(wallet),
                self.accounts.get_token_balance(wallet),
                return_exceptions=True
            )
            for field, generation, result in zip(
                (NATIVE_BALANCE, TOKEN_BALANCE), (native_gen, token_gen), results
            ):
                if not self.generations.is_current(field, generation):
                    self.logger.debug(f"Dropping superseded {field} result")
                    continue
                if isinstance(result, BaseException):
                    errors.append(result)
                    continue
                changes[field] = result

            if NATIVE_BALANCE in changes or TOKEN_BALANCE in changes:
                changes["last_updated"] = self._now()
        finally:
            self._finish_loading("balances", changes)

        if errors:
            messages = list(dict.fromkeys(_error_message(e) for e in errors))
            self.notifier.notify(
                NoticeKind.OPERATIONAL,
                "Balance error",
                "; ".join(messages),
                details={"wallet": wallet}
            )
            return False
        return True

    async def refresh_holders(self) -> bool:
        """
        Replace the holder list. Always gated by the cooldown.

        Returns:
            True if a new list was applied
        """
        if not self.cooldown.try_acquire(RefreshClass.HOLDERS):
            self._reject(RefreshClass.HOLDERS, "Try again in a few seconds.")
            return False

        generation = self.generations.begin(HOLDERS)
        changes: Dict[str, Any] = {}
        error: Optional[BaseException] = None
        self._start_loading("holders")
        try:
            holders = await self.tokens.get_top_holders()
        except Exception as e:
            error = e
        else:
            if self.generations.is_current(HOLDERS, generation):
                changes[HOLDERS] = tuple(holders)
                changes["last_updated"] = self._now()
        finally:
            self._finish_loading("holders", changes)

        if error is not None:
            if self.generations.is_current(HOLDERS, generation):
                self.notifier.notify(NoticeKind.OPERATIONAL, "Holders error", _error_message(error))
            return False
        return HOLDERS in changes

    async def refresh_all(self) -> None:
        """Forced price refresh plus, when a wallet is attached, a balance refresh."""
        async with self.log_timing("Refresh all"):
            operations = [self.refresh_prices(force=True)]
            if self._snapshot.connected:
                operations.append(self.refresh_balances())
            results = await asyncio.gather(*operations, return_exceptions=True)

        for result in results:
            if isinstance(result, Exception):
                self.logger.error(f"Refresh failed: {_error_message(result)}")
