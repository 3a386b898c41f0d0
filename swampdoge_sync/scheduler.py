"""
Periodic auto-refresh for SwampDoge Sync.

On start the scheduler fires one forced price refresh, then every poll
interval a forced price refresh plus, when a wallet is attached, a balance
refresh. Each refresh runs as its own task so a slow endpoint never shifts
the cadence.
"""

import asyncio
from typing import Awaitable, Optional, Set

from swampdoge_sync.constants import POLL_INTERVAL_MS
from swampdoge_sync.logging_config import get_logger
from swampdoge_sync.services.refresh_service import AggregateRefresher

logger = get_logger(__name__)


class Scheduler:
    """Drives the refresher on a fixed interval."""

    def __init__(self, refresher: AggregateRefresher, interval_ms: float = POLL_INTERVAL_MS):
        self._refresher = refresher
        self.interval_ms = interval_ms
        self._loop_task: Optional[asyncio.Task] = None
        self._refresh_tasks: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    def start(self) -> None:
        """Start polling. Must be called from a running event loop."""
        if self.running:
            return
        logger.info(f"Starting auto-refresh every {self.interval_ms / 1000:g}s")
        self._loop_task = asyncio.create_task(self._run(), name="swampdoge-scheduler")

    def restart(self) -> None:
        """Restart the interval after a wallet-state change.

        In-flight refreshes are left to finish; only the timer is reset.
        """
        if self._loop_task is not None:
            self._loop_task.cancel()
            self._loop_task = None
        self.start()

    async def stop(self) -> None:
        """Cancel the timer and every in-flight refresh it launched."""
        tasks = list(self._refresh_tasks)
        if self._loop_task is not None:
            tasks.append(self._loop_task)
            self._loop_task = None
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._refresh_tasks.clear()
        logger.info("Auto-refresh stopped")

    async def _run(self) -> None:
        self._launch(self._refresher.refresh_prices(force=True))
        while True:
            await asyncio.sleep(self.interval_ms / 1000)
            self.tick()

    def tick(self) -> None:
        """Launch one scheduled round of refreshes."""
        self._launch(self._refresher.refresh_prices(force=True))
        if self._refresher.snapshot.connected:
            self._launch(self._refresher.refresh_balances())

    def _launch(self, operation: Awaitable) -> None:
        task = asyncio.ensure_future(operation)
        self._refresh_tasks.add(task)
        task.add_done_callback(self._on_refresh_done)

    def _on_refresh_done(self, task: asyncio.Task) -> None:
        self._refresh_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Scheduled refresh failed: {error}", exc_info=error)
