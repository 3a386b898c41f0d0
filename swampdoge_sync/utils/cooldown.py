"""
Cooldown gate for user-initiated refreshes.

Each refresh class keeps the instant its last request was accepted. A new
request is accepted once the cooldown has elapsed, or immediately when the
caller forces it. The timestamp moves at acceptance time, before the
underlying fetch starts, so a burst of taps cannot all slip through while the
first fetch is still in flight.
"""

import time
from enum import Enum
from typing import Callable, Dict, Optional

from swampdoge_sync.constants import COOLDOWN_MS
from swampdoge_sync.logging_config import get_logger

logger = get_logger(__name__)


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


class RefreshClass(str, Enum):
    """Refresh classes with independent cooldowns."""

    PRICES = "prices"
    HOLDERS = "holders"


class CooldownState:
    """Last-accepted instant (ms) per refresh class."""

    def __init__(self):
        self._last_accepted: Dict[RefreshClass, float] = {}

    def last_accepted(self, refresh_class: RefreshClass) -> Optional[float]:
        return self._last_accepted.get(refresh_class)

    def mark(self, refresh_class: RefreshClass, now: float) -> None:
        self._last_accepted[refresh_class] = now

    def reset(self) -> None:
        self._last_accepted.clear()


class CooldownGate:
    """Synchronous accept/reject gate over a CooldownState."""

    def __init__(
        self,
        state: Optional[CooldownState] = None,
        cooldown_ms: float = COOLDOWN_MS,
        clock: Callable[[], float] = monotonic_ms
    ):
        """
        Initialize the gate.

        Args:
            state: Cooldown state to guard; a fresh one is created if omitted
            cooldown_ms: Minimum spacing between accepted requests
            clock: Millisecond clock used when the caller passes no instant
        """
        self.state = state if state is not None else CooldownState()
        self.cooldown_ms = cooldown_ms
        self._clock = clock

    def remaining_ms(self, refresh_class: RefreshClass, now: Optional[float] = None) -> float:
        """Milliseconds left before a non-forced request would be accepted."""
        last = self.state.last_accepted(refresh_class)
        if last is None:
            return 0.0
        now = self._clock() if now is None else now
        return max(0.0, self.cooldown_ms - (now - last))

    def try_acquire(
        self,
        refresh_class: RefreshClass,
        now: Optional[float] = None,
        force: bool = False
    ) -> bool:
        """
        Accept or reject a refresh request.

        Args:
            refresh_class: Which cooldown to consult
            now: Request instant in ms; defaults to the gate's clock
            force: Bypass the cooldown (the accepted instant is still recorded)

        Returns:
            True if the request is accepted
        """
        now = self._clock() if now is None else now
        last = self.state.last_accepted(refresh_class)

        if not force and last is not None and now - last < self.cooldown_ms:
            logger.debug(
                f"Rejected {refresh_class.value} refresh: "
                f"{self.cooldown_ms - (now - last):.0f}ms of cooldown left"
            )
            return False

        self.state.mark(refresh_class, now)
        return True
