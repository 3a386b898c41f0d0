"""
User-visible notices.

The engine never blocks on a dialog. It records a notice, logs it and pushes
it to any subscriber. The presentation layer shows pending notices and
dismisses them when the user does.
"""

import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from swampdoge_sync.constants import MAX_PENDING_NOTICES
from swampdoge_sync.logging_config import get_logger

logger = get_logger(__name__)


class NoticeKind(str, Enum):
    VALIDATION = "validation"
    RATE_LIMITED = "rate_limited"
    OPERATIONAL = "operational"
    INFO = "info"


_LOG_LEVELS = {
    NoticeKind.VALIDATION: logging.WARNING,
    NoticeKind.RATE_LIMITED: logging.WARNING,
    NoticeKind.OPERATIONAL: logging.WARNING,
    NoticeKind.INFO: logging.INFO,
}


@dataclass(frozen=True)
class Notice:
    id: int
    kind: NoticeKind
    title: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


NoticeCallback = Callable[[Notice], None]


class Notifier:
    """Collects dismissible notices and fans them out to subscribers."""

    def __init__(self, max_pending: int = MAX_PENDING_NOTICES):
        self._ids = itertools.count(1)
        self._pending: Dict[int, Notice] = {}
        self.max_pending = max_pending
        self._subscribers: List[NoticeCallback] = []

    @property
    def pending(self) -> List[Notice]:
        """Undismissed notices, oldest first."""
        return list(self._pending.values())

    def subscribe(self, callback: NoticeCallback) -> Callable[[], None]:
        """Register ``callback``; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def notify(
        self,
        kind: NoticeKind,
        title: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> Notice:
        notice = Notice(
            id=next(self._ids),
            kind=kind,
            title=title,
            message=message,
            details=details or {},
        )
        self._pending[notice.id] = notice
        while len(self._pending) > self.max_pending:
            # Oldest undismissed notice goes first
            self._pending.pop(next(iter(self._pending)))
        logger.log(_LOG_LEVELS[kind], f"[{kind.value}] {title}: {message}")

        for callback in list(self._subscribers):
            try:
                callback(notice)
            except Exception:
                logger.exception(f"Notice subscriber failed for notice {notice.id}")
        return notice

    def dismiss(self, notice_id: int) -> bool:
        """Remove a notice; returns False if it was not pending."""
        return self._pending.pop(notice_id, None) is not None

    def clear(self) -> None:
        self._pending.clear()
