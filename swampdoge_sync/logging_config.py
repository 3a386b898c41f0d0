"""Logging setup for the sync engine.

Every module logs under the ``swampdoge_sync`` tree. What ends up at each level:

- DEBUG: RPC calls, price lookups with no usable value, published snapshot
  fields, results dropped as superseded, cooldown rejections
- INFO: accepted price refreshes, wallet attach/detach, scheduler start/stop,
  INFO notices such as confirmed picks
- WARNING: timed out or unavailable fetches (the field degrades to unknown),
  validation, rate-limit and operational notices, links that failed to open
- ERROR: unexpected refresh or scheduler failures, bad configuration
"""

import logging
import sys
from typing import Optional

# asctime - logger - level - message
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_level: str = "INFO", log_format: Optional[str] = None):
    """Send engine logs to stdout at ``log_level``.

    Called once by ``create_engine`` (unless ``configure_logs=False``) or by the
    console runner with ``--log-level``/``LOG_LEVEL``. An unknown level name
    falls back to INFO. The HTTP client and asyncio loggers stay at WARNING so
    that DEBUG shows engine traffic rather than connection-pool chatter.

    Args:
        log_level: Threshold name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format string; defaults to DEFAULT_LOG_FORMAT
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=log_format or DEFAULT_LOG_FORMAT,
        stream=sys.stdout
    )

    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for an engine module; pass ``__name__`` to stay under ``swampdoge_sync``."""
    return logging.getLogger(name)
