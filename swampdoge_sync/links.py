"""Deep links to external trading and explorer sites.

Opening a link is fire-and-forget: the caller never waits and a failure is
only logged.
"""

import asyncio
import webbrowser
from enum import Enum
from typing import Any, Callable, Optional

from swampdoge_sync.constants import (
    DEXSCREENER_URL,
    JUPITER_SWAP_URL,
    PUMP_FUN_URL,
    SOLSCAN_ACCOUNT_URL,
)
from swampdoge_sync.logging_config import get_logger

logger = get_logger(__name__)


class LinkTarget(str, Enum):
    DEXSCREENER = "dexscreener"
    PUMP_FUN = "pump_fun"
    JUPITER = "jupiter"
    SOLSCAN = "solscan"


_MINT_TEMPLATES = {
    LinkTarget.DEXSCREENER: DEXSCREENER_URL,
    LinkTarget.PUMP_FUN: PUMP_FUN_URL,
    LinkTarget.JUPITER: JUPITER_SWAP_URL,
}


def build_url(target: LinkTarget, mint: Optional[str] = None, address: Optional[str] = None) -> str:
    """Build the URL for ``target``.

    Args:
        target: Which site to link to
        mint: Token mint (chart and trading sites)
        address: Account address (explorer)

    Raises:
        ValueError: If the identifier the target needs is missing
    """
    if target is LinkTarget.SOLSCAN:
        if not address:
            raise ValueError("An account address is required for explorer links")
        return SOLSCAN_ACCOUNT_URL.format(address=address)
    if not mint:
        raise ValueError(f"A token mint is required for {target.value} links")
    return _MINT_TEMPLATES[target].format(mint=mint)


class LinkOpener:
    """Best-effort browser launcher."""

    def __init__(self, opener: Callable[[str], Any] = webbrowser.open):
        self._opener = opener

    def _open_now(self, url: str) -> None:
        try:
            self._opener(url)
        except Exception as e:
            logger.warning(f"Could not open {url}: {e}")

    def open(self, url: str) -> None:
        """Open ``url`` without waiting for the browser."""
        logger.debug(f"Opening {url}")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._open_now(url)
            return
        loop.run_in_executor(None, self._open_now, url)
