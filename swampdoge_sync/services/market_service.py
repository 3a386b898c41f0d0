"""Market service for SwampDoge Sync.

Price fetches degrade silently: any failure reads as unavailable (None).
"""

from typing import Optional

from swampdoge_sync.clients.market_client import MarketClient
from swampdoge_sync.constants import FETCH_TIMEOUT_MS
from swampdoge_sync.services.base_service import BaseService


class MarketService(BaseService):
    """Service for token and native-asset prices."""

    def __init__(self, market_client: MarketClient, token_mint: str, timeout_ms: float = FETCH_TIMEOUT_MS):
        """Initialize the market service.

        Args:
            market_client: Client for the market-data and price endpoints
            token_mint: Mint whose price is tracked
            timeout_ms: Per-fetch timeout
        """
        super().__init__(timeout_ms=timeout_ms)
        self.client = market_client
        self.token_mint = token_mint

    async def get_token_price(self) -> Optional[float]:
        """Token price in USD, or None when unavailable."""
        return await self.fetch_with_timeout(
            self.client.get_token_price_usd(self.token_mint),
            operation_name="token price"
        )

    async def get_native_price(self) -> Optional[float]:
        """Native asset price in USD, or None when unavailable."""
        return await self.fetch_with_timeout(
            self.client.get_native_price_usd(),
            operation_name="native price"
        )
