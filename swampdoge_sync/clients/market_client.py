"""Market-data and price endpoint client.

Two public services are used: a DEX aggregator that lists trading pairs for a
token mint, and a price API keyed by asset symbol.
"""

import math
from typing import Any, Dict, Optional

import httpx

from swampdoge_sync.clients.base_client import BaseClient
from swampdoge_sync.logging_config import get_logger
from swampdoge_sync.utils.errors import DataParsingError, ExternalServiceError
from swampdoge_sync.utils.validation import InvalidPublicKeyError, validate_public_key

# Get logger
logger = get_logger(__name__)


def _to_price(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise DataParsingError(f"Non-numeric price: {value!r}", data_type="price")
    if not math.isfinite(price):
        raise DataParsingError(f"Non-finite price: {value!r}", data_type="price")
    return price


class MarketClient(BaseClient):
    """Client for token and native-asset USD prices."""

    async def _fetch(self, url: str, service_name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            return await self._get_json(url, params=params)
        except (httpx.HTTPError, ValueError) as e:
            raise ExternalServiceError(
                f"{service_name} request failed: {str(e) or type(e).__name__}",
                service_name=service_name
            ) from e

    async def get_token_price_usd(self, token_mint: str) -> Optional[float]:
        """Get the USD price of a token from its first listed trading pair.

        Args:
            token_mint: The mint address of the token

        Returns:
            The first pair's priceUsd, or None if there is no such field

        Raises:
            InvalidPublicKeyError: If the token_mint is not a valid Solana public key
            DataParsingError: If the price field is not numeric
            ExternalServiceError: If the endpoint is unreachable or returns a bad status
        """
        if not validate_public_key(token_mint):
            raise InvalidPublicKeyError(token_mint, field="mint")

        data = await self._fetch(f"{self.config.market_data_url}/{token_mint}", "market data")
        pairs = data.get("pairs") if isinstance(data, dict) else None
        if not pairs or not isinstance(pairs, list) or not isinstance(pairs[0], dict):
            logger.debug(f"No trading pairs listed for {token_mint}")
            return None

        raw = pairs[0].get("priceUsd")
        if not raw:
            return None
        return _to_price(raw)

    async def get_native_price_usd(self, symbol: Optional[str] = None) -> Optional[float]:
        """Get the USD price of the native asset by symbol.

        Args:
            symbol: Asset symbol; defaults to the configured native symbol

        Returns:
            The price, or None if the field is missing or not a number
        """
        symbol = symbol or self.config.native_symbol
        data = await self._fetch(self.config.price_url, "price", params={"ids": symbol})

        entry = None
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            entry = data["data"].get(symbol)
        price = entry.get("price") if isinstance(entry, dict) else None

        if isinstance(price, bool) or not isinstance(price, (int, float)) or not math.isfinite(price):
            logger.debug(f"No numeric price for {symbol}: {price!r}")
            return None
        return float(price)
