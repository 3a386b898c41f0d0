"""Tests for the market-data and price client."""

from typing import Any, Callable

import httpx
import pytest

from swampdoge_sync.clients.market_client import MarketClient
from swampdoge_sync.config import SyncConfig
from swampdoge_sync.constants import DEFAULT_MARKET_DATA_URL, DEFAULT_PRICE_URL, SWAMP_MINT
from swampdoge_sync.services.market_service import MarketService
from swampdoge_sync.utils.errors import DataParsingError, ExternalServiceError


def make_client(handler: Callable[[httpx.Request], Any]) -> MarketClient:
    def respond(request: httpx.Request) -> httpx.Response:
        result = handler(request)
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json=result)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(respond))
    return MarketClient(SyncConfig(), http_client=http_client)


class TestTokenPrice:
    """Test suite for the token price lookup."""

    @pytest.mark.asyncio
    async def test_reads_first_pair(self):
        # Setup
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return {"pairs": [{"priceUsd": "0.00123"}, {"priceUsd": "0.5"}]}

        client = make_client(handler)

        # Execute
        price = await client.get_token_price_usd(SWAMP_MINT)

        # Verify
        assert price == 0.00123
        assert seen == [f"{DEFAULT_MARKET_DATA_URL}/{SWAMP_MINT}"]
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"pairs": []},
        {"pairs": None},
        {"pairs": [{}]},
        {"pairs": [{"priceUsd": ""}]},
        {},
    ])
    async def test_missing_price(self, payload):
        client = make_client(lambda request: payload)
        assert await client.get_token_price_usd(SWAMP_MINT) is None
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["abc", "NaN", "inf"])
    async def test_malformed_price(self, raw):
        client = make_client(lambda request: {"pairs": [{"priceUsd": raw}]})
        with pytest.raises(DataParsingError):
            await client.get_token_price_usd(SWAMP_MINT)
        await client.close()

    @pytest.mark.asyncio
    async def test_bad_status(self):
        client = make_client(lambda request: httpx.Response(503))

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.get_token_price_usd(SWAMP_MINT)

        assert exc_info.value.details["service_name"] == "market data"
        await client.close()

    @pytest.mark.asyncio
    async def test_not_json(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ExternalServiceError):
            await client.get_token_price_usd(SWAMP_MINT)
        await client.close()


class TestNativePrice:
    """Test suite for the native asset price lookup."""

    @pytest.mark.asyncio
    async def test_reads_symbol_entry(self):
        # Setup
        seen = []

        def handler(request):
            seen.append(request.url)
            return {"data": {"SOL": {"id": "SOL", "price": 148.25}}}

        client = make_client(handler)

        # Execute
        price = await client.get_native_price_usd()

        # Verify
        assert price == 148.25
        assert str(seen[0]).startswith(DEFAULT_PRICE_URL)
        assert seen[0].params["ids"] == "SOL"
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"data": {"SOL": {"price": "148.25"}}},
        {"data": {"SOL": {}}},
        {"data": {}},
        {"data": {"SOL": {"price": True}}},
        [],
    ])
    async def test_non_numeric_price(self, payload):
        client = make_client(lambda request: payload)
        assert await client.get_native_price_usd() is None
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["NaN", "Infinity", "-Infinity"])
    async def test_non_finite_price(self, raw):
        """The JSON decoder accepts NaN and Infinity literals; they read as unavailable."""
        # Setup
        body = '{"data": {"SOL": {"price": %s}}}' % raw
        client = make_client(
            lambda request: httpx.Response(200, text=body, headers={"Content-Type": "application/json"})
        )

        # Execute
        price = await client.get_native_price_usd()

        # Verify
        assert price is None
        await client.close()

    @pytest.mark.asyncio
    async def test_non_finite_price_through_service(self):
        # Setup
        body = '{"data": {"SOL": {"price": NaN}}}'
        client = make_client(lambda request: httpx.Response(200, text=body))
        service = MarketService(client, SWAMP_MINT)

        # Execute
        price = await service.get_native_price()

        # Verify
        assert price is None
        await client.close()

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(ExternalServiceError):
            await client.get_native_price_usd()
        await client.close()
