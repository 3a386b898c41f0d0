"""Tests for the chain JSON-RPC client."""

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from swampdoge_sync.clients.solana_client import SolanaClient
from swampdoge_sync.clients.base_client import SolanaRpcError
from swampdoge_sync.config import SyncConfig
from swampdoge_sync.constants import SWAMP_MINT
from swampdoge_sync.utils.validation import InvalidPublicKeyError
from tests.fixtures.common import WALLET


def make_client(handler: Callable[[Dict[str, Any]], Any], requests: List[Dict[str, Any]] = None) -> SolanaClient:
    """Client whose transport answers JSON-RPC bodies with ``handler``."""

    def respond(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if requests is not None:
            requests.append(body)
        result = handler(body)
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json=result)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(respond))
    return SolanaClient(SyncConfig(), http_client=http_client)


def token_account(ui_amount: Any) -> Dict[str, Any]:
    return {
        "pubkey": "TokenAcct1111111111111111111111111111111111",
        "account": {"data": {"parsed": {"info": {"tokenAmount": {"uiAmount": ui_amount}}}}},
    }


@pytest.mark.asyncio
async def test_get_balance():
    """Test lamports are converted to SOL."""
    # Setup
    requests = []
    client = make_client(lambda body: {"jsonrpc": "2.0", "id": 1, "result": {"value": 1_500_000_000}}, requests)

    # Execute
    balance = await client.get_balance(WALLET)

    # Verify
    assert balance == 1.5
    assert requests[0]["method"] == "getBalance"
    assert requests[0]["params"] == [WALLET, {"commitment": "confirmed"}]
    await client.close()


@pytest.mark.asyncio
async def test_get_balance_missing_value_is_zero():
    client = make_client(lambda body: {"jsonrpc": "2.0", "id": 1, "result": {}})
    assert await client.get_balance(WALLET) == 0.0
    await client.close()


@pytest.mark.asyncio
async def test_get_balance_rejects_invalid_address():
    client = make_client(lambda body: pytest.fail("no request expected"))
    with pytest.raises(InvalidPublicKeyError):
        await client.get_balance("abc")
    await client.close()


@pytest.mark.asyncio
async def test_rpc_error_payload():
    """Test the error message from the payload is surfaced."""
    client = make_client(
        lambda body: {"jsonrpc": "2.0", "id": 1, "error": {"code": -32005, "message": "Node is behind"}}
    )

    with pytest.raises(SolanaRpcError) as exc_info:
        await client.get_balance(WALLET)

    assert exc_info.value.message == "Node is behind"
    assert exc_info.value.error_data["code"] == -32005
    await client.close()


@pytest.mark.asyncio
async def test_rpc_error_without_message():
    client = make_client(lambda body: {"jsonrpc": "2.0", "id": 1, "error": {"code": -32000}})

    with pytest.raises(SolanaRpcError) as exc_info:
        await client.get_token_largest_accounts(SWAMP_MINT)

    assert exc_info.value.message == "Solana RPC error"
    await client.close()


@pytest.mark.asyncio
async def test_http_error_status():
    client = make_client(lambda body: httpx.Response(429, json={"message": "Too many requests"}))

    with pytest.raises(httpx.HTTPStatusError):
        await client.get_balance(WALLET)
    await client.close()


@pytest.mark.asyncio
async def test_get_token_balance_sums_accounts():
    """Test every token account of the mint counts toward the balance."""
    # Setup
    requests = []
    accounts = [token_account(1.5), token_account(2.25), token_account(0.0), token_account(None), {"account": {}}]
    client = make_client(lambda body: {"jsonrpc": "2.0", "id": 1, "result": {"value": accounts}}, requests)

    # Execute
    balance = await client.get_token_balance(WALLET, SWAMP_MINT)

    # Verify
    assert balance == 3.75
    assert requests[0]["method"] == "getTokenAccountsByOwner"
    assert requests[0]["params"] == [
        WALLET,
        {"mint": SWAMP_MINT},
        {"encoding": "jsonParsed", "commitment": "confirmed"},
    ]
    await client.close()


@pytest.mark.asyncio
async def test_get_token_balance_without_accounts():
    client = make_client(lambda body: {"jsonrpc": "2.0", "id": 1, "result": {"value": []}})
    assert await client.get_token_balance(WALLET, SWAMP_MINT) == 0.0
    await client.close()


@pytest.mark.asyncio
async def test_get_token_largest_accounts(sample_largest_accounts):
    # Setup
    requests = []
    client = make_client(
        lambda body: {"jsonrpc": "2.0", "id": 1, "result": {"value": sample_largest_accounts}}, requests
    )

    # Execute
    accounts = await client.get_token_largest_accounts(SWAMP_MINT)

    # Verify
    assert accounts == sample_largest_accounts
    assert requests[0]["params"] == [SWAMP_MINT]
    await client.close()


@pytest.mark.asyncio
async def test_get_token_largest_accounts_unexpected_shape():
    client = make_client(lambda body: {"jsonrpc": "2.0", "id": 1, "result": None})
    assert await client.get_token_largest_accounts(SWAMP_MINT) == []
    await client.close()


@pytest.mark.asyncio
async def test_close_keeps_injected_client_open():
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    client = SolanaClient(SyncConfig(), http_client=http_client)

    await client.close()

    assert not http_client.is_closed
    await http_client.aclose()


@pytest.mark.asyncio
async def test_context_manager_closes_owned_client():
    async with SolanaClient(SyncConfig()) as client:
        http_client = client.http_client

    assert http_client.is_closed
