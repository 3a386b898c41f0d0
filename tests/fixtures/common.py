"""Common test fixtures for SwampDoge Sync tests.

This module provides fixtures that can be reused across different test modules.
"""

import pytest
from unittest.mock import AsyncMock

from swampdoge_sync.clients.market_client import MarketClient
from swampdoge_sync.clients.solana_client import SolanaClient
from swampdoge_sync.config import SyncConfig
from swampdoge_sync.notifications import Notifier
from swampdoge_sync.services.account_service import AccountService
from swampdoge_sync.services.market_service import MarketService
from swampdoge_sync.services.refresh_service import AggregateRefresher
from swampdoge_sync.services.token_service import TokenService
from swampdoge_sync.utils.cooldown import CooldownGate

WALLET = "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin"


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def sync_config():
    """Default configuration, independent of the environment."""
    return SyncConfig()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def cooldown_gate(fake_clock):
    return CooldownGate(clock=fake_clock)


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def mock_solana_client():
    """Create a mock chain client."""
    client = AsyncMock(spec=SolanaClient)

    # Common mock responses
    client.get_balance.return_value = 1.5
    client.get_token_balance.return_value = 1000.0
    client.get_token_largest_accounts.return_value = []
    return client


@pytest.fixture
def mock_market_client():
    """Create a mock market client."""
    client = AsyncMock(spec=MarketClient)
    client.get_token_price_usd.return_value = 0.002
    client.get_native_price_usd.return_value = 150.0
    return client


@pytest.fixture
def mock_market_service():
    service = AsyncMock(spec=MarketService)
    service.get_token_price.return_value = 0.002
    service.get_native_price.return_value = 150.0
    return service


@pytest.fixture
def mock_account_service():
    service = AsyncMock(spec=AccountService)
    service.get_native_balance.return_value = 2.0
    service.get_token_balance.return_value = 5000.0
    return service


@pytest.fixture
def mock_token_service():
    service = AsyncMock(spec=TokenService)
    service.get_top_holders.return_value = []
    return service


@pytest.fixture
def refresher(mock_market_service, mock_account_service, mock_token_service, notifier, cooldown_gate):
    """Refresher wired to mock services and a controllable cooldown clock."""
    return AggregateRefresher(
        market_service=mock_market_service,
        account_service=mock_account_service,
        token_service=mock_token_service,
        notifier=notifier,
        cooldown_gate=cooldown_gate,
    )


@pytest.fixture
def sample_largest_accounts():
    """getTokenLargestAccounts value items, in rank order."""
    return [
        {
            "address": f"Acct{i}111111111111111111111111111111111"[:44],
            "amount": str(1_000_000 * (20 - i)),
            "decimals": 6,
            "uiAmount": float(20 - i),
            "uiAmountString": str(20 - i),
        }
        for i in range(1, 21)
    ]
