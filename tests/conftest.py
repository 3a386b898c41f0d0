"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    sync_config,
    fake_clock,
    cooldown_gate,
    notifier,
    mock_solana_client,
    mock_market_client,
    mock_market_service,
    mock_account_service,
    mock_token_service,
    refresher,
    sample_largest_accounts,
)
