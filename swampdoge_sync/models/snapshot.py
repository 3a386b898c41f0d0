"""
Published engine state.

A Snapshot is immutable. The refresher publishes a fresh instance for every
mutation, so readers never observe a half-applied refresh.
"""

from datetime import datetime
from enum import Enum
from typing import Any, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from swampdoge_sync.models.holder import HolderEntry


class DataHealth(str, Enum):
    """Aggregate health of the price sources."""

    OK = "OK"
    OFFLINE = "OFFLINE"


class Prices(NamedTuple):
    token_usd: Optional[float]
    native_usd: Optional[float]


class Balances(NamedTuple):
    native: Optional[float]
    token: Optional[float]


def compute_valuation(prices: Prices, balances: Balances) -> Optional[float]:
    """
    Portfolio value in USD.

    Args:
        prices: Current token and native prices
        balances: Current native and token balances

    Returns:
        None unless both the native price and native balance are known;
        otherwise native value plus token value (token value counts as zero
        when either token input is unknown)
    """
    if prices.native_usd is None or balances.native is None:
        return None
    native_value = balances.native * prices.native_usd
    if prices.token_usd is None or balances.token is None:
        return native_value
    return native_value + balances.token * prices.token_usd


class Snapshot(BaseModel):
    """Read-only view of everything the engine knows."""

    model_config = ConfigDict(frozen=True)

    token_price_usd: Optional[float] = Field(None, description="Token price; None until first success")
    native_price_usd: Optional[float] = Field(None, description="Native asset price; None until first success")
    native_balance: Optional[float] = Field(None, description="Wallet native balance in display units")
    token_balance: Optional[float] = Field(None, description="Wallet token balance summed over accounts")
    wallet: Optional[str] = Field(None, description="Attached wallet address")
    health: DataHealth = Field(DataHealth.OK, description="OFFLINE when every price source failed")
    last_updated: Optional[datetime] = Field(None, description="UTC time of the last completed refresh")
    holders: Tuple[HolderEntry, ...] = Field(default_factory=tuple)
    price_history: Tuple[float, ...] = Field(default_factory=tuple)
    loading_prices: bool = False
    loading_balances: bool = False
    loading_holders: bool = False
    portfolio_usd: Optional[float] = Field(None, description="Derived; see compute_valuation")

    @property
    def connected(self) -> bool:
        return self.wallet is not None

    @property
    def prices(self) -> Prices:
        return Prices(token_usd=self.token_price_usd, native_usd=self.native_price_usd)

    @property
    def balances(self) -> Balances:
        return Balances(native=self.native_balance, token=self.token_balance)

    def with_changes(self, **changes: Any) -> "Snapshot":
        """Return a new snapshot with ``changes`` applied and valuation recomputed."""
        updated = self.model_copy(update=changes)
        return updated.model_copy(
            update={"portfolio_usd": compute_valuation(updated.prices, updated.balances)}
        )
