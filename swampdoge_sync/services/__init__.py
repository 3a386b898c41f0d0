"""Services for SwampDoge Sync."""

from swampdoge_sync.services.account_service import AccountService
from swampdoge_sync.services.base_service import BaseService, handle_errors
from swampdoge_sync.services.market_service import MarketService
from swampdoge_sync.services.refresh_service import AggregateRefresher
from swampdoge_sync.services.token_service import TokenService

__all__ = [
    "AccountService",
    "AggregateRefresher",
    "BaseService",
    "MarketService",
    "TokenService",
    "handle_errors",
]
