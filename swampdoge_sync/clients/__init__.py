"""HTTP clients for the chain, market-data and price endpoints."""

from swampdoge_sync.clients.base_client import BaseClient, SolanaRpcError
from swampdoge_sync.clients.market_client import MarketClient
from swampdoge_sync.clients.solana_client import SolanaClient

__all__ = ["BaseClient", "MarketClient", "SolanaClient", "SolanaRpcError"]
