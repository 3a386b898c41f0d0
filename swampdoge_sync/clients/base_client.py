"""Base HTTP client for SwampDoge Sync.

This module owns the shared httpx.AsyncClient lifecycle used by the chain and
market clients.
"""

# Standard library imports
from typing import Any, Dict, Optional

# Third-party library imports
import httpx

# Internal imports
from swampdoge_sync.config import SyncConfig, get_sync_config
from swampdoge_sync.constants import FETCH_TIMEOUT_MS, USER_AGENT
from swampdoge_sync.logging_config import get_logger
from swampdoge_sync.utils.errors import RpcError

# Get logger
logger = get_logger(__name__)


class SolanaRpcError(RpcError):
    """Exception raised when the chain endpoint returns a JSON-RPC error."""

    def __init__(self, message: str, error_data: Optional[Dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Error message
            error_data: Optional error object from the RPC response
        """
        super().__init__(message, rpc_error=error_data)
        self.error_data = error_data or {}


class BaseClient:
    """Base client holding a lazily created httpx.AsyncClient."""

    def __init__(
        self,
        config: Optional[SyncConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the client.

        Args:
            config: Sync configuration. Defaults to environment-based config.
            http_client: Optional pre-built httpx client (e.g. with a mock transport)
        """
        self.config = config or get_sync_config()
        self.headers = {"Content-Type": "application/json", "User-Agent": USER_AGENT}
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=FETCH_TIMEOUT_MS / 1000,
                headers=self.headers,
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10)
            )
            self._owns_client = True
        return self._http_client

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``url`` and decode the JSON body.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            httpx.RequestError: On transport failure
            ValueError: If the body is not JSON
        """
        response = await self.http_client.get(url, params=params, headers=self.headers)
        response.raise_for_status()
        return response.json()

    async def __aenter__(self):
        """Async context manager entry.

        Returns:
            Self
        """
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self):
        """Close the client and release resources."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
        self._http_client = None
