"""Account service for SwampDoge Sync.

Unlike prices, balance failures are raised so the caller can surface them.
"""

from swampdoge_sync.clients.solana_client import SolanaClient
from swampdoge_sync.constants import FETCH_TIMEOUT_MS
from swampdoge_sync.services.base_service import BaseService, handle_errors


class AccountService(BaseService):
    """Service for wallet balances."""

    def __init__(self, solana_client: SolanaClient, token_mint: str, timeout_ms: float = FETCH_TIMEOUT_MS):
        """Initialize the account service.

        Args:
            solana_client: The chain client to use
            token_mint: Mint whose balance is tracked
            timeout_ms: Per-fetch timeout
        """
        super().__init__(timeout_ms=timeout_ms)
        self.client = solana_client
        self.token_mint = token_mint

    @handle_errors()
    async def get_native_balance(self, address: str) -> float:
        """Native balance of ``address`` in display units.

        Raises:
            RpcError: On any failure, including timeout
        """
        return await self.with_timeout(
            self.client.get_balance(address),
            operation_name="native balance"
        )

    @handle_errors()
    async def get_token_balance(self, address: str) -> float:
        """Token balance of ``address`` summed across all its token accounts.

        Raises:
            RpcError: On any failure, including timeout
        """
        return await self.with_timeout(
            self.client.get_token_balance(address, self.token_mint),
            operation_name="token balance"
        )
