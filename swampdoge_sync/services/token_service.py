"""Token service for SwampDoge Sync."""

from typing import List

from swampdoge_sync.clients.solana_client import SolanaClient
from swampdoge_sync.constants import FETCH_TIMEOUT_MS, HOLDER_LIMIT
from swampdoge_sync.models.holder import HolderEntry
from swampdoge_sync.services.base_service import BaseService, handle_errors
from swampdoge_sync.utils.errors import DataParsingError


class TokenService(BaseService):
    """Service for the tracked token's holder list."""

    def __init__(self, solana_client: SolanaClient, token_mint: str, timeout_ms: float = FETCH_TIMEOUT_MS):
        """Initialize the token service.

        Args:
            solana_client: The chain client to use
            token_mint: Mint whose holders are listed
            timeout_ms: Per-fetch timeout
        """
        super().__init__(timeout_ms=timeout_ms)
        self.client = solana_client
        self.token_mint = token_mint

    @handle_errors()
    async def get_top_holders(self, limit: int = HOLDER_LIMIT) -> List[HolderEntry]:
        """Largest holder accounts in source rank order, truncated to ``limit``.

        Raises:
            RpcError: On any failure, including timeout
            DataParsingError: If an entry has no address
        """
        accounts = await self.with_timeout(
            self.client.get_token_largest_accounts(self.token_mint),
            operation_name="top holders"
        )

        holders = []
        for rank, entry in enumerate(accounts[:limit], start=1):
            if not isinstance(entry, dict) or not entry.get("address"):
                raise DataParsingError(
                    f"Holder entry #{rank} has no address",
                    data_type="holder",
                    details={"entry": entry}
                )
            holders.append(HolderEntry.from_rpc(rank, entry))

        self.logger.debug(f"Loaded {len(holders)} holders for {self.token_mint}")
        return holders
