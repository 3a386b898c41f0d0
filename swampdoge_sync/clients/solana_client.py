"""Async JSON-RPC client for the chain endpoint."""

# Standard library imports
import json
from typing import Any, Dict, List, Optional

# Internal imports
from swampdoge_sync.clients.base_client import BaseClient, SolanaRpcError
from swampdoge_sync.constants import LAMPORTS_PER_SOL
from swampdoge_sync.logging_config import get_logger
from swampdoge_sync.utils.validation import InvalidPublicKeyError, validate_public_key

# Get logger
logger = get_logger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class SolanaClient(BaseClient):
    """Client for the handful of chain queries the engine needs."""

    async def _make_request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make a JSON-RPC request to the chain endpoint.

        Single attempt, single endpoint. Retries are left to the polling cadence.

        Args:
            method: The RPC method to call
            params: The parameters to pass to the method

        Returns:
            The ``result`` member of the JSON-RPC response

        Raises:
            SolanaRpcError: If the RPC server returns an error
            httpx.HTTPStatusError: If there's an HTTP error
            httpx.RequestError: If there's a network or request error
        """
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params or []
        }

        log_params = json.dumps(payload["params"])
        if len(log_params) > 200:
            log_params = log_params[:197] + "..."
        logger.debug(f"RPC call: method={method}, params={log_params}")

        response = await self.http_client.post(
            self.config.rpc_url,
            headers=self.headers,
            json=payload
        )
        response.raise_for_status()
        data = response.json()

        if not isinstance(data, dict):
            raise SolanaRpcError(f"Malformed RPC response for {method}")

        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else None
            raise SolanaRpcError(message or "Solana RPC error", error if isinstance(error, dict) else None)

        return data.get("result")

    async def get_balance(self, account: str) -> float:
        """Get the native balance of an account in SOL.

        Args:
            account: The account public key

        Returns:
            Balance in SOL (lamports / 10^9); a missing value reads as zero

        Raises:
            InvalidPublicKeyError: If the account is not a valid Solana public key
        """
        if not validate_public_key(account):
            raise InvalidPublicKeyError(account)

        result = await self._make_request(
            "getBalance",
            [account, {"commitment": self.config.commitment}]
        )
        lamports = result.get("value") if isinstance(result, dict) else None
        if not _is_number(lamports):
            lamports = 0
        return lamports / LAMPORTS_PER_SOL

    async def get_token_accounts_by_owner(self, owner: str, mint: str) -> List[Dict[str, Any]]:
        """Get parsed token accounts held by ``owner`` for ``mint``.

        Args:
            owner: The owner public key
            mint: The token mint

        Returns:
            List of token accounts (jsonParsed encoding)

        Raises:
            InvalidPublicKeyError: If the owner or mint is not a valid Solana public key
        """
        if not validate_public_key(owner):
            raise InvalidPublicKeyError(owner)
        if not validate_public_key(mint):
            raise InvalidPublicKeyError(mint, field="mint")

        result = await self._make_request(
            "getTokenAccountsByOwner",
            [
                owner,
                {"mint": mint},
                {"encoding": "jsonParsed", "commitment": self.config.commitment}
            ]
        )
        accounts = result.get("value") if isinstance(result, dict) else None
        return accounts if isinstance(accounts, list) else []

    async def get_token_balance(self, owner: str, mint: str) -> float:
        """Sum the UI amount of every ``mint`` account held by ``owner``.

        A wallet may hold the same token across several accounts, so all of
        them count. Accounts without a numeric uiAmount are skipped.
        """
        accounts = await self.get_token_accounts_by_owner(owner, mint)
        total = 0.0
        for account in accounts:
            try:
                ui_amount = account["account"]["data"]["parsed"]["info"]["tokenAmount"]["uiAmount"]
            except (KeyError, TypeError):
                continue
            if _is_number(ui_amount):
                total += ui_amount
        return total

    async def get_token_largest_accounts(self, mint: str) -> List[Dict[str, Any]]:
        """Get the largest accounts for a token.

        Args:
            mint: The mint address

        Returns:
            Accounts in source rank order, each shaped
            {address, amount, decimals, uiAmount, uiAmountString}

        Raises:
            InvalidPublicKeyError: If the mint is not a valid Solana public key
        """
        if not validate_public_key(mint):
            raise InvalidPublicKeyError(mint, field="mint")

        result = await self._make_request("getTokenLargestAccounts", [mint])
        value = result.get("value") if isinstance(result, dict) else None
        if isinstance(value, list):
            return value

        logger.warning(f"Unexpected format for getTokenLargestAccounts for {mint}: {result}")
        return []
