"""
SwampDoge Sync engine.

The engine is the facade the presentation layer talks to. It wires the
clients, services, refresher and scheduler together, exposes the published
snapshot read-only, and implements the user commands including the wallet
attach/detach state machine.
"""

from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from swampdoge_sync.clients.market_client import MarketClient
from swampdoge_sync.clients.solana_client import SolanaClient
from swampdoge_sync.config import SyncConfig, get_sync_config
from swampdoge_sync.constants import POLL_INTERVAL_MS
from swampdoge_sync.links import LinkOpener, LinkTarget, build_url
from swampdoge_sync.logging_config import get_logger
from swampdoge_sync.models.history import HistoryBuffer
from swampdoge_sync.models.picks import PicksSubmission
from swampdoge_sync.models.snapshot import Snapshot
from swampdoge_sync.notifications import Notifier, NoticeKind
from swampdoge_sync.scheduler import Scheduler
from swampdoge_sync.services.account_service import AccountService
from swampdoge_sync.services.market_service import MarketService
from swampdoge_sync.services.refresh_service import AggregateRefresher
from swampdoge_sync.services.token_service import TokenService
from swampdoge_sync.utils.cooldown import CooldownGate
from swampdoge_sync.utils.validation import (
    InvalidPublicKeyError,
    validate_public_key,
    validate_solana_address,
)

logger = get_logger(__name__)


class SyncEngine:
    """Snapshot publisher plus command surface for the presentation layer."""

    def __init__(
        self,
        config: Optional[SyncConfig] = None,
        solana_client: Optional[SolanaClient] = None,
        market_client: Optional[MarketClient] = None,
        notifier: Optional[Notifier] = None,
        link_opener: Optional[LinkOpener] = None,
        cooldown_gate: Optional[CooldownGate] = None,
        poll_interval_ms: float = POLL_INTERVAL_MS
    ):
        """
        Initialize the engine.

        Args:
            config: Endpoints and mint; defaults to environment-based config
            solana_client: Chain client
            market_client: Market-data/price client
            notifier: Sink for user-visible notices
            link_opener: Browser collaborator for deep links
            cooldown_gate: Cooldown gate for user-initiated refreshes
            poll_interval_ms: Auto-refresh interval
        """
        self.config = config or get_sync_config()
        self.solana_client = solana_client or SolanaClient(self.config)
        self.market_client = market_client or MarketClient(self.config)
        self.notifier = notifier or Notifier()
        self.links = link_opener or LinkOpener()

        mint = self.config.token_mint
        self.refresher = AggregateRefresher(
            market_service=MarketService(self.market_client, mint),
            account_service=AccountService(self.solana_client, mint),
            token_service=TokenService(self.solana_client, mint),
            notifier=self.notifier,
            cooldown_gate=cooldown_gate,
        )
        self.scheduler = Scheduler(self.refresher, interval_ms=poll_interval_ms)

    # Published state

    @property
    def snapshot(self) -> Snapshot:
        return self.refresher.snapshot

    @property
    def history(self) -> HistoryBuffer:
        return self.refresher.history

    @property
    def connected(self) -> bool:
        return self.snapshot.connected

    def subscribe(self, callback: Callable[[Snapshot], None]) -> Callable[[], None]:
        return self.refresher.subscribe(callback)

    # Lifecycle

    async def start(self) -> None:
        self.scheduler.start()

    async def stop(self) -> None:
        await self.scheduler.stop()
        await self.solana_client.close()
        await self.market_client.close()

    async def __aenter__(self) -> "SyncEngine":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    def _on_wallet_change(self) -> None:
        if self.scheduler.running:
            self.scheduler.restart()

    # Commands

    async def connect_wallet(self, address: str) -> bool:
        """
        Attach a wallet.

        An address that fails the syntactic check leaves the engine detached
        and raises a validation notice without any network activity.

        Returns:
            True if the wallet is now attached
        """
        try:
            wallet = validate_solana_address(address, field_name="wallet")
        except InvalidPublicKeyError:
            self.notifier.notify(
                NoticeKind.VALIDATION,
                "Invalid wallet",
                "Paste a valid Solana wallet address.",
                details={"field": "wallet"}
            )
            return False

        self.refresher.attach_wallet(wallet)
        self._on_wallet_change()
        await self.refresher.refresh_balances()
        return True

    def disconnect_wallet(self) -> None:
        """Detach the wallet; balances go back to unknown."""
        if not self.connected:
            return
        self.refresher.detach_wallet()
        self._on_wallet_change()

    async def refresh_prices(self, force: bool = False) -> bool:
        return await self.refresher.refresh_prices(force=force)

    async def refresh_balances(self) -> bool:
        return await self.refresher.refresh_balances()

    async def refresh_holders(self) -> bool:
        return await self.refresher.refresh_holders()

    async def refresh_all(self) -> None:
        await self.refresher.refresh_all()

    def submit_picks(self, payload: Mapping[str, Any]) -> Optional[PicksSubmission]:
        """
        Validate a picks form and confirm it with a notice.

        Args:
            payload: Mapping with ``name``, ``wallet`` and ``picks`` (list of up to four)

        Returns:
            The accepted submission, or None if validation failed
        """
        name = payload.get("name")
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            self.notifier.notify(
                NoticeKind.VALIDATION, "Missing name", "Enter your name.",
                details={"field": "name"}
            )
            return None

        wallet = payload.get("wallet")
        if not isinstance(wallet, str) or not validate_public_key(wallet):
            self.notifier.notify(
                NoticeKind.VALIDATION, "Wallet needed",
                "Paste a valid Solana wallet for prize payout.",
                details={"field": "wallet"}
            )
            return None

        picks = payload.get("picks") or []
        try:
            submission = PicksSubmission(name=name, wallet=wallet, picks=picks)
        except PydanticValidationError as e:
            self.notifier.notify(
                NoticeKind.VALIDATION, "Invalid picks", "Each pick must be text.",
                details={"field": "picks", "errors": e.errors(include_url=False)}
            )
            return None

        self.notifier.notify(NoticeKind.INFO, "Picks submitted", submission.summary())
        return submission

    def open_link(self, target: LinkTarget, address: Optional[str] = None) -> str:
        """Open a deep link for the tracked mint, or for ``address`` on the explorer."""
        url = build_url(target, mint=self.config.token_mint, address=address)
        self.links.open(url)
        return url
