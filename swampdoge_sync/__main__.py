"""Command-line entry point for SwampDoge Sync."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from swampdoge_sync import __version__, create_engine
from swampdoge_sync.config import get_sync_config
from swampdoge_sync.constants import NATIVE_SYMBOL, TOKEN_SYMBOL
from swampdoge_sync.engine import SyncEngine
from swampdoge_sync.formatting import format_amount, format_usd, short_address
from swampdoge_sync.logging_config import configure_logging
from swampdoge_sync.models.snapshot import Snapshot
from swampdoge_sync.notifications import Notice
from swampdoge_sync.utils.errors import ConfigurationError

logger = logging.getLogger("swampdoge_sync.cli")


def render_snapshot(snapshot: Snapshot) -> str:
    """One-line dashboard for a snapshot."""
    parts = [
        f"{TOKEN_SYMBOL} {format_usd(snapshot.token_price_usd, 8)}",
        f"{NATIVE_SYMBOL} {format_usd(snapshot.native_price_usd)}",
        snapshot.health.value,
    ]
    if snapshot.connected:
        parts.append(
            f"wallet {short_address(snapshot.wallet)}: "
            f"{format_amount(snapshot.native_balance)} {NATIVE_SYMBOL}, "
            f"{format_amount(snapshot.token_balance, 2)} {TOKEN_SYMBOL}, "
            f"{format_usd(snapshot.portfolio_usd)}"
        )
    if snapshot.holders:
        parts.append(f"{len(snapshot.holders)} holders")
    return " | ".join(parts)


def render_notice(notice: Notice) -> str:
    return f"[{notice.kind.value}] {notice.title}: {notice.message}"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="swampdoge-sync",
        description="Keep SwampDoge prices, balances and holders in sync."
    )
    parser.add_argument("--wallet", help="Solana wallet address to track")
    parser.add_argument("--holders", action="store_true", help="Also fetch the top holders")
    parser.add_argument("--once", action="store_true", help="Refresh once and exit")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


async def run(engine: SyncEngine, args: argparse.Namespace) -> None:
    engine.subscribe(lambda snapshot: print(render_snapshot(snapshot), flush=True))

    def show_notice(notice: Notice) -> None:
        print(render_notice(notice), file=sys.stderr, flush=True)
        engine.notifier.dismiss(notice.id)

    engine.notifier.subscribe(show_notice)

    if args.once:
        try:
            if args.wallet:
                await engine.connect_wallet(args.wallet)
            await engine.refresh_all()
            if args.holders:
                await engine.refresh_holders()
        finally:
            await engine.stop()
        return

    async with engine:
        if args.wallet:
            await engine.connect_wallet(args.wallet)
        if args.holders:
            await engine.refresh_holders()
        # Runs until cancelled
        await asyncio.Event().wait()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the console dashboard."""
    args = parse_args(argv)
    try:
        config = get_sync_config()
    except ConfigurationError as e:
        configure_logging("ERROR")
        logger.error(f"Invalid configuration: {e.message}")
        return 2

    configure_logging(args.log_level or config.log_level)
    engine = create_engine(config, configure_logs=False)
    try:
        asyncio.run(run(engine, args))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
