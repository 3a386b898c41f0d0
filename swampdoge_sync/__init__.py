"""SwampDoge Sync Package.

This package keeps live token prices, wallet balances and the top-holder list
fresh in local application state, polling public Solana endpoints without
hammering them.
"""

import logging
from typing import Optional

from swampdoge_sync.config import SyncConfig, get_sync_config
from swampdoge_sync.engine import SyncEngine
from swampdoge_sync.logging_config import configure_logging

__version__ = "0.1.0"
__author__ = "SwampDoge"
__email__ = "dev@swampdoge.app"

logger = logging.getLogger(__name__)


def create_engine(config: Optional[SyncConfig] = None, configure_logs: bool = True) -> SyncEngine:
    """Build a SyncEngine from configuration.

    Args:
        config: Optional explicit configuration; defaults to the environment
        configure_logs: Whether to set up root logging from the config's level

    Returns:
        A SyncEngine that has not been started yet

    Raises:
        ConfigurationError: If the environment configuration is invalid
    """
    config = config or get_sync_config()
    if configure_logs:
        configure_logging(config.log_level)

    logger.info(f"Initializing SwampDoge Sync v{__version__} (rpc={config.rpc_url})")
    return SyncEngine(config)


__all__ = ["SyncConfig", "SyncEngine", "create_engine", "get_sync_config", "__version__"]
