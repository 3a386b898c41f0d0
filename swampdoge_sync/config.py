"""Configuration module for SwampDoge Sync."""

# Standard library imports
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Optional

# Third-party library imports
from dotenv import load_dotenv

# Internal imports
from swampdoge_sync.constants import (
    DEFAULT_MARKET_DATA_URL,
    DEFAULT_PRICE_URL,
    DEFAULT_RPC_URL,
    NATIVE_SYMBOL,
    SWAMP_MINT,
)
from swampdoge_sync.utils.errors import ConfigurationError
from swampdoge_sync.utils.validation import validate_public_key

# Load environment variables from .env file
load_dotenv()


def get_env_var(key: str, default: Any = None, required: bool = False,
                validator: Optional[Callable[[str], Any]] = None) -> Any:
    """Get and validate environment variable.

    Args:
        key: Environment variable name
        default: Default value if not present
        required: If True, raises ValueError when not found
        validator: Optional validation function

    Returns:
        The environment variable value or default

    Raises:
        ValueError: If required and not found, or fails validation
    """
    value = os.environ.get(key)

    if value is None:
        if required:
            raise ValueError(f"Required environment variable '{key}' not found")
        return default

    if validator is not None:
        try:
            return validator(value)
        except Exception as e:
            raise ValueError(f"Invalid value for environment variable '{key}': {str(e)}")

    return value


def url_validator(value: str) -> str:
    """Validate URL format.

    Args:
        value: URL to validate

    Returns:
        The validated URL without a trailing slash

    Raises:
        ValueError: If not a valid URL format
    """
    url_pattern = re.compile(
        r'^(https?):\/\/'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+(?:[A-Z]{2,6}\.?|[A-Z0-9-]{2,}\.?)|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IPv4
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)

    if not url_pattern.match(value):
        raise ValueError(f"'{value}' is not a valid URL")
    return value.rstrip("/")


def commitment_validator(value: str) -> str:
    """Validate Solana commitment level."""
    valid_commitments = ("processed", "confirmed", "finalized")
    if value.lower() not in valid_commitments:
        raise ValueError(f"Commitment must be one of: {', '.join(valid_commitments)}")
    return value.lower()


def log_level_validator(value: str) -> str:
    """Validate log level."""
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    upper_value = value.upper()
    if upper_value not in valid_levels:
        raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
    return upper_value


def address_validator(value: str) -> str:
    """Validate a base58 mint or wallet address."""
    value = value.strip()
    if not validate_public_key(value):
        raise ValueError(f"'{value}' is not a valid Solana address")
    return value


@dataclass(frozen=True)
class SyncConfig:
    """Endpoints and identifiers used by the sync engine."""

    rpc_url: str = DEFAULT_RPC_URL
    market_data_url: str = DEFAULT_MARKET_DATA_URL
    price_url: str = DEFAULT_PRICE_URL
    token_mint: str = SWAMP_MINT
    native_symbol: str = NATIVE_SYMBOL
    commitment: str = "confirmed"
    log_level: str = "INFO"

    def validate(self) -> None:
        """Validate settings.

        Raises:
            ConfigurationError: If settings are invalid
        """
        for name in ("rpc_url", "market_data_url", "price_url"):
            if not getattr(self, name):
                raise ConfigurationError(
                    f"{name} is required",
                    details={"setting": name}
                )

        if not validate_public_key(self.token_mint):
            raise ConfigurationError(
                f"Invalid token mint: {self.token_mint}",
                details={"setting": "token_mint", "value": self.token_mint}
            )

        if not self.native_symbol:
            raise ConfigurationError(
                "Native asset symbol is required",
                details={"setting": "native_symbol"}
            )


@lru_cache()
def get_sync_config() -> SyncConfig:
    """Get sync configuration from environment variables.

    Uses cached values for efficiency.

    Returns:
        SyncConfig instance

    Raises:
        ConfigurationError: If environment variables fail validation
    """
    try:
        config = SyncConfig(
            rpc_url=get_env_var("SWAMP_RPC_URL", DEFAULT_RPC_URL, validator=url_validator),
            market_data_url=get_env_var("SWAMP_MARKET_DATA_URL", DEFAULT_MARKET_DATA_URL,
                                        validator=url_validator),
            price_url=get_env_var("SWAMP_PRICE_URL", DEFAULT_PRICE_URL, validator=url_validator),
            token_mint=get_env_var("SWAMP_TOKEN_MINT", SWAMP_MINT, validator=address_validator),
            commitment=get_env_var("SWAMP_COMMITMENT", "confirmed", validator=commitment_validator),
            log_level=get_env_var("LOG_LEVEL", "INFO", validator=log_level_validator)
        )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    config.validate()
    return config
