"""Utility modules for SwampDoge Sync."""

from swampdoge_sync.utils.cooldown import CooldownGate, CooldownState, RefreshClass
from swampdoge_sync.utils.errors import (
    ConfigurationError,
    DataParsingError,
    ErrorCode,
    ExternalServiceError,
    RateLimitedError,
    RpcError,
    RpcTimeoutError,
    SwampSyncError,
    ValidationError,
)
from swampdoge_sync.utils.generations import GenerationTracker
from swampdoge_sync.utils.validation import (
    InvalidPublicKeyError,
    validate_public_key,
    validate_solana_address,
)

__all__ = [
    "ConfigurationError",
    "CooldownGate",
    "CooldownState",
    "DataParsingError",
    "ErrorCode",
    "ExternalServiceError",
    "GenerationTracker",
    "InvalidPublicKeyError",
    "RateLimitedError",
    "RefreshClass",
    "RpcError",
    "RpcTimeoutError",
    "SwampSyncError",
    "ValidationError",
    "validate_public_key",
    "validate_solana_address",
]
