"""Validation utilities for SwampDoge Sync.

Addresses are only checked syntactically; nothing here touches the chain.
"""

import re
from typing import Optional

from swampdoge_sync.utils.errors import ValidationError

# Solana public key validation pattern (base58 alphabet, 32-44 chars)
PUBKEY_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


class InvalidPublicKeyError(ValidationError):
    """Exception raised when an invalid public key is provided."""

    def __init__(self, pubkey: Optional[str], field: str = "address"):
        super().__init__(f"Invalid public key: {pubkey}", field=field)
        self.pubkey = pubkey


def normalize_address(address: Optional[str]) -> str:
    """Strip surrounding whitespace from a user-supplied address."""
    return (address or "").strip()


def validate_public_key(pubkey: Optional[str]) -> bool:
    """Validate a Solana public key.

    Args:
        pubkey: The public key to validate

    Returns:
        True if the public key is valid, False otherwise
    """
    if not pubkey or not isinstance(pubkey, str):
        return False
    return bool(PUBKEY_PATTERN.match(normalize_address(pubkey)))


def validate_solana_address(address: Optional[str], field_name: str = "address") -> str:
    """Validate a Solana address and return its normalized form.

    Args:
        address: The address to validate
        field_name: Name of the field for the error message

    Returns:
        The stripped address

    Raises:
        InvalidPublicKeyError: If the address is invalid
    """
    if not validate_public_key(address):
        raise InvalidPublicKeyError(address, field=field_name)
    return normalize_address(address)
