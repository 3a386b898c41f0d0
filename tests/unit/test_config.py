"""Unit tests for configuration."""

import pytest

from swampdoge_sync.config import (
    SyncConfig,
    commitment_validator,
    get_sync_config,
    url_validator,
)
from swampdoge_sync.constants import DEFAULT_RPC_URL, SWAMP_MINT
from swampdoge_sync.utils.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clear_config_cache():
    get_sync_config.cache_clear()
    yield
    get_sync_config.cache_clear()


def test_defaults(monkeypatch):
    for key in ("SWAMP_RPC_URL", "SWAMP_MARKET_DATA_URL", "SWAMP_PRICE_URL",
                "SWAMP_TOKEN_MINT", "SWAMP_COMMITMENT", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    config = get_sync_config()

    assert config.rpc_url == DEFAULT_RPC_URL
    assert config.token_mint == SWAMP_MINT
    assert config.native_symbol == "SOL"
    assert config.commitment == "confirmed"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SWAMP_RPC_URL", "http://localhost:8899/")
    monkeypatch.setenv("SWAMP_COMMITMENT", "Finalized")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = get_sync_config()

    assert config.rpc_url == "http://localhost:8899"
    assert config.commitment == "finalized"
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("key,value", [
    ("SWAMP_RPC_URL", "not a url"),
    ("SWAMP_TOKEN_MINT", "abc"),
    ("SWAMP_COMMITMENT", "instant"),
])
def test_invalid_environment(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigurationError):
        get_sync_config()


def test_validate_rejects_bad_mint():
    with pytest.raises(ConfigurationError) as exc_info:
        SyncConfig(token_mint="abc").validate()
    assert exc_info.value.details["setting"] == "token_mint"


def test_validators():
    assert url_validator("https://api.example.com/v1/") == "https://api.example.com/v1"
    with pytest.raises(ValueError):
        commitment_validator("soon")
