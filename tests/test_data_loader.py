"""Tests for chain configuration loading and settings."""

import pytest

from multichain_assets.core.errors import ChainNotFoundError
from multichain_assets.core.models import RPCStyle
from multichain_assets.data import (
    get_all_supported_chains,
    get_chain_config,
    get_rpc_endpoint,
    load_settings,
)


def test_get_all_supported_chains():
    """Test getting all configured chain names."""
    chains = get_all_supported_chains()

    assert isinstance(chains, list)
    for chain in ["sui", "aptos", "sei", "ethereum", "base", "arbitrum", "optimism", "polygon", "solana"]:
        assert chain in chains


def test_get_chain_config():
    """Test getting a raw chain entry."""
    config = get_chain_config("sui")

    assert config["rpc_style"] == "jsonrpc"
    assert config["native"]["identity"] == "0x2::sui::SUI"
    assert config["native"]["decimals"] == 9

    with pytest.raises(KeyError):
        get_chain_config("dogecoin")


def test_chain_config_structure():
    """Test that every chain entry builds a valid ChainConfig."""
    settings = load_settings(environ={})

    assert settings.registry.list_chains() == get_all_supported_chains()
    for config in settings.registry:
        assert config.rpc_url.startswith("https://")
        assert not config.rpc_url.endswith("/")
        assert config.native.symbol
        assert config.default_token_decimals >= 0


def test_get_rpc_endpoint_default_and_override():
    """Test that the chain's environment variable wins over the public default."""
    assert get_rpc_endpoint("aptos", environ={}) == "https://fullnode.mainnet.aptoslabs.com/v1"
    assert get_rpc_endpoint("aptos", environ={"APTOS_RPC_URL": "https://aptos.internal/v1/"}) == (
        "https://aptos.internal/v1"
    )
    assert get_rpc_endpoint("aptos", environ={"APTOS_RPC_URL": "   "}) == "https://fullnode.mainnet.aptoslabs.com/v1"


def test_load_settings_applies_environment():
    """Test numeric settings and RPC overrides read at startup."""
    settings = load_settings(
        environ={
            "SUI_RPC_URL": "https://sui.internal",
            "ETH_RPC_URL": "https://eth.internal",
            "MULTICHAIN_ASSETS_TIMEOUT": "2.5",
            "MULTICHAIN_ASSETS_RETRY_AFTER": "7",
            "MULTICHAIN_ASSETS_MAX_RETRIES": "3",
        }
    )

    assert settings.registry.resolve_chain("sui").rpc_url == "https://sui.internal"
    assert settings.registry.resolve_chain("ethereum").rpc_url == "https://eth.internal"
    assert settings.registry.resolve_chain("base").rpc_url == "https://mainnet.base.org"
    assert settings.request_timeout == 2.5
    assert settings.default_retry_after == 7.0
    assert settings.retry.max_retries == 3


def test_load_settings_defaults():
    """Test defaults when the environment is empty."""
    settings = load_settings(environ={})

    assert settings.request_timeout == 10.0
    assert settings.default_retry_after == 2.0
    assert settings.retry.max_retries == 0


@pytest.mark.parametrize(
    "environ",
    [
        {"MULTICHAIN_ASSETS_TIMEOUT": "soon"},
        {"MULTICHAIN_ASSETS_RETRY_AFTER": "-1"},
        {"MULTICHAIN_ASSETS_MAX_RETRIES": "1.5"},
    ],
)
def test_load_settings_rejects_bad_numbers(environ):
    """Test that malformed numeric variables fail at startup."""
    with pytest.raises(ValueError):
        load_settings(environ=environ)


def test_registry_lookup():
    """Test case-insensitive lookup and fail-closed behavior."""
    registry = load_settings(environ={}).registry

    assert registry.resolve_chain("SUI").chain_id == "sui"
    assert registry.resolve_chain("aptos").rpc_style is RPCStyle.REST
    assert "Sei" in registry
    assert "dogecoin" not in registry
    assert registry.list_chains()[0] == "sui"

    with pytest.raises(ChainNotFoundError, match="Unsupported chain: dogecoin"):
        registry.resolve_chain("dogecoin")
