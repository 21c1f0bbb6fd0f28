"""Tests for adapter registry."""

import pytest

from multichain_assets.adapters import AptosAdapter, EvmAdapter, SeiAdapter, SuiAdapter
from multichain_assets.core.registry import AdapterRegistry


def test_adapter_registration():
    """Test that adapters auto-register on import."""
    registered = AdapterRegistry.list_adapters()

    assert "sui" in registered
    assert "aptos" in registered
    assert "sei" in registered
    assert "evm" in registered

    # Should have exactly 4 adapters
    assert len(registered) == 4


def test_get_adapter():
    """Test retrieving adapter by name."""
    assert AdapterRegistry.get_adapter("sui") is SuiAdapter
    assert AdapterRegistry.get_adapter("nonexistent") is None


def test_get_adapter_for_chain():
    """Test resolving the adapter serving a chain."""
    assert AdapterRegistry.get_adapter_for_chain("aptos") is AptosAdapter
    assert AdapterRegistry.get_adapter_for_chain("sei") is SeiAdapter
    for chain in ["ethereum", "base", "arbitrum", "optimism", "polygon"]:
        assert AdapterRegistry.get_adapter_for_chain(chain) is EvmAdapter

    # Registered in chains.yaml but proxy-only
    assert AdapterRegistry.get_adapter_for_chain("solana") is None


def test_wired_chains():
    """Test the set of chains served by the asset endpoint."""
    wired = AdapterRegistry.wired_chains()

    assert set(wired) == {"sui", "aptos", "sei", "ethereum", "base", "arbitrum", "optimism", "polygon"}
    assert "solana" not in wired


def test_register_requires_name(restore_adapters):
    """Test that an adapter without a name is rejected."""

    class Nameless:
        name = ""
        supported_chains = ["sui"]

    with pytest.raises(ValueError, match="must define 'name'"):
        AdapterRegistry.register(Nameless)


def test_register_rejects_chain_conflict(restore_adapters):
    """Test that two adapters cannot serve the same chain."""

    class OtherSui:
        name = "other_sui"
        supported_chains = ["sui"]

    with pytest.raises(ValueError, match="already served by adapter 'sui'"):
        AdapterRegistry.register(OtherSui)


def test_clear(restore_adapters):
    """Test clearing the registry."""
    AdapterRegistry.clear()

    assert AdapterRegistry.list_adapters() == []
    assert AdapterRegistry.wired_chains() == []
