"""Data loading and configuration management."""

from multichain_assets.data.loader import (
    Settings,
    get_all_supported_chains,
    get_chain_config,
    get_rpc_endpoint,
    load_chains,
    load_settings,
)

__all__ = [
    "Settings",
    "get_all_supported_chains",
    "get_chain_config",
    "get_rpc_endpoint",
    "load_chains",
    "load_settings",
]
