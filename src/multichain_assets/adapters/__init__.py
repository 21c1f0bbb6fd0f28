"""Chain adapters for the supported networks."""

# Import all adapters to trigger auto-registration
from multichain_assets.adapters.aptos import AptosAdapter
from multichain_assets.adapters.base import BaseChainAdapter, ChainRequest, JsonRpcCall, RestCall
from multichain_assets.adapters.evm import EvmAdapter
from multichain_assets.adapters.sei import SeiAdapter
from multichain_assets.adapters.sui import SuiAdapter

__all__ = [
    "AptosAdapter",
    "BaseChainAdapter",
    "ChainRequest",
    "EvmAdapter",
    "JsonRpcCall",
    "RestCall",
    "SeiAdapter",
    "SuiAdapter",
]
