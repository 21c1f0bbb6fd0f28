"""Core functionality including models, registries, normalizer, and aggregator."""

from multichain_assets.core.aggregator import BalanceAggregator, aggregate_balances
from multichain_assets.core.chains import ChainRegistry
from multichain_assets.core.errors import (
    AssetGatewayError,
    ChainNotFoundError,
    InvalidInputError,
    RateLimitedError,
    UpstreamError,
)
from multichain_assets.core.models import (
    AggregationResult,
    AssetsResponse,
    ChainConfig,
    NftItem,
    RPCStyle,
    TokenBalance,
)
from multichain_assets.core.registry import AdapterRegistry

__all__ = [
    "AdapterRegistry",
    "AggregationResult",
    "AssetGatewayError",
    "AssetsResponse",
    "BalanceAggregator",
    "ChainConfig",
    "ChainNotFoundError",
    "ChainRegistry",
    "InvalidInputError",
    "NftItem",
    "RPCStyle",
    "RateLimitedError",
    "TokenBalance",
    "UpstreamError",
    "aggregate_balances",
]
