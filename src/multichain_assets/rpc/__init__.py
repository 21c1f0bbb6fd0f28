"""RPC layer with outcome-classifying transport and retry logic."""

from multichain_assets.rpc.client import RPCClient
from multichain_assets.rpc.retry import RetryConfig, call_with_retry

__all__ = [
    "RPCClient",
    "RetryConfig",
    "call_with_retry",
]
