"""Request gateway and its HTTP surface."""

from multichain_assets.gateway.api import create_app
from multichain_assets.gateway.service import AssetGateway

__all__ = [
    "AssetGateway",
    "create_app",
]
