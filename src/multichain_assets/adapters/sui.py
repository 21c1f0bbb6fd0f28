"""Sui adapter: owned objects via ``suix_getOwnedObjects``."""

import logging
from typing import Any

from multichain_assets.adapters.base import BaseChainAdapter, JsonRpcCall
from multichain_assets.core.normalizer import RecordClassifier, TypeStringClassifier
from multichain_assets.core.registry import AdapterRegistry

logger = logging.getLogger(__name__)

COIN_CONTAINER = "0x2::coin::Coin"


@AdapterRegistry.register
class SuiAdapter(BaseChainAdapter):
    """
    Adapter for Sui owned objects.

    Coins are objects typed ``0x2::coin::Coin<T>``; an address usually holds
    several coin objects of the same ``T``, which the aggregator merges.
    Every other object is reported as an NFT when requested.

    """

    name = "sui"
    supported_chains = ["sui"]

    def build_classifier(self) -> RecordClassifier:
        return TypeStringClassifier(
            container=COIN_CONTAINER,
            native_identity=self.config.native.identity,
            content_key="content",
            # moveObject content nests fields; older nodes flatten them
            balance_paths=(("fields", "balance"), ("balance",)),
            id_key="objectId",
        )

    def build_request(self, address: str) -> JsonRpcCall:
        return JsonRpcCall(
            method="suix_getOwnedObjects",
            params=[
                address,
                {
                    "options": {
                        "showType": True,
                        "showContent": True,
                        "showOwner": True,
                    },
                },
            ],
        )

    def extract_records(self, body: Any) -> list[Any]:
        result = body.get("result")
        if not isinstance(result, dict) or not isinstance(result.get("data"), list):
            raise self.invalid_response("missing result.data")

        if result.get("hasNextPage"):
            logger.warning(
                "Sui owned objects truncated to first page (%d objects, next cursor %s)",
                len(result["data"]),
                result.get("nextCursor"),
            )

        # Entries are {"data": {...}} or {"error": {...}} for deleted objects
        return [entry.get("data") for entry in result["data"] if isinstance(entry, dict)]
