"""Aptos adapter: account resources via the fullnode REST API."""

from typing import Any

from multichain_assets.adapters.base import BaseChainAdapter, RestCall
from multichain_assets.core.normalizer import RecordClassifier, TypeStringClassifier
from multichain_assets.core.registry import AdapterRegistry

COIN_STORE = "0x1::coin::CoinStore"


@AdapterRegistry.register
class AptosAdapter(BaseChainAdapter):
    """
    Adapter for Aptos account resources.

    Balances live in ``0x1::coin::CoinStore<T>`` resources under
    ``data.coin.value``. Other resources are account state, not assets.

    """

    name = "aptos"
    supported_chains = ["aptos"]

    def build_classifier(self) -> RecordClassifier:
        return TypeStringClassifier(
            container=COIN_STORE,
            native_identity=self.config.native.identity,
            content_key="data",
            balance_paths=(("coin", "value"),),
        )

    def build_request(self, address: str) -> RestCall:
        return RestCall(path=f"/accounts/{address}/resources")

    def extract_records(self, body: Any) -> list[Any]:
        if not isinstance(body, list):
            raise self.invalid_response("expected a list of resources")
        return body
