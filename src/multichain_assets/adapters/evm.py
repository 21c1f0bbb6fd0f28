"""EVM adapter: native balance via ``eth_getBalance``."""

from typing import Any

from multichain_assets.adapters.base import BaseChainAdapter, JsonRpcCall
from multichain_assets.core.normalizer import NativeBalanceClassifier, RecordClassifier
from multichain_assets.core.registry import AdapterRegistry


@AdapterRegistry.register
class EvmAdapter(BaseChainAdapter):
    """
    Adapter for EVM chains.

    A single ``eth_getBalance`` call covers the native asset only; ERC-20
    discovery would need an indexer or one call per contract.

    """

    name = "evm"
    supported_chains = ["ethereum", "base", "arbitrum", "optimism", "polygon"]

    def build_classifier(self) -> RecordClassifier:
        return NativeBalanceClassifier()

    def build_request(self, address: str) -> JsonRpcCall:
        return JsonRpcCall(method="eth_getBalance", params=[address, "latest"])

    def extract_records(self, body: Any) -> list[Any]:
        result = body.get("result")
        if not isinstance(result, str) or not result.startswith("0x"):
            raise self.invalid_response("expected a hex quantity")
        try:
            balance = int(result, 16)
        except ValueError as e:
            raise self.invalid_response(f"bad hex quantity {result!r}") from e
        return [{"balance": balance}]
