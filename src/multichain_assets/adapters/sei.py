"""Sei adapter: Cosmos bank balances via the LCD REST API."""

import logging
from typing import Any

from multichain_assets.adapters.base import BaseChainAdapter, RestCall
from multichain_assets.core.normalizer import DenomClassifier, RecordClassifier
from multichain_assets.core.registry import AdapterRegistry

logger = logging.getLogger(__name__)


@AdapterRegistry.register
class SeiAdapter(BaseChainAdapter):
    """
    Adapter for Sei bank balances.

    The bank module already reports one total per denom; IBC and
    token-factory denoms are unverified tokens.

    """

    name = "sei"
    supported_chains = ["sei"]

    def build_classifier(self) -> RecordClassifier:
        return DenomClassifier(native_denom=self.config.native.identity)

    def build_request(self, address: str) -> RestCall:
        return RestCall(path=f"/cosmos/bank/v1beta1/balances/{address}")

    def extract_records(self, body: Any) -> list[Any]:
        if not isinstance(body, dict) or not isinstance(body.get("balances"), list):
            raise self.invalid_response("missing balances")

        next_key = (body.get("pagination") or {}).get("next_key")
        if next_key:
            logger.warning("Sei balances truncated to first page (next key %s)", next_key)

        return body["balances"]
