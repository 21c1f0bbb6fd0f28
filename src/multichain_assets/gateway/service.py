"""Asset gateway: validation, adapter dispatch, normalization and aggregation."""

import logging
from typing import Any

import httpx

from multichain_assets.adapters import BaseChainAdapter
from multichain_assets.core.aggregator import aggregate_balances
from multichain_assets.core.errors import (
    AssetGatewayError,
    InvalidInputError,
    UpstreamError,
)
from multichain_assets.core.models import AggregationResult, ChainConfig, RPCStyle
from multichain_assets.core.registry import AdapterRegistry
from multichain_assets.data.loader import Settings
from multichain_assets.rpc.client import RPCClient
from multichain_assets.rpc.retry import call_with_retry

logger = logging.getLogger(__name__)


class AssetGateway:
    """
    Entry point for asset queries and raw RPC proxying.

    Validation happens before any outbound call. Upstream failures escalate
    as a whole: a request either returns every balance or an error, never a
    partial result.

    Parameters
    ----------
    settings : Settings
        Process settings (chain registry, timeouts, retry policy)
    client : httpx.AsyncClient
        Shared HTTP client; the caller owns its lifetime

    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient) -> None:
        self.settings = settings
        self.rpc_client = RPCClient(
            client,
            timeout=settings.request_timeout,
            default_retry_after=settings.default_retry_after,
        )

    @property
    def wired_chains(self) -> list[str]:
        """Registered chains that an adapter serves, in registry order."""
        wired = set(AdapterRegistry.wired_chains())
        return [chain for chain in self.settings.registry.list_chains() if chain in wired]

    def resolve_wired_chain(self, chain: str | None) -> ChainConfig:
        """
        Resolve a chain parameter that the asset endpoint can serve.

        Raises
        ------
        InvalidInputError
            If the chain is missing, unknown or has no adapter

        """
        chain = (chain or "").strip().lower()
        if not chain or chain not in self.wired_chains:
            msg = "Invalid chain parameter"
            raise InvalidInputError(msg)
        return self.settings.registry.resolve_chain(chain)

    def create_adapter(self, config: ChainConfig) -> BaseChainAdapter:
        """Instantiate the adapter serving a chain."""
        adapter_class = AdapterRegistry.get_adapter_for_chain(config.chain_id)
        if adapter_class is None:
            msg = "Invalid chain parameter"
            raise InvalidInputError(msg)
        return adapter_class(config, self.rpc_client)

    async def handle(self, address: str | None, chain: str | None, include_nfts: bool = False) -> AggregationResult:
        """
        Answer an asset query.

        Parameters
        ----------
        address : str | None
            Owner address in the chain's format
        chain : str | None
            Chain identifier (e.g., 'sui')
        include_nfts : bool
            Whether non-fungible objects are reported

        Returns
        -------
        AggregationResult
            Merged balances, plus NFTs when requested

        Raises
        ------
        InvalidInputError
            If the chain or address is missing or invalid (no network call made)
        RateLimitedError
            If the upstream throttled the request
        UpstreamError
            For any other upstream or protocol failure

        """
        config = self.resolve_wired_chain(chain)

        address = (address or "").strip()
        if not address:
            msg = "Address is required"
            raise InvalidInputError(msg)
        if not config.is_valid_address(address):
            msg = f"Invalid {config.name} address format"
            raise InvalidInputError(msg)

        logger.info("Fetching %s assets for %s (nfts=%s)", config.chain_id, address, include_nfts)

        try:
            adapter = self.create_adapter(config)
            records = await call_with_retry(adapter.fetch_owned_assets, address, config=self.settings.retry)
            balances, nfts = adapter.normalize(records, include_nfts)
        except AssetGatewayError:
            raise
        except Exception as e:
            raise UpstreamError(str(e) or e.__class__.__name__) from e

        result = AggregationResult(
            balances=aggregate_balances(balances),
            nfts=nfts if include_nfts else None,
        )
        logger.info(
            "%s assets for %s: %d records, %d balances, %s nfts",
            config.chain_id,
            address,
            len(records),
            len(result.balances),
            len(nfts) if include_nfts else "no",
        )
        return result

    async def proxy(
        self,
        chain: str,
        endpoint: str | None = None,
        method: str | None = None,
        params: list[Any] | None = None,
    ) -> Any:
        """
        Forward a raw call to a chain's endpoint.

        REST chains take an ``endpoint`` path appended to the base URL;
        JSON-RPC chains take a ``method`` and optional ``params``.

        Parameters
        ----------
        chain : str
            Registered chain identifier (an adapter is not required)
        endpoint : str | None
            Path for REST chains, starting with '/'
        method : str | None
            Method name for JSON-RPC chains
        params : list[Any] | None
            Method parameters for JSON-RPC chains

        Returns
        -------
        Any
            Upstream JSON body, unmodified

        Raises
        ------
        InvalidInputError
            If the chain is unknown or the request does not fit its style
        RateLimitedError
            If the upstream throttled the request
        UpstreamError
            For any other upstream or protocol failure

        """
        config = self.settings.registry.resolve_chain(chain.strip())

        if config.rpc_style is RPCStyle.REST:
            if not isinstance(endpoint, str) or not endpoint:
                msg = "Endpoint is required"
                raise InvalidInputError(msg)
            # upstreams may decode %2e before resolving dot segments
            if not endpoint.startswith("/") or ".." in endpoint or "://" in endpoint or "%2e" in endpoint.lower():
                msg = "Invalid endpoint"
                raise InvalidInputError(msg)
            logger.info("Proxying %s GET %s", config.chain_id, endpoint)
            return await call_with_retry(
                self.rpc_client.get_json,
                f"{config.rpc_url}{endpoint}",
                label=config.name,
                config=self.settings.retry,
            )

        if not isinstance(method, str) or not method.strip():
            msg = "Method is required"
            raise InvalidInputError(msg)
        if params is not None and not isinstance(params, list):
            msg = "Params must be a list"
            raise InvalidInputError(msg)
        logger.info("Proxying %s JSON-RPC %s", config.chain_id, method)
        return await call_with_retry(
            self.rpc_client.jsonrpc_request,
            config.rpc_url,
            method.strip(),
            params or [],
            label=config.name,
            config=self.settings.retry,
        )
