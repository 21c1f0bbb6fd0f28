"""Base chain adapter class with common functionality."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from multichain_assets.core.errors import UpstreamError
from multichain_assets.core.models import ChainConfig, NftItem, RPCStyle, TokenBalance
from multichain_assets.core.normalizer import RecordClassifier, normalize
from multichain_assets.rpc.client import RPCClient


@dataclass(frozen=True)
class JsonRpcCall:
    """JSON-RPC request posted to the chain's base URL."""

    method: str
    params: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class RestCall:
    """REST GET of a path suffix under the chain's base URL."""

    path: str


ChainRequest = JsonRpcCall | RestCall


class BaseChainAdapter(ABC):
    """
    Abstract base class for chain adapters.

    An adapter knows one chain family's wire protocol: how to ask for the
    assets owned by an address, how to find the records in the response, and
    how to classify each record. Every ``fetch_owned_assets`` call issues
    exactly one outbound request and never retries.

    Attributes
    ----------
    name : str
        Unique adapter identifier (must be set in subclass)
    supported_chains : list[str]
        Registry chain ids served by the adapter (must be set in subclass)

    Parameters
    ----------
    config : ChainConfig
        Configuration of the chain being queried
    rpc_client : RPCClient
        Transport for the outbound call

    """

    name: ClassVar[str] = ""
    supported_chains: ClassVar[list[str]] = []

    def __init__(self, config: ChainConfig, rpc_client: RPCClient) -> None:
        if not self.name:
            msg = f"{self.__class__.__name__} must define 'name' attribute"
            raise ValueError(msg)
        if config.chain_id not in self.supported_chains:
            msg = f"{self.__class__.__name__} does not support chain {config.chain_id!r}"
            raise ValueError(msg)
        self.config = config
        self.rpc_client = rpc_client
        self.classifier = self.build_classifier()

    @abstractmethod
    def build_classifier(self) -> RecordClassifier:
        """Create the record classifier for this chain."""
        ...

    @abstractmethod
    def build_request(self, address: str) -> ChainRequest:
        """
        Build the request listing the assets owned by an address.

        Parameters
        ----------
        address : str
            Validated chain address

        Returns
        -------
        ChainRequest
            JSON-RPC call or REST path

        """
        ...

    @abstractmethod
    def extract_records(self, body: Any) -> list[Any]:
        """
        Find the raw records in the chain's response body.

        Parameters
        ----------
        body : Any
            Decoded response (the full envelope for JSON-RPC chains)

        Returns
        -------
        list[Any]
            Raw records; malformed entries are left for the normalizer to skip

        Raises
        ------
        UpstreamError
            If the body lacks the expected container

        """
        ...

    async def fetch_owned_assets(self, address: str) -> list[Any]:
        """
        Fetch the raw records owned by an address.

        Parameters
        ----------
        address : str
            Validated chain address

        Returns
        -------
        list[Any]
            Raw records

        """
        body = await self.send(self.build_request(address))
        return self.extract_records(body)

    async def send(self, request: ChainRequest) -> Any:
        """
        Issue one request against the chain endpoint.

        Parameters
        ----------
        request : ChainRequest
            JSON-RPC call or REST path

        Returns
        -------
        Any
            Decoded response body

        """
        if isinstance(request, JsonRpcCall):
            if self.config.rpc_style is not RPCStyle.JSONRPC:
                msg = f"{self.config.name} does not speak JSON-RPC"
                raise ValueError(msg)
            return await self.rpc_client.jsonrpc_request(
                self.config.rpc_url,
                request.method,
                request.params,
                label=self.config.name,
            )
        return await self.rpc_client.get_json(f"{self.config.rpc_url}{request.path}", label=self.config.name)

    def normalize(self, records: list[Any], include_nfts: bool = False) -> tuple[list[TokenBalance], list[NftItem]]:
        """
        Classify and normalize raw records for this chain.

        NFTs are collected only when requested and the chain is configured
        with ``supports_nfts``.
        """
        return normalize(records, self.classifier, self.config, include_nfts and self.config.supports_nfts)

    def invalid_response(self, detail: str) -> UpstreamError:
        """Error for a response body that lacks the expected structure."""
        return UpstreamError(f"Invalid response structure from {self.config.name} RPC: {detail}")

    def is_supported_on_chain(self, chain: str) -> bool:
        """
        Check if the adapter serves a chain.

        Parameters
        ----------
        chain : str
            Chain id

        Returns
        -------
        bool
            True if supported

        """
        return chain in self.supported_chains
