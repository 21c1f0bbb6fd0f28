"""Data models for chains, token balances, NFTs, and wire responses."""

import math
import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


class RPCStyle(StrEnum):
    """How a chain endpoint is addressed."""

    JSONRPC = "jsonrpc"
    REST = "rest"


class NativeAsset(BaseModel):
    """
    Native asset metadata for a chain.

    Attributes
    ----------
    symbol : str
        Ticker (e.g., 'SUI', 'APT')
    name : str
        Display name
    decimals : int
        Number of decimal places of the base unit
    identity : str
        Canonical type/denom string identifying the asset on-chain

    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    decimals: int
    identity: str


class KnownToken(BaseModel):
    """Independently known metadata for a non-native token."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    decimals: int


class ChainConfig(BaseModel):
    """
    Static configuration for one chain.

    Attributes
    ----------
    chain_id : str
        Registry key (e.g., 'sui', 'ethereum')
    name : str
        Display name
    rpc_url : str
        Base RPC URL (after environment overrides)
    rpc_style : RPCStyle
        JSON-RPC envelope or REST path
    address_pattern : str
        Regular expression an address must fully match
    native : NativeAsset
        Native asset metadata
    default_token_decimals : int
        Decimals assumed for tokens whose metadata is not known
    known_tokens : dict[str, KnownToken]
        Token identity to known metadata
    supports_nfts : bool
        Whether the chain's adapter can report non-fungible objects

    """

    model_config = ConfigDict(frozen=True)

    chain_id: str
    name: str
    rpc_url: str
    rpc_style: RPCStyle
    address_pattern: str
    native: NativeAsset
    default_token_decimals: int
    known_tokens: dict[str, KnownToken] = Field(default_factory=dict)
    supports_nfts: bool = False

    def is_valid_address(self, address: str) -> bool:
        """
        Check an address against the chain's format.

        Parameters
        ----------
        address : str
            Candidate address

        Returns
        -------
        bool
            True if the whole address matches ``address_pattern``

        """
        return re.fullmatch(self.address_pattern, address) is not None


class TokenBalance(BaseModel):
    """
    Fungible balance normalized across chains.

    ``raw_balance`` is an exact integer in base units. ``ui_amount`` is derived
    from it on every access and never stored.

    """

    identity: str
    symbol: str
    name: str
    decimals: int
    raw_balance: int
    chain: str
    verified: bool = False
    decimals_assumed: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ui_amount(self) -> float:
        """
        Display amount, ``raw_balance / 10**decimals`` correctly rounded.

        Amounts beyond the float range give ``inf``; ``raw_balance`` stays exact.
        """
        try:
            return self.raw_balance / 10**self.decimals
        except OverflowError:
            return math.inf


class NftItem(BaseModel):
    """Non-fungible object as reported by the chain."""

    id: str
    type: str
    content: Any = None


class AggregationResult(BaseModel):
    """
    Result of one asset query.

    Attributes
    ----------
    balances : list[TokenBalance]
        One entry per token identity, in first-seen order
    nfts : list[NftItem] | None
        Non-fungible objects, or None when they were not requested

    """

    balances: list[TokenBalance] = Field(default_factory=list)
    nfts: list[NftItem] | None = None

    def to_response(self) -> "AssetsResponse":
        """Project onto the wire schema."""
        return AssetsResponse(
            balances=[
                BalanceOut(
                    token=TokenOut(
                        symbol=b.symbol,
                        name=b.name,
                        decimals=b.decimals,
                        address=b.identity,
                        chain=b.chain,
                        verified=b.verified,
                        decimals_assumed=b.decimals_assumed,
                    ),
                    balance=str(b.raw_balance),
                    ui_amount=b.ui_amount if math.isfinite(b.ui_amount) else None,
                )
                for b in self.balances
            ],
            nfts=self.nfts,
        )


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenOut(_WireModel):
    """Token descriptor in the asset query response."""

    symbol: str
    name: str
    decimals: int
    address: str
    chain: str
    verified: bool
    decimals_assumed: bool = False


class BalanceOut(_WireModel):
    """
    Balance entry in the asset query response.

    ``balance`` is decimal integer text; ``ui_amount`` is None when the amount
    exceeds the float range.
    """

    token: TokenOut
    balance: str
    ui_amount: float | None

    @field_validator("balance")
    @classmethod
    def _check_integer_text(cls, value: str) -> str:
        if not (value.isascii() and value.isdigit()):
            msg = f"balance must be decimal integer text, got {value!r}"
            raise ValueError(msg)
        return value


class AssetsResponse(_WireModel):
    """Wire body of a successful asset query."""

    balances: list[BalanceOut]
    nfts: list[NftItem] | None = None

    def to_wire(self) -> dict[str, Any]:
        """
        Serialize to JSON-compatible data.

        The ``nfts`` key is omitted entirely when NFTs were not requested so
        that "none found" (``[]``) stays distinguishable from "not asked".

        Returns
        -------
        dict[str, Any]
            Response body

        """
        exclude = {"nfts"} if self.nfts is None else None
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)

    def to_result(self) -> AggregationResult:
        """Parse back into an ``AggregationResult`` with integer balances."""
        return AggregationResult(
            balances=[
                TokenBalance(
                    identity=b.token.address,
                    symbol=b.token.symbol,
                    name=b.token.name,
                    decimals=b.token.decimals,
                    raw_balance=int(b.balance),
                    chain=b.token.chain,
                    verified=b.token.verified,
                    decimals_assumed=b.token.decimals_assumed,
                )
                for b in self.balances
            ],
            nfts=self.nfts,
        )
