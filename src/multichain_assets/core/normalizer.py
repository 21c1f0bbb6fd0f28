"""
Record classification and normalization into ``TokenBalance`` / ``NftItem``.

Each chain reports holdings in its own shape: Sui owned objects typed
``0x2::coin::Coin<T>``, Aptos account resources typed
``0x1::coin::CoinStore<T>``, Cosmos bank balances keyed by denom, a bare
EVM native balance. A classifier maps one raw record to one of
``NativeCoin``, ``FungibleToken``, ``NonFungible`` or ``Skip``; ``normalize``
turns the classified records into the common schema.

Malformed records are skipped, never raised: one bad entry in an upstream
payload must not fail the whole request.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from multichain_assets.core.models import ChainConfig, KnownToken, NftItem, TokenBalance

logger = logging.getLogger(__name__)

UNKNOWN = "UNKNOWN"

_ADDRESS_RE = re.compile(r"0x0*([0-9a-fA-F]+)")


@dataclass(frozen=True)
class NativeCoin:
    """Balance of the chain's native asset."""

    raw_balance: int


@dataclass(frozen=True)
class FungibleToken:
    """Balance of a non-native fungible token."""

    identity: str
    raw_balance: int


@dataclass(frozen=True)
class NonFungible:
    """Non-fungible object (only produced when NFTs were requested)."""

    item: NftItem


@dataclass(frozen=True)
class Skip:
    """Record that matches no known shape."""

    reason: str


Classification = NativeCoin | FungibleToken | NonFungible | Skip


def canonical_type(type_tag: str) -> str:
    """
    Canonicalize the addresses inside a Move type tag.

    ``0x0000…0002::sui::SUI`` and ``0x2::sui::SUI`` name the same type; both
    become ``0x2::sui::SUI``.

    Parameters
    ----------
    type_tag : str
        Move type tag

    Returns
    -------
    str
        Type tag with every address in short, lower-case form

    """
    return _ADDRESS_RE.sub(lambda m: "0x" + m.group(1).lower(), type_tag.strip())


def trailing_segment(identity: str) -> str:
    """
    Last path segment of a token identity, ignoring generic parameters.

    >>> trailing_segment("0xabc::lp::LP<0x2::sui::SUI>")
    'LP'
    >>> trailing_segment("factory/sei1xyz/usdt")
    'usdt'

    """
    base = identity.split("<", 1)[0]
    separator = "::" if "::" in base else "/"
    return base.rsplit(separator, 1)[-1].strip()


def parse_raw_balance(value: Any) -> int | None:
    """
    Parse an on-chain balance into an exact integer.

    Parameters
    ----------
    value : Any
        Balance as reported (decimal integer text or int)

    Returns
    -------
    int | None
        Non-negative integer, or None if the value is not one

    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        try:
            return int(value.strip())
        except ValueError:
            # beyond the interpreter's integer string conversion limit
            return None
    return None


def _dig(record: Any, path: tuple[str, ...]) -> Any:
    for key in path:
        if not isinstance(record, dict):
            return None
        record = record.get(key)
    return record


class RecordClassifier(ABC):
    """Maps one raw chain record to a ``Classification``."""

    @abstractmethod
    def classify(self, record: dict[str, Any], include_nfts: bool = False) -> Classification:
        """
        Classify a raw record.

        Parameters
        ----------
        record : dict[str, Any]
            Raw record from the chain adapter
        include_nfts : bool
            Whether non-fungible records should be materialized

        Returns
        -------
        Classification
            NativeCoin, FungibleToken, NonFungible or Skip

        """
        ...


class TypeStringClassifier(RecordClassifier):
    """
    Classifier for Move-style records carrying a type tag.

    A record whose type is ``<container><T>`` holds a fungible balance of
    ``T``; when ``T`` is the native identity it is the native coin. Any other
    typed record is a non-fungible object if the chain reports NFTs.

    Parameters
    ----------
    container : str
        Coin container type without generics (e.g., '0x2::coin::Coin')
    native_identity : str
        Type of the native coin (e.g., '0x2::sui::SUI')
    content_key : str
        Key of the record's payload ('content' for Sui, 'data' for Aptos)
    balance_paths : tuple[tuple[str, ...], ...]
        Candidate paths to the balance inside the payload, tried in order
    id_key : str | None
        Key of the object id; None if the chain reports no NFTs

    """

    def __init__(
        self,
        container: str,
        native_identity: str,
        content_key: str,
        balance_paths: tuple[tuple[str, ...], ...],
        id_key: str | None = None,
    ) -> None:
        self.container = canonical_type(container)
        self.native_identity = canonical_type(native_identity)
        self.content_key = content_key
        self.balance_paths = balance_paths
        self.id_key = id_key

    def coin_type(self, type_tag: str) -> str | None:
        """Inner type ``T`` of ``<container><T>``, or None for other types."""
        prefix = self.container + "<"
        if type_tag.startswith(prefix) and type_tag.endswith(">"):
            inner = type_tag[len(prefix) : -1].strip()
            return inner or None
        return None

    def classify(self, record: dict[str, Any], include_nfts: bool = False) -> Classification:
        type_tag = record.get("type")
        content = record.get(self.content_key)
        if not isinstance(type_tag, str) or not type_tag or content is None:
            return Skip("missing type or content")

        type_tag = canonical_type(type_tag)
        coin_type = self.coin_type(type_tag)
        if coin_type is None:
            if not include_nfts or self.id_key is None:
                return Skip("not a coin")
            object_id = record.get(self.id_key)
            if not isinstance(object_id, str) or not object_id:
                return Skip("object without id")
            return NonFungible(NftItem(id=object_id, type=type_tag, content=content))

        raw_balance = None
        for path in self.balance_paths:
            raw_balance = parse_raw_balance(_dig(content, path))
            if raw_balance is not None:
                break
        if raw_balance is None:
            return Skip(f"unreadable balance for {coin_type}")

        if coin_type == self.native_identity:
            return NativeCoin(raw_balance)
        return FungibleToken(coin_type, raw_balance)


class DenomClassifier(RecordClassifier):
    """
    Classifier for Cosmos bank balances (``{"denom": ..., "amount": ...}``).

    Parameters
    ----------
    native_denom : str
        Base denom of the native asset (e.g., 'usei')

    """

    def __init__(self, native_denom: str) -> None:
        self.native_denom = native_denom

    def classify(self, record: dict[str, Any], include_nfts: bool = False) -> Classification:
        denom = record.get("denom")
        if not isinstance(denom, str) or not denom.strip():
            return Skip("missing denom")
        raw_balance = parse_raw_balance(record.get("amount"))
        if raw_balance is None:
            return Skip(f"unreadable amount for {denom}")
        denom = denom.strip()
        if denom == self.native_denom:
            return NativeCoin(raw_balance)
        return FungibleToken(denom, raw_balance)


class NativeBalanceClassifier(RecordClassifier):
    """Classifier for chains whose records are native balances only (EVM ``eth_getBalance``)."""

    def classify(self, record: dict[str, Any], include_nfts: bool = False) -> Classification:
        raw_balance = parse_raw_balance(record.get("balance"))
        if raw_balance is None:
            return Skip("unreadable native balance")
        return NativeCoin(raw_balance)


def build_token_balance(classified: NativeCoin | FungibleToken, config: ChainConfig) -> TokenBalance:
    """
    Build a ``TokenBalance`` for a classified coin record.

    The native asset is verified and uses registry metadata. Other tokens are
    unverified; their metadata comes from the chain's known-token table, or
    is derived from the identity with the chain's default decimals.

    Parameters
    ----------
    classified : NativeCoin | FungibleToken
        Classified coin record
    config : ChainConfig
        Chain configuration

    Returns
    -------
    TokenBalance
        Normalized balance

    """
    if isinstance(classified, NativeCoin):
        native = config.native
        return TokenBalance(
            identity=native.identity,
            symbol=native.symbol,
            name=native.name,
            decimals=native.decimals,
            raw_balance=classified.raw_balance,
            chain=config.chain_id,
            verified=True,
        )

    known = _known_token(config, classified.identity)
    if known is not None:
        return TokenBalance(
            identity=classified.identity,
            symbol=known.symbol,
            name=known.name,
            decimals=known.decimals,
            raw_balance=classified.raw_balance,
            chain=config.chain_id,
        )

    segment = trailing_segment(classified.identity)
    return TokenBalance(
        identity=classified.identity,
        symbol=segment.upper() if segment else UNKNOWN,
        name=segment or UNKNOWN,
        decimals=config.default_token_decimals,
        raw_balance=classified.raw_balance,
        chain=config.chain_id,
        decimals_assumed=True,
    )


def _known_token(config: ChainConfig, identity: str) -> KnownToken | None:
    known = config.known_tokens.get(identity)
    if known is None and "::" in identity:
        for key, token in config.known_tokens.items():
            if canonical_type(key) == identity:
                return token
    return known


def normalize(
    records: list[Any],
    classifier: RecordClassifier,
    config: ChainConfig,
    include_nfts: bool = False,
) -> tuple[list[TokenBalance], list[NftItem]]:
    """
    Classify raw records and build normalized balances and NFTs.

    Parameters
    ----------
    records : list[Any]
        Raw records from the chain adapter
    classifier : RecordClassifier
        Chain-specific classifier
    config : ChainConfig
        Chain configuration
    include_nfts : bool
        Whether non-fungible records should be collected

    Returns
    -------
    tuple[list[TokenBalance], list[NftItem]]
        Balances in arrival order (not yet merged) and NFTs deduplicated by id

    """
    balances: list[TokenBalance] = []
    nfts: dict[str, NftItem] = {}
    skipped = 0

    for record in records:
        if not isinstance(record, dict):
            skipped += 1
            continue

        classified = classifier.classify(record, include_nfts)
        if isinstance(classified, Skip):
            skipped += 1
            logger.debug("Skipping %s record: %s", config.chain_id, classified.reason)
        elif isinstance(classified, NonFungible):
            nfts.setdefault(classified.item.id, classified.item)
        else:
            balances.append(build_token_balance(classified, config))

    if skipped:
        logger.debug("Skipped %d of %d %s records", skipped, len(records), config.chain_id)

    return balances, list(nfts.values())
