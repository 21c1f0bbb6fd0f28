"""Read-only chain registry."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from multichain_assets.core.errors import ChainNotFoundError
from multichain_assets.core.models import ChainConfig


class ChainRegistry:
    """
    Immutable lookup from chain identifier to ``ChainConfig``.

    Built once at startup and shared by every request; it is never mutated
    afterwards, so concurrent reads need no locking.

    Parameters
    ----------
    chains : Mapping[str, ChainConfig]
        Chain configurations keyed by chain identifier

    """

    def __init__(self, chains: Mapping[str, ChainConfig]) -> None:
        self._chains = MappingProxyType({key.lower(): config for key, config in chains.items()})

    def resolve_chain(self, chain_id: str) -> ChainConfig:
        """
        Get the configuration of a chain.

        Parameters
        ----------
        chain_id : str
            Chain identifier (case-insensitive)

        Returns
        -------
        ChainConfig
            Chain configuration

        Raises
        ------
        ChainNotFoundError
            If the chain is not registered

        """
        config = self._chains.get(chain_id.lower())
        if config is None:
            raise ChainNotFoundError(chain_id)
        return config

    def list_chains(self) -> list[str]:
        """Registered chain identifiers in configuration order."""
        return list(self._chains)

    def __contains__(self, chain_id: object) -> bool:
        return isinstance(chain_id, str) and chain_id.lower() in self._chains

    def __iter__(self) -> Iterator[ChainConfig]:
        return iter(self._chains.values())
