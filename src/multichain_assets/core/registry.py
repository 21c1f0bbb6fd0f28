"""Chain adapter registry with auto-registration pattern."""

from typing import Protocol


class ChainAdapterInterface(Protocol):
    """
    Interface that all chain adapters must implement.

    Attributes
    ----------
    name : str
        Unique adapter identifier (e.g., 'sui', 'evm')
    supported_chains : list[str]
        Registry chain ids the adapter serves

    Methods
    -------
    fetch_owned_assets(address)
        Fetch the raw records owned by an address

    """

    name: str
    supported_chains: list[str]

    async def fetch_owned_assets(self, address: str) -> list[dict]:
        """
        Fetch the raw records owned by an address.

        Parameters
        ----------
        address : str
            Validated chain address

        Returns
        -------
        list[dict]
            Raw per-object or per-account records

        """
        ...


class AdapterRegistry:
    """
    Registry for chain adapters with auto-registration.

    Adapters register themselves using the @AdapterRegistry.register
    decorator. A chain is served by the asset endpoint only when an adapter
    registered here lists it in ``supported_chains``.

    """

    _adapters: dict[str, type[ChainAdapterInterface]] = {}

    @classmethod
    def register(cls, adapter_class: type) -> type:
        """
        Decorator to register a chain adapter.

        Parameters
        ----------
        adapter_class : type
            Adapter class to register

        Returns
        -------
        type
            The adapter class (for decorator chaining)

        Raises
        ------
        ValueError
            If the adapter lacks a name or claims a chain another adapter serves

        Examples
        --------
        >>> @AdapterRegistry.register
        ... class SuiAdapter(BaseChainAdapter):
        ...     name = "sui"
        ...     supported_chains = ["sui"]

        """
        if not getattr(adapter_class, "name", None):
            msg = f"Adapter {adapter_class.__name__} must define 'name' attribute"
            raise ValueError(msg)

        for chain in adapter_class.supported_chains:
            other = cls.get_adapter_for_chain(chain)
            if other is not None and other.name != adapter_class.name:
                msg = f"Chain {chain!r} is already served by adapter {other.name!r}"
                raise ValueError(msg)

        cls._adapters[adapter_class.name] = adapter_class
        return adapter_class

    @classmethod
    def get_adapter(cls, adapter_name: str) -> type | None:
        """
        Get adapter class by adapter name.

        Parameters
        ----------
        adapter_name : str
            Adapter identifier

        Returns
        -------
        type | None
            Adapter class or None if not found

        """
        return cls._adapters.get(adapter_name)

    @classmethod
    def get_adapter_for_chain(cls, chain: str) -> type | None:
        """
        Get the adapter class serving a chain.

        Parameters
        ----------
        chain : str
            Chain id

        Returns
        -------
        type | None
            Adapter class or None if the chain is not wired

        """
        for adapter_class in cls._adapters.values():
            if chain in adapter_class.supported_chains:
                return adapter_class
        return None

    @classmethod
    def wired_chains(cls) -> list[str]:
        """
        Get every chain served by a registered adapter.

        Returns
        -------
        list[str]
            Chain ids in registration order

        """
        return [chain for adapter_class in cls._adapters.values() for chain in adapter_class.supported_chains]

    @classmethod
    def clear(cls) -> None:
        """Clear all registered adapters (useful for testing)."""
        cls._adapters.clear()

    @classmethod
    def list_adapters(cls) -> list[str]:
        """Get list of all registered adapter names."""
        return list(cls._adapters.keys())
