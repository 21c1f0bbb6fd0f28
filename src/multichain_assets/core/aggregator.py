"""Balance aggregator merging records that share a token identity."""

from collections.abc import Iterable

from multichain_assets.core.models import TokenBalance


class BalanceAggregator:
    """
    Merges ``TokenBalance`` records by token identity.

    Raw balances are summed with exact integer addition. The display amount is
    a property of ``TokenBalance`` computed from the accumulated raw value, so
    it is never summed across merges. Output keeps the order in which each
    identity was first seen.

    Examples
    --------
    >>> aggregator = BalanceAggregator()
    >>> aggregator.extend(balances)
    >>> merged = aggregator.results()

    """

    def __init__(self) -> None:
        self._by_identity: dict[str, TokenBalance] = {}

    def add(self, balance: TokenBalance) -> None:
        """
        Add one balance record.

        Parameters
        ----------
        balance : TokenBalance
            Normalized record; it is copied, never mutated

        """
        existing = self._by_identity.get(balance.identity)
        if existing is None:
            self._by_identity[balance.identity] = balance.model_copy()
            return

        existing.raw_balance += balance.raw_balance

    def extend(self, balances: Iterable[TokenBalance]) -> None:
        """Add records in arrival order."""
        for balance in balances:
            self.add(balance)

    def results(self) -> list[TokenBalance]:
        """
        Get merged balances.

        Returns
        -------
        list[TokenBalance]
            One entry per identity, in first-seen order

        """
        return list(self._by_identity.values())

    def __len__(self) -> int:
        return len(self._by_identity)


def aggregate_balances(balances: Iterable[TokenBalance]) -> list[TokenBalance]:
    """
    Merge balances sharing a token identity.

    Parameters
    ----------
    balances : Iterable[TokenBalance]
        Normalized records in arrival order

    Returns
    -------
    list[TokenBalance]
        At most one entry per identity whose raw balance is the exact sum of
        all records for that identity, ordered by first occurrence

    """
    aggregator = BalanceAggregator()
    aggregator.extend(balances)
    return aggregator.results()
