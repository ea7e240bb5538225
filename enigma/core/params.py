"""Ordered multi-map of query parameters."""

from __future__ import annotations

from collections.abc import Iterator
from urllib.parse import urlencode

from multidict import MultiDict, MultiDictProxy


class ParameterSet:
    """Append-only query parameters with duplicate keys.

    Values under the same key keep their insertion order and serialize as
    repeated ``key=value`` pairs, so several ``where`` or ``search`` clauses can
    coexist. Pair order on the wire equals insertion order across all keys.

    Example:
        >>> params = ParameterSet()
        >>> params.add("where", "age>30")
        >>> params.add("where", "age<40")
        >>> params.encode()
        'where=age%3E30&where=age%3C40'
    """

    def __init__(self) -> None:
        self._values: MultiDict[str] = MultiDict()

    def add(self, key: str, value: str) -> None:
        """Append ``value`` under ``key`` without touching existing values."""
        self._values.add(key, value)

    def getall(self, key: str) -> list[str]:
        """All values stored under ``key`` in insertion order (empty if none)."""
        return self._values.getall(key, [])

    def encode(self) -> str:
        """Form-encode the pairs in insertion order; empty set gives ``""``."""
        return urlencode(list(self._values.items()))

    def view(self) -> MultiDictProxy[str]:
        """Read-only view of the underlying multi-map."""
        return MultiDictProxy(self._values)

    def copy(self) -> ParameterSet:
        clone = ParameterSet()
        clone._values = self._values.copy()
        return clone

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._values.items())

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return len(self._values) > 0

    def __repr__(self) -> str:
        return f"ParameterSet({list(self._values.items())!r})"
