# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Decoded query parameters of a parsed URL.

Purpose
=======
``ParsedURL.query`` keeps the query exactly as it appeared in the URL
(``"a=1&b=%20x"``). ``QueryParams`` is the decoded, multi-value view of
that string, the equivalent of the legacy ``parse(url, true)`` query
object. Parameter names are case-sensitive.

Parsing Schema::

    ParsedURL.query: "name=john&tags=python&tags=web&empty="
                        ↓
                urllib.parse.parse_qsl (keep_blank_values)
                        ↓
    Internal dict: {
        "name": ["john"],
        "tags": ["python", "web"],
        "empty": [""]
    }

Definition::

    class QueryParams:
        __slots__ = ("_params",)

        def __init__(self, query: str | None = None) -> None
        def get(self, key: str, default: str | None = None) -> str | None
        def getlist(self, key: str) -> list[str]
        def keys(self) -> list[str]
        def values(self) -> list[str]
        def items(self) -> list[tuple[str, str]]
        def multi_items(self) -> list[tuple[str, str]]
        def __getitem__(self, key: str) -> str
        def __contains__(self, key: object) -> bool
        def __iter__(self) -> Iterator[str]
        def __len__(self) -> int
        def __bool__(self) -> bool
        def __eq__(self, other: object) -> bool

Example::

    from genro_parseurl import parse_current

    parsed = parse_current(request)          # request.url == "/s?q=a+b&tag=x&tag=y"
    params = parsed.query_params
    params.get("q")          # "a b"
    params.getlist("tag")    # ["x", "y"]

Design Notes
============
- ``None`` (no query in the URL) and ``""`` both give empty params
- Empty values are preserved (``?key=`` gives ``""``, not ``None``)
- First-seen key order is kept
"""

from typing import Iterator
from urllib.parse import parse_qsl

__all__ = ["QueryParams"]


class QueryParams:
    """
    Case-sensitive multi-value mapping over a raw query string.

    Example:
        >>> params = QueryParams("name=john&tags=python&tags=web")
        >>> params.get("name")
        'john'
        >>> params.getlist("tags")
        ['python', 'web']
        >>> QueryParams(None)
        QueryParams({})
    """

    __slots__ = ("_params",)

    def __init__(self, query: str | None = None) -> None:
        params: dict[str, list[str]] = {}
        for key, value in parse_qsl(query or "", keep_blank_values=True):
            params.setdefault(key, []).append(value)
        self._params = params

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the first value for ``key``, or ``default``."""
        values = self._params.get(key)
        if values:
            return values[0]
        return default

    def getlist(self, key: str) -> list[str]:
        """Return every value for ``key`` (empty list if missing)."""
        return list(self._params.get(key, []))

    def keys(self) -> list[str]:
        return list(self._params)

    def values(self) -> list[str]:
        return [v[0] for v in self._params.values()]

    def items(self) -> list[tuple[str, str]]:
        return [(k, v[0]) for k, v in self._params.items()]

    def multi_items(self) -> list[tuple[str, str]]:
        """
        Return all (name, value) pairs including repeated names.

        Example:
            >>> QueryParams("a=1&a=2&b=3").multi_items()
            [('a', '1'), ('a', '2'), ('b', '3')]
        """
        return [(key, value) for key, values in self._params.items() for value in values]

    def __getitem__(self, key: str) -> str:
        values = self._params.get(key)
        if not values:
            raise KeyError(key)
        return values[0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._params

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __bool__(self) -> bool:
        return bool(self._params)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryParams):
            return self._params == other._params
        return NotImplemented

    def __repr__(self) -> str:
        return f"QueryParams({self._params!r})"
