# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Ordered query string multi-map.

Purpose
=======
Query parameters seed search/filter state and are written back before a
navigation entry is pushed, so the structure must serialize back to the
same string it was parsed from. Unlike ``urllib.parse.parse_qs`` the value
shape depends on how the key appeared:

Parsing Schema::

    Query string: "flag&name=john&tags=a&tags=b&empty="
                        ↓
    QueryString: {
        "flag": None,            # bare key, no "="
        "name": "john",          # single occurrence
        "tags": ["a", "b"],      # repeated key, list order kept
        "empty": ""              # "=" with nothing after it
    }
                        ↓
    str(qs) → "flag&name=john&tags=a&tags=b&empty="

Serialization rules per value:

    +-------------------+---------------------------+
    | Value             | Output                    |
    +-------------------+---------------------------+
    | None              | key                       |
    | "v"               | key=v                     |
    | ["a", "b"]        | key=a&key=b               |
    | []                | key=                      |
    | [None]            | key                       |
    +-------------------+---------------------------+

Definition::

    class QueryString(MutableMapping[str, QueryValue]):
        __slots__ = ("_params",)

        def __init__(self, raw: str | Mapping | None = "") -> None
        @classmethod parse(cls, raw: str) -> QueryString
        def get(self, key, default=None) -> QueryValue
        def getlist(self, key) -> list[str | None]
        def multi_items(self) -> list[tuple[str, str | None]]
        def to_string(self) -> str
        def copy(self) -> QueryString

Design Notes
============
- Keys are case-sensitive and unique; insertion order is kept.
- Keys and values are decoded with ``decode_component`` (``+`` is a space).
- Pairs whose decoded key is empty are dropped.
- Values may be edited in place; anything that is not ``None``, a string or
  a list is converted with ``str()`` on serialization.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any, Union

from .codec import decode_component, encode_component

__all__ = ["QueryString", "QueryValue"]

QueryValue = Union[None, str, list[Any]]


class QueryString(MutableMapping[str, Any]):
    """
    Ordered mapping of query keys to ``None``, a string, or a list of strings.

    Example:
        >>> qs = QueryString("a=1&a=2&flag&q=caf%C3%A9")
        >>> qs["a"]
        ['1', '2']
        >>> qs["flag"] is None
        True
        >>> qs["q"]
        'café'
        >>> qs["page"] = "3"
        >>> str(qs)
        'a=1&a=2&flag&q=caf%C3%A9&page=3'
    """

    __slots__ = ("_params",)

    def __init__(self, raw: str | Mapping[str, Any] | None = "") -> None:
        """
        Initialize from a raw query string or an existing mapping.

        Args:
            raw: Query string (an optional leading "?" is ignored), a mapping
                 of already-decoded values, or None for an empty query.
        """
        self._params: dict[str, Any] = {}
        if raw is None:
            return
        if isinstance(raw, Mapping):
            for key, value in raw.items():
                self._params[key] = list(value) if isinstance(value, list) else value
            return
        self._parse_into(raw)

    @classmethod
    def parse(cls, raw: str) -> QueryString:
        """Parse ``raw`` into a new QueryString."""
        return cls(raw)

    def _parse_into(self, raw: str) -> None:
        if raw.startswith("?"):
            raw = raw[1:]
        if not raw:
            return
        for part in raw.split("&"):
            raw_key, sep, raw_value = part.partition("=")
            key = decode_component(raw_key)
            if not key:
                continue
            value = decode_component(raw_value) if sep else None
            self._add(key, value)

    def _add(self, key: str, value: str | None) -> None:
        if key not in self._params:
            self._params[key] = value
            return
        current = self._params[key]
        if not isinstance(current, list):
            current = self._params[key] = [current]
        current.append(value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get the stored value for a key.

        Args:
            key: Parameter name (case-sensitive).
            default: Value returned when the key is missing.

        Returns:
            ``None``, a string or a list, exactly as stored.
        """
        return self._params.get(key, default)

    def getlist(self, key: str) -> list[Any]:
        """
        Get the values for a key as a list.

        Returns:
            A new list: the stored list, ``[value]`` for a scalar or bare key,
            or an empty list if the key is missing.
        """
        if key not in self._params:
            return []
        value = self._params[key]
        if isinstance(value, list):
            return list(value)
        return [value]

    def multi_items(self) -> list[tuple[str, Any]]:
        """
        Return every (key, value) pair, one per list element.

        Example:
            >>> QueryString("a=1&a=2&b").multi_items()
            [('a', '1'), ('a', '2'), ('b', None)]
        """
        result: list[tuple[str, Any]] = []
        for key, value in self._params.items():
            if isinstance(value, list):
                for item in value:
                    result.append((key, item))
            else:
                result.append((key, value))
        return result

    def to_string(self) -> str:
        """Serialize back to a query string, without the leading "?"."""
        pairs: list[str] = []
        for key, value in self._params.items():
            name = encode_component(key)
            if isinstance(value, list):
                if not value:
                    pairs.append(f"{name}=")
                    continue
                for item in value:
                    pairs.append(_pair(name, item))
            else:
                pairs.append(_pair(name, value))
        return "&".join(pairs)

    def copy(self) -> QueryString:
        """Return an independent copy (lists are copied too)."""
        return type(self)(self._params)

    def __getitem__(self, key: str) -> Any:
        return self._params[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._params[key] = value

    def __delitem__(self, key: str) -> None:
        del self._params[key]

    def __contains__(self, key: object) -> bool:
        """Check if parameter exists (case-sensitive)."""
        return key in self._params

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        """Return number of keys."""
        return len(self._params)

    def __bool__(self) -> bool:
        return bool(self._params)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryString):
            return self._params == other._params
        if isinstance(other, Mapping):
            return self._params == dict(other)
        return False

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"QueryString({self._params!r})"


def _pair(name: str, value: Any) -> str:
    if value is None:
        return name
    return f"{name}={encode_component(value)}"
