"""Immutable query string parameters.

Implements ``Mapping[str, str]`` and the ``MultiValueMapping`` protocol.
Doubles as the carrier for captured path segments: the mux rebuilds the
query with the captures in front, so they win ``__getitem__`` while the
original values stay reachable through ``get_list``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs

from patmux._internal.multimap import MultiValueMapping, urlencode_sorted


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as field name -> list of values.
        _raw: Raw query string bytes.
    """

    _data: dict[str, list[str]]
    _raw: bytes

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        object.__setattr__(self, "_raw", query_string)
        parsed = parse_qs(query_string.decode("latin-1"), keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    @property
    def raw(self) -> bytes:
        """The query string bytes this mapping was parsed from."""
        return self._raw

    def with_prepended(self, values: MultiValueMapping) -> QueryParams:
        """Return new params with *values* encoded ahead of the current query.

        ``"a=1"`` plus ``{":id": "7"}`` becomes ``"%3Aid=7&a=1"``.
        """
        encoded = urlencode_sorted(values).encode("latin-1")
        if not encoded:
            return self
        if self._raw:
            return QueryParams(encoded + b"&" + self._raw)
        return QueryParams(encoded)
