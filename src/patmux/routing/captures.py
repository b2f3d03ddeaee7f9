"""Captured path segments.

Implements ``Mapping[str, str]`` and the ``MultiValueMapping`` protocol.
Names keep their capture marker (``":id"``), exactly as written in the
pattern.
"""

from collections.abc import Iterable, Iterator, Mapping

from patmux._internal.multimap import urlencode_sorted


class Captures(Mapping[str, str]):
    """Immutable, ordered, multi-valued capture bindings.

    A pattern may bind the same name more than once (``/:a/:a``); every
    binding is kept, in path order. ``__getitem__`` returns the first one.
    """

    __slots__ = ("_data", "_pairs")

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        pairs = tuple(pairs)
        data: dict[str, list[str]] = {}
        for name, value in pairs:
            data.setdefault(name, []).append(value)
        object.__setattr__(self, "_pairs", pairs)
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Captures):
            return self._pairs == other._pairs
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(self._pairs)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._pairs)
        return f"Captures([{items}])"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values bound to *key*."""
        return list(self._data.get(key, []))

    def items_list(self) -> list[tuple[str, str]]:
        """Every ``(name, value)`` binding in path order."""
        return list(self._pairs)

    def encode(self) -> str:
        """URL-encode the bindings, keys sorted, values in path order."""
        return urlencode_sorted(self)
