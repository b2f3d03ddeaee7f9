"""Multi-valued string mappings.

``Headers``, ``QueryParams`` and ``Captures`` all map a name to one or more
values. Code that only reads them, like the query rebuild that puts
captures in front of the request's own parameters, takes any
``MultiValueMapping``.
"""

from collections.abc import Iterator
from typing import Protocol, runtime_checkable
from urllib.parse import urlencode


@runtime_checkable
class MultiValueMapping(Protocol):
    """Read-only mapping from a name to its values, first value by default."""

    def __getitem__(self, key: str) -> str: ...
    def __contains__(self, key: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def __len__(self) -> int: ...
    def get(self, key: str, default: str | None = None) -> str | None: ...
    def get_list(self, key: str) -> list[str]: ...


def urlencode_sorted(values: MultiValueMapping) -> str:
    """URL-encode *values* with names sorted and each name's values in order.

    ``{":b": ["1"], ":a": ["2", "3"]}`` becomes ``"%3Aa=2&%3Aa=3&%3Ab=1"``.
    """
    pairs = [(name, value) for name in sorted(values) for value in values.get_list(name)]
    return urlencode(pairs)
