"""Request path canonicalization."""

import posixpath
from urllib.parse import quote


def clean_path(path: str) -> str:
    """Return the canonical form of *path*.

    Eliminates ``.`` and ``..`` elements and repeated slashes, guarantees a
    leading ``/``, and keeps a trailing ``/`` except on the root::

        clean_path("")             -> "/"
        clean_path("a/b")          -> "/a/b"
        clean_path("/a/./b/../c/") -> "/a/c/"
        clean_path("//a//b")       -> "/a/b"
        clean_path("/../")         -> "/"
    """
    if not path:
        return "/"
    if not path.startswith("/"):
        path = "/" + path
    cleaned = posixpath.normpath(path)
    # POSIX keeps exactly two leading slashes; URLs don't.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    if path.endswith("/") and cleaned != "/":
        cleaned += "/"
    return cleaned


# RFC 3986 pchar delimiters; "?", "#", "%" and spaces are escaped.
_PATH_SAFE = "/:@!$&'()*+,;="


def quote_path(path: str) -> str:
    """Percent-encode a decoded request path for use in a ``Location`` header.

    ::

        quote_path("/日本/")   -> "/%E6%97%A5%E6%9C%AC/"
        quote_path("/a?b/")   -> "/a%3Fb/"
    """
    return quote(path, safe=_PATH_SAFE)
