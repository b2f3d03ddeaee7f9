"""Immutable HTTP request.

Frozen metadata with async body access. The mux never mutates a request:
injecting captures produces a new one.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field, replace
from typing import Any

from patmux._internal.asgi import Receive
from patmux.http.headers import Headers
from patmux.http.query import QueryParams
from patmux.routing.captures import Captures


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``host`` is the ``Host`` header as sent (port included), falling back
    to the ASGI server name. ``captures`` holds the segments bound by the
    matched pattern; they are also merged into ``query``.
    """

    method: str
    host: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    captures: Captures = field(default_factory=Captures)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive = _empty_receive

    # Private: mutable cache for the body
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def host_path(self) -> str:
        """``host + path``, the string host-qualified patterns match."""
        return self.host + self.path

    @property
    def url(self) -> str:
        """Request path plus query string."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    def with_captures(self, captures: Captures | None) -> Request:
        """Return a copy carrying *captures*, prepended to the query data."""
        if not captures:
            return self
        return replace(self, captures=captures, query=self.query.with_prepended(captures))

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body (cached after the first call)."""
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes, None]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as UTF-8 text."""
        raw = await self.body()
        return raw.decode("utf-8")

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        headers = Headers(scope.get("headers", ()))
        server = scope.get("server")
        client = scope.get("client")
        host = headers.get("host")
        if host is None:
            host = server[0] if server else ""
        return cls(
            method=scope["method"],
            host=host,
            path=scope["path"],
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
