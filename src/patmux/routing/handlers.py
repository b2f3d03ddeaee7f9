"""Handlers — what a pattern is bound to.

A handler is anything with a ``serve(request)`` method, sync or async::

    class Health:
        def serve(self, request: Request) -> Response:
            return Response("ok", content_type="text/plain; charset=utf-8")

Plain functions are adapted with ``HandlerFunc``. Whatever ``serve``
returns is turned into a ``Response`` by ``negotiate``.
"""

from __future__ import annotations

import html
import json as json_module
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote

from patmux._internal.invoke import invoke
from patmux.http.request import Request
from patmux.http.response import Redirect, Response

# Reserved URL characters and existing escapes pass through; the rest is
# percent-encoded so the Location header stays ASCII.
_URL_SAFE = ":/?#[]@!$&'()*+,;=%~"


@runtime_checkable
class Handler(Protocol):
    """Protocol for objects a pattern can be registered with."""

    def serve(self, request: Request) -> Any | Awaitable[Any]: ...


@dataclass(frozen=True, slots=True)
class HandlerFunc:
    """Adapt a function ``func(request)`` to the ``Handler`` protocol."""

    func: Callable[[Request], Any]

    async def serve(self, request: Request) -> Any:
        return await invoke(self.func, request)


@dataclass(frozen=True, slots=True)
class RedirectHandler:
    """Redirect every request to ``url``.

    Used for the implicit ``/tree`` -> ``/tree/`` entries. Non-ASCII and
    other unsafe characters in ``url`` are percent-encoded. ``GET`` requests
    get a short HTML body with a link, as browsers without redirect support
    expect.
    """

    url: str
    status: int = 301

    def serve(self, request: Request) -> Response:
        location = quote(self.url, safe=_URL_SAFE)
        body = ""
        if request.method == "GET":
            body = f'<a href="{html.escape(location)}">{_status_phrase(self.status)}</a>.\n'
        return Response(body=body, status=self.status).with_header("Location", location)


@dataclass(frozen=True, slots=True)
class NotFoundHandler:
    """Reply ``404 page not found`` as plain text."""

    def serve(self, request: Request) -> Response:  # noqa: ARG002
        return Response(
            body="404 page not found\n",
            status=404,
            content_type="text/plain; charset=utf-8",
        )


def _status_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Redirect"


def negotiate(value: Any) -> Response:
    """Convert a handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``Redirect``            -> status with Location header
    3. ``None``                -> empty 200
    4. ``str``                 -> 200, text/html
    5. ``bytes``               -> 200, application/octet-stream
    6. ``dict`` / ``list``     -> 200, application/json
    7. ``(value, int)``        -> negotiate value, override status
    8. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case Redirect():
            return (
                Response(body="")
                .with_status(value.status)
                .with_header("Location", value.url)
                .with_headers(dict(value.headers))
            )
        case None:
            return Response(body="")
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value),
                content_type="application/json",
            )
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Handler returned {type(value).__name__}, which cannot be turned "
                "into a response. Return a Response, Redirect, str, bytes, dict, or list."
            )
            raise TypeError(msg)
