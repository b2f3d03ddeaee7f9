"""ASGI handler — translates ASGI scope/messages to patmux types.

The only component that touches raw ASGI directly. Converts scope dicts to
Request objects, dispatches through the mux, maps errors to responses, and
sends the Response back through ASGI send().
"""

import logging
from typing import TYPE_CHECKING

from patmux._internal.asgi import Receive, Scope, Send
from patmux.errors import HTTPError
from patmux.http.request import Request
from patmux.http.response import Response
from patmux.server.sender import send_response

if TYPE_CHECKING:
    from patmux.routing.mux import ServeMux

logger = logging.getLogger("patmux.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    mux: "ServeMux",
) -> None:
    """Process a single HTTP request through the mux."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await mux.dispatch(request)
    except HTTPError as exc:
        response = http_error_response(exc, request)
    except Exception:
        response = internal_error_response(request)

    await send_response(response, send, head=request.method == "HEAD")


def http_error_response(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError raised by a handler to a plain-text Response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    detail = exc.detail or f"Error {exc.status}"
    response = Response(body=detail, content_type="text/plain; charset=utf-8").with_status(
        exc.status
    )
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def internal_error_response(request: Request) -> Response:
    """Log the active exception and answer 500.

    MUST be called from inside an ``except`` block.
    """
    logger.exception("500 %s %s", request.method, request.path)
    return Response(
        body="Internal Server Error",
        status=500,
        content_type="text/plain; charset=utf-8",
    )


async def handle_lifespan(receive: Receive, send: Send) -> None:
    """Answer the ASGI lifespan protocol.

    The mux has nothing to set up or tear down; routes are registered
    before the server starts.
    """
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            logger.debug("lifespan startup")
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            logger.debug("lifespan shutdown")
            await send({"type": "lifespan.shutdown.complete"})
            return
