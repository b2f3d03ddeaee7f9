"""ServeMux — the pattern -> handler registry.

Matches the host and path of each incoming request against the registered
patterns and hands the request to the handler whose pattern matches most
specifically.

Patterns name fixed paths (``/favicon.ico``), rooted subtrees (``/images/``,
note the trailing slash), or templates with captures (``/users/:id``,
``/files/user-:id/``). Longer patterns take precedence, so with handlers
for both ``/images/`` and ``/images/thumbnails/`` the latter receives
``/images/thumbnails/x`` and the former the rest of the subtree.

Patterns may begin with a host name (``example.com/admin/``) to restrict
them to that host. Host-specific patterns are tried first, so registering
``/search`` and ``search.example.com/`` doesn't hijack ``/search`` on
other hosts.

The mux also canonicalizes request paths, redirecting any request with
``.``/``..`` elements or repeated slashes to the clean equivalent.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from patmux._internal.asgi import Receive, Scope, Send
from patmux._internal.invoke import invoke
from patmux._internal.rwlock import ReadWriteLock
from patmux.config import MuxConfig
from patmux.errors import ConfigurationError
from patmux.http.request import Request
from patmux.http.response import Response
from patmux.routing.captures import Captures
from patmux.routing.handlers import (
    Handler,
    HandlerFunc,
    NotFoundHandler,
    RedirectHandler,
    negotiate,
)
from patmux.routing.paths import clean_path, quote_path
from patmux.routing.pattern import CompiledPattern, compile_pattern
from patmux.server.handler import handle_lifespan, handle_request

logger = logging.getLogger("patmux.routing")

_NOT_FOUND = NotFoundHandler()


@dataclass(frozen=True, slots=True)
class MuxEntry:
    """One row of the route table.

    ``explicit`` is False for the redirects the mux adds on its own; those
    may be replaced by a later explicit registration.
    """

    pattern: str
    compiled: CompiledPattern
    handler: Handler
    explicit: bool = True


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful resolution."""

    pattern: str
    handler: Handler
    captures: Captures | None = None


class ServeMux:
    """HTTP request multiplexer and ASGI application.

    Usage::

        mux = ServeMux()
        mux.register("/old/", RedirectHandler("/new/"))

        @mux.route("/users/:id")
        def user(request):
            return {"id": request.captures[":id"]}

    Thread safety:
        Lookups share a read lock; registration takes the write lock and
        becomes visible only once complete, implicit redirect included.
        Handlers run after the lock is released.
    """

    __slots__ = ("_entries", "_lock", "config")

    def __init__(self, config: MuxConfig | None = None) -> None:
        self.config: MuxConfig = config or MuxConfig()
        self._entries: dict[str, MuxEntry] = {}
        self._lock = ReadWriteLock()

    # -- Registration --

    def register(self, pattern: str, handler: Handler) -> None:
        """Register *handler* for *pattern*.

        Registering ``/tree/`` also makes ``/tree`` redirect to ``/tree/``
        until ``/tree`` is registered explicitly. For a host-qualified
        pattern the redirect points at its path part.

        Raises:
            ConfigurationError: If *pattern* is empty, *handler* is None,
                or *pattern* already has an explicit registration.
        """
        if not pattern:
            msg = f"Invalid pattern {pattern!r}: patterns must be non-empty."
            raise ConfigurationError(msg)
        if handler is None:
            msg = f"No handler given for pattern {pattern!r}."
            raise ConfigurationError(msg)

        compiled = compile_pattern(pattern)

        with self._lock.write():
            existing = self._entries.get(pattern)
            if existing is not None and existing.explicit:
                msg = f"Multiple registrations for {pattern!r}."
                raise ConfigurationError(msg)

            self._entries[pattern] = MuxEntry(pattern, compiled, handler, explicit=True)
            logger.debug("registered %s -> %r", pattern, handler)

            if pattern.endswith("/") and len(pattern) > 1:
                bare = pattern[:-1]
                # Host-qualified patterns redirect to their path part.
                target = pattern[pattern.index("/") :]
                current = self._entries.get(bare)
                if current is None or not current.explicit:
                    self._entries[bare] = MuxEntry(
                        bare,
                        compile_pattern(bare),
                        RedirectHandler(target, self.config.redirect_status),
                        explicit=False,
                    )
                    logger.debug("implicit redirect %s -> %s", bare, target)

    def register_func(self, pattern: str, func: Callable[[Request], Any]) -> None:
        """Register a plain function (sync or async) taking the request."""
        if func is None:
            msg = f"No handler given for pattern {pattern!r}."
            raise ConfigurationError(msg)
        self.register(pattern, HandlerFunc(func))

    def route(self, pattern: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of ``register_func``; returns the function unchanged."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register_func(pattern, func)
            return func

        return decorator

    @property
    def routes(self) -> list[MuxEntry]:
        """Snapshot of the route table, sorted by pattern."""
        with self._lock.read():
            return sorted(self._entries.values(), key=lambda entry: entry.pattern)

    # -- Resolution --

    def _match(self, path: str) -> MuxEntry | None:
        """Longest matching pattern wins; the earlier entry wins a tie.

        MUST only be called while holding the read lock.
        """
        best: MuxEntry | None = None
        for entry in self._entries.values():
            if not entry.compiled.matches(path):
                continue
            if best is None or len(entry.pattern) > len(best.pattern):
                best = entry
        return best

    def resolve(self, host_path: str, path: str) -> RouteMatch | None:
        """Find the handler for a request.

        Host-qualified patterns are tried against *host_path* first, then
        every pattern against *path*. Returns None when nothing matches.
        """
        with self._lock.read():
            matched = host_path
            entry = self._match(host_path)
            if entry is None:
                matched = path
                entry = self._match(path)
        if entry is None:
            return None
        return RouteMatch(entry.pattern, entry.handler, entry.compiled.captures(matched))

    def handler_for(self, request: Request) -> tuple[Handler, Request]:
        """Return the handler for *request* and the request it should see.

        On a match with captures, the returned request carries them in
        ``captures`` and in front of its query data. On a miss the
        handler is the 404 handler.
        """
        match = self.resolve(request.host_path, request.path)
        if match is None:
            logger.debug("no route for %s %s", request.method, request.host_path)
            return _NOT_FOUND, request
        return match.handler, request.with_captures(match.captures)

    # -- Dispatch --

    async def dispatch(self, request: Request) -> Response:
        """Serve one request.

        Paths that aren't canonical get a permanent redirect to their clean
        form (tunnel methods like CONNECT are exempt); everything else goes
        to the most specific handler.
        """
        if request.method not in self.config.tunnel_methods:
            cleaned = clean_path(request.path)
            if cleaned != request.path:
                logger.debug("redirect %s -> %s", request.path, cleaned)
                return (
                    Response(body="")
                    .with_status(self.config.redirect_status)
                    .with_header("Location", quote_path(cleaned))
                )

        handler, request = self.handler_for(request)
        result = await invoke(handler.serve, request)
        return negotiate(result)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await handle_lifespan(receive, send)
            return
        await handle_request(scope, receive, send, mux=self)
