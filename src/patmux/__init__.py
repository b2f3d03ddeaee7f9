"""patmux — an HTTP request multiplexer with pattern captures.

Maps each request's host and path to the handler registered for the most
specific matching pattern, binding ``:name`` segments along the way.

Basic usage::

    from patmux import ServeMux

    mux = ServeMux()

    @mux.route("/hello/:name")
    def hello(request):
        return f"Hello, {request.captures[':name']}!"

Serve it with any ASGI server, or ``patmux run myapp:mux``.
"""

__version__ = "0.1.0"
__all__ = [
    "Captures",
    "ConfigurationError",
    "HTTPError",
    "Handler",
    "HandlerFunc",
    "MuxConfig",
    "NotFound",
    "PatmuxError",
    "Redirect",
    "RedirectHandler",
    "Request",
    "Response",
    "ServeMux",
    "clean_path",
    "extract_captures",
    "matches",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import patmux`` fast while providing a clean top-level API.
    """
    if name == "ServeMux":
        from patmux.routing.mux import ServeMux

        return ServeMux

    if name == "MuxConfig":
        from patmux.config import MuxConfig

        return MuxConfig

    if name == "Request":
        from patmux.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from patmux.http import response

        return getattr(response, name)

    if name in ("Handler", "HandlerFunc", "RedirectHandler"):
        from patmux.routing import handlers

        return getattr(handlers, name)

    if name == "Captures":
        from patmux.routing.captures import Captures

        return Captures

    if name in ("matches", "extract_captures"):
        from patmux.routing import pattern

        return getattr(pattern, name)

    if name == "clean_path":
        from patmux.routing.paths import clean_path

        return clean_path

    if name in ("PatmuxError", "ConfigurationError", "HTTPError", "NotFound"):
        from patmux import errors

        return getattr(errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
