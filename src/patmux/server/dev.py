"""Development server.

Starts a pounce ASGI server with a live ServeMux object.
"""

from __future__ import annotations


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = True,
    log_level: str = "info",
    app_path: str | None = None,
) -> None:
    """Start a single-worker pounce server for *app*.

    Pounce's ``run()`` takes an import string, but we hold a live mux, so
    ``pounce.Server`` is used directly with the ASGI callable.

    Args:
        app: ASGI callable (a ServeMux).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes.
        log_level: Server log level (``"debug"`` shows routing decisions).
        app_path: Optional ``"module:attribute"`` import string; when given,
            pounce reimports the mux on each reload so route changes on disk
            take effect.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
