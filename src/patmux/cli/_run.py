"""``patmux run`` — development server command."""

import argparse
import sys

from patmux.cli._resolve import resolve_mux


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` to a mux and serve it with pounce.

    CLI flags override the mux's ``MuxConfig``.
    """
    try:
        mux = resolve_mux(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from patmux.server.dev import run_dev_server

    run_dev_server(
        mux,
        args.host or mux.config.host,
        args.port or mux.config.port,
        reload=mux.config.reload and not args.no_reload,
        log_level=mux.config.log_level,
        app_path=args.app,
    )
