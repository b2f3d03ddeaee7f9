"""patmux CLI — route listing and a development server.

Entry point registered as ``patmux`` in ``pyproject.toml``::

    [project.scripts]
    patmux = "patmux.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``patmux`` command."""
    parser = argparse.ArgumentParser(
        prog="patmux",
        description="patmux — an HTTP request multiplexer with pattern captures.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- patmux routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered patterns")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:mux)")

    # -- patmux run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the development server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:mux)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable restart on file changes",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from patmux.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from patmux.cli._run import run_server

        run_server(args)
