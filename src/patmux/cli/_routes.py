"""``patmux routes`` — list registered patterns."""

import argparse
import sys

from patmux.cli._resolve import resolve_mux
from patmux.routing.handlers import HandlerFunc, RedirectHandler
from patmux.routing.mux import MuxEntry


def describe_handler(entry: MuxEntry) -> str:
    """Human-readable name for the handler of *entry*."""
    handler = entry.handler
    if isinstance(handler, RedirectHandler):
        return f"redirect {handler.status} -> {handler.url}"
    if isinstance(handler, HandlerFunc):
        return getattr(handler.func, "__name__", repr(handler.func))
    return type(handler).__name__


def run_routes(args: argparse.Namespace) -> None:
    """Print a PATTERN / KIND / HANDLER table for the mux named by ``args.app``."""
    try:
        mux = resolve_mux(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    entries = mux.routes
    if not entries:
        print("No routes registered.")
        return

    rows = [
        (entry.pattern, type(entry.compiled).__name__.lower(), describe_handler(entry))
        for entry in entries
    ]

    max_pattern = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    max_kind = max(max(len(r[1]) for r in rows), 4)  # "KIND" header

    fmt = f"{{:<{max_pattern}}}  {{:<{max_kind}}}  {{}}"
    print(fmt.format("PATTERN", "KIND", "HANDLER"))
    sep_len = max_pattern + max_kind + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for pattern, kind, handler_name in rows:
        print(fmt.format(pattern, kind, handler_name))
