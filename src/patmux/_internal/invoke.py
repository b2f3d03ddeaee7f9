"""Invoke helpers — call sync or async handlers uniformly.

Handlers registered on a mux can be ``def`` or ``async def``. Anything
that calls user code goes through ``invoke`` so the sync/async check
lives in exactly one place::

    result = await invoke(handler.serve, request)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
