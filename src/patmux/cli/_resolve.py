"""Mux import resolution — resolves ``"module:attribute"`` strings to ServeMux instances."""

import importlib

from patmux.routing.mux import ServeMux


def resolve_mux(import_string: str) -> ServeMux:
    """Resolve an import string to a ServeMux instance.

    Accepts ``"module:attribute"``; the attribute defaults to ``"mux"``.
    A callable that isn't a mux is treated as a factory and called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ServeMux.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "mux"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, ServeMux):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, ServeMux):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a patmux.ServeMux"
        raise TypeError(msg)

    return obj
