"""Mux configuration.

MuxConfig is a frozen dataclass, immutable after creation, with no string-key
dict lookups.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class MuxConfig:
    """Mux configuration. Immutable after creation.

    Override what you need::

        config = MuxConfig(redirect_status=308, port=3000)
    """

    # Routing
    redirect_status: int = 301  # Clean-path and /tree -> /tree/ redirects
    tunnel_methods: frozenset[str] = field(default_factory=lambda: frozenset({"CONNECT"}))

    # Server (used by ``patmux run``)
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = True
    log_level: str = "info"
