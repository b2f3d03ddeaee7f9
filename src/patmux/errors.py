"""patmux exception hierarchy.

Shared across the mux, handlers, and the server pipeline so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class PatmuxError(Exception):
    """Base for all patmux-specific errors."""


class ConfigurationError(PatmuxError):
    """Raised when the route table would become inconsistent.

    Empty patterns, missing handlers and duplicate explicit registrations
    are programming mistakes; startup should not continue past them.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(PatmuxError):
    """An error that maps directly to an HTTP status code.

    Handlers raise it; the ASGI pipeline turns it into a response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: nothing is registered for the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
