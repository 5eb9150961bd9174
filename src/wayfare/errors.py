"""wayfare exception hierarchy.

Shared across Router, App, pipeline, and middleware so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class WayfareError(Exception):
    """Base for all wayfare-specific errors."""


class ConfigurationError(WayfareError):
    """Raised when the app is wired up incorrectly.

    Duplicate routes surface at registration or freeze time. A pipeline
    that finishes without producing a response surfaces per request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WayfareError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, or handlers. The pipeline catches
    these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
