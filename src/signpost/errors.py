"""Signpost exception hierarchy.

Shared across Router, App, handler, and the ASGI adapter so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class SignpostError(Exception):
    """Base for all signpost-specific errors."""


class ConfigurationError(SignpostError):
    """Raised when routes or app configuration are invalid.

    Raised during registration and at freeze time. Fatal at startup.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SignpostError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, the transport, or handlers. ``dispatch`` catches
    these and turns them into a ``Response``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFoundError(HTTPError):
    """404 — no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MalformedBodyError(HTTPError):
    """400 — a JSON body was required but could not be parsed."""

    def __init__(self, detail: str = "Malformed JSON body") -> None:
        super().__init__(status=400, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """413 — request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")
