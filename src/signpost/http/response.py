"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. A handler builds its own
response and hands it back; nothing is shared between requests.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def json(cls, data: Any, status: int = 200) -> Response:
        """Compact JSON response, e.g. ``{"hello":"JSON"}``."""
        body = json_module.dumps(data, separators=(",", ":"), default=str)
        return cls(body=body, status=status, content_type=JSON_CONTENT_TYPE)

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items())
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Header access --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive lookup; ``content-type`` included."""
        key = name.lower()
        if key == "content-type":
            return self.content_type
        for header_name, value in self.headers:
            if header_name.lower() == key:
                return value
        return default

    @property
    def header_map(self) -> dict[str, str]:
        """All headers as a lower-cased ``dict``, last value wins."""
        result = {"content-type": self.content_type}
        for name, value in self.headers:
            result[name.lower()] = value
        return result

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
