"""Immutable HTTP request.

Frozen metadata plus a fully buffered body. The transport reads the whole
body before the router sees the request, so nothing here blocks.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from signpost.errors import MalformedBodyError
from signpost.http.headers import Headers
from signpost.http.query import QueryParams

if TYPE_CHECKING:
    from signpost.routing.route import RouteMatch

_UNPARSED: Any = object()


def parse_json_body(raw: bytes) -> Any:
    """Decode a JSON body, raising ``MalformedBodyError`` on failure."""
    try:
        return json_module.loads(raw)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise MalformedBodyError(f"Malformed JSON body: {exc}") from exc


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` is empty until the router binds a match.
    ``json_body`` holds the parsed body for routes declared with
    ``json=True``; it is ``None`` when the body was empty.
    """

    method: str
    path: str
    query: QueryParams
    path_params: dict[str, str]
    headers: Headers
    body: bytes = b""
    json_body: Any = None

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw}"
        return self.path

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """The body as JSON.

        Returns the value already parsed by the router when the route
        declared ``json=True``; otherwise parses the raw body.

        Raises:
            MalformedBodyError: If the body is not valid JSON.
        """
        if self.json_body is not None:
            return self.json_body
        return parse_json_body(self.body)

    # -- Factory --

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        query_string: str | bytes = b"",
        body: bytes = b"",
        headers: tuple[tuple[bytes, bytes], ...] | Headers = (),
    ) -> Request:
        """Create a Request from already-buffered transport data."""
        return cls(
            method=method.upper(),
            path=path or "/",
            query=QueryParams(query_string),
            path_params={},
            headers=headers if isinstance(headers, Headers) else Headers(headers),
            body=body,
        )

    def with_match(self, match: RouteMatch, json_body: Any = _UNPARSED) -> Request:
        """Return a copy with the bound path parameters (and parsed body)."""
        if json_body is _UNPARSED:
            return replace(self, path_params=dict(match.path_params))
        return replace(self, path_params=dict(match.path_params), json_body=json_body)
