"""Ordered router with first-match path matching.

Routes are registered during setup and kept in registration order.
Matching scans the routes for the request method and the first route whose
pattern fits the path wins. The table is read-only once frozen, so
``match`` and ``dispatch`` can run on many threads without locking.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from signpost.errors import ConfigurationError, NotFoundError
from signpost.routing.params import CONVERTERS, param_matches
from signpost.routing.route import PathSegment, Route, RouteMatch

if TYPE_CHECKING:
    from signpost.http.response import Response

logger = logging.getLogger("signpost.routing")

HTTP_METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"})


def split_path(path: str) -> list[str]:
    """Split a request path into segments.

    Empty parts are dropped, so ``/`` is ``[]`` and a trailing slash is
    ignored. ``//`` never yields an empty segment either.
    """
    return [part for part in path.split("/") if part]


def _parse_placeholder(part: str, pattern: str) -> PathSegment:
    if part.startswith(":"):
        param_name, param_type = part[1:], "str"
    else:
        inner = part[1:-1]
        if ":" in inner:
            param_name, param_type = inner.split(":", 1)
        else:
            param_name, param_type = inner, "str"

    if not param_name.isidentifier():
        msg = f"Invalid parameter name {param_name!r} in route pattern {pattern!r}."
        raise ConfigurationError(msg)
    if param_type not in CONVERTERS:
        known = ", ".join(sorted(CONVERTERS))
        msg = (
            f"Unknown converter {param_type!r} in route pattern {pattern!r}. "
            f"Known converters: {known}."
        )
        raise ConfigurationError(msg)
    return PathSegment(value=part, is_param=True, param_name=param_name, param_type=param_type)


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a route pattern string into segments.

    Examples::

        "/"               -> []
        "/name"           -> [PathSegment("name")]
        "/name/:name"     -> [PathSegment("name"), PathSegment(":name", is_param=True, ...)]
        "/name/{name}"    -> same binding as ":name"
        "/users/{id:int}" -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]

    Raises ``ConfigurationError`` for malformed placeholders.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in split_path(pattern):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route pattern {pattern!r} uses <param> syntax. "
                "Use :param or {param} instead."
            )
            raise ConfigurationError(msg)
        if part.startswith(":") or (part.startswith("{") and part.endswith("}")):
            segment = _parse_placeholder(part, pattern)
            assert segment.param_name is not None
            if segment.param_name in seen:
                msg = f"Duplicate parameter {segment.param_name!r} in route pattern {pattern!r}."
                raise ConfigurationError(msg)
            seen.add(segment.param_name)
            segments.append(segment)
        else:
            segments.append(PathSegment(value=part))
    return segments


def _match_segments(segments: tuple[PathSegment, ...], parts: list[str]) -> dict[str, str] | None:
    """Segment-wise match. Returns bound parameters, or None."""
    if len(segments) != len(parts):
        return None
    params: dict[str, str] = {}
    for seg, part in zip(segments, parts, strict=True):
        if seg.is_param:
            if not param_matches(part, seg.param_type):
                return None
            params[seg.param_name or ""] = part
        elif seg.value != part:
            return None
    return params


class Router:
    """Route table with first-match dispatch.

    Usage::

        router = Router()
        router.register("GET", "/name/:name", greet)
        router.register("POST", "/name", greet_json, json=True)
        router.freeze()
        response = router.dispatch("GET", "/name/Alice")

    Registration order is the tie-break: when two patterns can match the
    same path, the one registered first wins.
    """

    __slots__ = ("_by_method", "_debug", "_error_handlers", "_frozen", "_keys", "_routes")

    def __init__(
        self,
        *,
        error_handlers: Mapping[int | type, Callable[..., Any]] | None = None,
        debug: bool = False,
    ) -> None:
        self._routes: list[Route] = []
        self._by_method: dict[str, list[Route]] = {}
        self._keys: set[tuple[str, str]] = set()
        self._error_handlers: dict[int | type, Callable[..., Any]] = dict(error_handlers or {})
        self._debug = debug
        self._frozen = False

    # -- Setup phase --

    def register(
        self,
        method: str,
        pattern: str,
        handler: Callable[..., Any],
        *,
        json: bool = False,
        name: str | None = None,
    ) -> Route:
        """Parse *pattern* and add a route for *method*.

        Raises ``ConfigurationError`` if the (method, pattern) pair is
        already registered, the pattern is malformed, or the router is frozen.
        """
        route = Route(
            path=pattern,
            method=method.upper(),
            handler=handler,
            consumes_json=json,
            name=name,
        )
        return self.add(route)

    def add(self, route: Route) -> Route:
        """Add a route and return it with its parsed segments.

        Must be called before freeze().
        """
        if self._frozen:
            msg = "Cannot add routes after the router is frozen."
            raise ConfigurationError(msg)
        if route.method not in HTTP_METHODS:
            msg = f"Unsupported HTTP method {route.method!r} for route {route.path!r}."
            raise ConfigurationError(msg)
        if inspect.iscoroutinefunction(route.handler):
            msg = (
                f"Handler {route.handler_name!r} for {route.method} {route.path} is async. "
                "Route handlers run synchronously; use a plain def."
            )
            raise ConfigurationError(msg)

        segments = tuple(parse_pattern(route.path))
        if segments != route.segments:
            route = replace(route, segments=segments)

        key = (route.method, route.pattern)
        if key in self._keys:
            msg = f"Route {route.method} {route.pattern} is already registered."
            raise ConfigurationError(msg)

        shape = [seg.shape for seg in route.segments]
        for existing in self._by_method.get(route.method, ()):
            if [seg.shape for seg in existing.segments] == shape:
                logger.warning(
                    "Route %s %s is shadowed by %s %s and will never match",
                    route.method,
                    route.path,
                    existing.method,
                    existing.path,
                )
                break

        self._keys.add(key)
        self._routes.append(route)
        self._by_method.setdefault(route.method, []).append(route)
        return route

    def add_error_handler(self, key: int | type, handler: Callable[..., Any]) -> None:
        if self._frozen:
            msg = "Cannot add error handlers after the router is frozen."
            raise ConfigurationError(msg)
        self._error_handlers[key] = handler

    def freeze(self) -> None:
        """End the setup phase. No more routes can be added."""
        self._frozen = True

    # -- Introspection --

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    @property
    def error_handlers(self) -> Mapping[int | type, Callable[..., Any]]:
        return self._error_handlers

    def __len__(self) -> int:
        return len(self._routes)

    # -- Runtime --

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the route table.

        Returns the ``RouteMatch`` of the first route (in registration order)
        whose pattern fits. Raises ``NotFoundError`` otherwise.
        """
        method = method.upper()
        parts = split_path(path)
        for route in self._by_method.get(method, ()):
            params = _match_segments(route.segments, parts)
            if params is not None:
                return RouteMatch(route=route, path_params=params)
        raise NotFoundError(f"No route matches {method} {path!r}")

    def dispatch(
        self,
        method: str,
        path: str,
        query_string: str | bytes = b"",
        body: bytes | None = b"",
        *,
        headers: tuple[tuple[bytes, bytes], ...] = (),
    ) -> Response:
        """Match, invoke the handler, and return its Response.

        Never raises for per-request failures: unmatched paths become 404,
        malformed JSON bodies 400, handler exceptions 500.
        """
        from signpost.http.request import Request
        from signpost.server.handler import dispatch_request

        request = Request.build(method, path, query_string, body or b"", headers)
        return dispatch_request(
            request,
            router=self,
            error_handlers=self._error_handlers,
            debug=self._debug,
        )
