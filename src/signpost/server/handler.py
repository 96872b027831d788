"""Request handling — the synchronous dispatch pipeline and its ASGI adapter.

``dispatch_request`` is what ``Router.dispatch`` runs: match, parse the
JSON body if the route asks for it, call the handler, negotiate the return
value. ``handle_request`` is the only component that touches raw ASGI: it
buffers the body, runs the dispatch pipeline on a worker thread and sends the
Response back through ``send()``.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

import anyio.to_thread

from signpost._internal.asgi import ClientDisconnected, Receive, Scope, Send, read_body
from signpost.errors import HTTPError
from signpost.http.request import Request, parse_json_body
from signpost.http.response import Response
from signpost.routing.params import convert_param
from signpost.routing.route import RouteMatch
from signpost.server.errors import handle_http_error, handle_internal_error
from signpost.server.negotiation import negotiate
from signpost.server.sender import send_response

if TYPE_CHECKING:
    from signpost.routing.router import Router

logger = logging.getLogger("signpost.server")


def dispatch_request(
    request: Request,
    *,
    router: Router,
    error_handlers: Mapping[int | type, Callable[..., Any]],
    debug: bool = False,
) -> Response:
    """Process one fully buffered request. Never raises."""
    try:
        match = router.match(request.method, request.path)
        return _invoke_handler(match, request)
    except HTTPError as exc:
        return handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        return handle_internal_error(exc, request, error_handlers, debug)


def _invoke_handler(match: RouteMatch, request: Request) -> Response:
    """Bind the match to the request, call the handler, negotiate its result."""
    route = match.route

    if route.consumes_json and request.body:
        request = request.with_match(match, json_body=parse_json_body(request.body))
    else:
        request = request.with_match(match)

    kwargs = _build_handler_kwargs(route.handler, request)
    return negotiate(route.handler(**kwargs))


def _build_handler_kwargs(handler: Callable[..., Any], request: Request) -> dict[str, Any]:
    """Inspect handler signature and build kwargs from the request.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters (by name, with annotation-driven conversion)
    3. ``body`` parameter — the parsed JSON body
    4. ``query`` parameter — the ``QueryParams`` mapping
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in request.path_params:
            value = request.path_params[name]
            annotation = param.annotation
            if annotation in (int, float):
                try:
                    kwargs[name] = convert_param(value, annotation.__name__)
                except ValueError:
                    kwargs[name] = value
            else:
                kwargs[name] = value
        elif name == "body":
            kwargs[name] = request.json_body
        elif name == "query":
            kwargs[name] = request.query

    return kwargs


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    max_content_length: int | None = None,
) -> None:
    """Process a single ASGI HTTP request through the router."""
    if scope["type"] != "http":
        return

    request = Request.build(
        scope["method"],
        scope["path"],
        scope.get("query_string", b""),
        b"",
        tuple(scope.get("headers", ())),
    )

    try:
        body = await read_body(receive, max_content_length)
    except ClientDisconnected:
        logger.debug("Client disconnected during %s %s", request.method, request.path)
        return
    except HTTPError as exc:
        response = handle_http_error(exc, request, router.error_handlers)
    else:
        # The router is synchronous and read-only; run it off the event loop
        response = await anyio.to_thread.run_sync(
            partial(
                router.dispatch,
                request.method,
                request.path,
                request.query.raw,
                body,
                headers=request.headers.raw,
            )
        )

    await send_response(response, send)
