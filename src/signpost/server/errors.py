"""Error handling pipeline for signpost requests.

Maps HTTPError exceptions and unexpected failures to appropriate
Response objects, using registered error handlers or plain-text defaults.
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from signpost.errors import HTTPError
from signpost.http.request import Request
from signpost.http.response import Response
from signpost.server.negotiation import negotiate

logger = logging.getLogger("signpost.server")


def _find_handler(
    exc: BaseException,
    error_handlers: Mapping[int | type, Callable[..., Any]],
    status: int,
) -> Callable[..., Any] | None:
    """Look up by exception type (walking the MRO), then by status code."""
    for klass in type(exc).__mro__:
        handler = error_handlers.get(klass)
        if handler is not None:
            return handler
    return error_handlers.get(status)


def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: BaseException,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    return negotiate(result)


def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: Mapping[int | type, Callable[..., Any]],
    debug: bool = False,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    handler = _find_handler(exc, error_handlers, exc.status)
    if handler is not None:
        try:
            response = call_error_handler(handler, request, exc)
        except Exception:
            logger.exception("Error handler for %d raised", exc.status)
        else:
            # Keep the exception's status unless the handler chose its own
            if response.status == 200:
                response = response.with_status(exc.status)
            return response

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail, content_type="text/plain; charset=utf-8").with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: Mapping[int | type, Callable[..., Any]],
    debug: bool = False,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = _find_handler(exc, error_handlers, 500)
    if handler is not None:
        try:
            response = call_error_handler(handler, request, exc)
        except Exception:
            logger.exception("Error handler for 500 raised")
        else:
            if response.status == 200:
                response = response.with_status(500)
            return response

    body = "Internal Server Error"
    if debug:
        body = f"{body}\n\n{type(exc).__name__}: {exc}"
    return Response(body=body, status=500, content_type="text/plain; charset=utf-8")
