"""Signpost application class.

Mutable during setup (route registration, error handlers, lifecycle hooks).
Frozen at runtime when ``app.run()``, ``app.router`` or ``__call__()`` is
first used.
"""

import inspect
import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from signpost._internal.asgi import Receive, Scope, Send
from signpost._internal.types import ErrorHandler, ErrorKey, Handler
from signpost.config import AppConfig
from signpost.errors import ConfigurationError
from signpost.http.response import Response
from signpost.routing.router import Router
from signpost.server.handler import handle_request

logger = logging.getLogger("signpost.app")


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    method: str
    json: bool
    name: str | None


class App:
    """The signpost application.

    Mutable during setup (route registration, error handlers, hooks).
    Frozen at runtime when the router is first needed.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the router. After that the router is read-only and
        requests dispatch concurrently without locking.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_pending_routes",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._error_handlers: dict[ErrorKey, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._router: Router | None = None

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: Iterable[str] | None = None,
        json: bool = False,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL path pattern. Use ``:param`` or ``{param}`` for path
                parameters, ``{param:int}`` for typed ones.
            methods: HTTP methods. Defaults to ``["GET"]``. One route is
                registered per method, in the order given.
            json: Parse the request body as JSON before calling the handler.
                Malformed bodies are answered with 400.
            name: Optional route name, shown by ``signpost routes``.
        """
        if isinstance(methods, str):
            methods = (methods,)

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            for method in methods or ("GET",):
                self._pending_routes.append(_PendingRoute(path, func, method.upper(), json, name))
            return func

        return decorator

    def get(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register a GET route."""
        return self.route(path, methods=("GET",), name=name)

    def post(
        self, path: str, *, json: bool = False, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """Register a POST route."""
        return self.route(path, methods=("POST",), json=json, name=name)

    def put(
        self, path: str, *, json: bool = False, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """Register a PUT route."""
        return self.route(path, methods=("PUT",), json=json, name=name)

    def patch(
        self, path: str, *, json: bool = False, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """Register a PATCH route."""
        return self.route(path, methods=("PATCH",), json=json, name=name)

    def delete(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register a DELETE route."""
        return self.route(path, methods=("DELETE",), name=name)

    # -- Error handlers --

    def error(self, code_or_exception: ErrorKey) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler for a status code or exception type.

        The handler may take zero, one (``request``) or two
        (``request``, ``exc``) arguments and returns anything a route
        handler may return::

            @app.error(404)
            def not_found(request):
                return f"Nothing at {request.path}"
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator.

        Hooks run in registration order during ASGI lifespan shutdown.
        """
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Runtime --

    @property
    def router(self) -> Router:
        """The compiled, read-only router. Freezes the app on first access."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    def dispatch(
        self,
        method: str,
        path: str,
        query_string: str | bytes = b"",
        body: bytes | None = b"",
        *,
        headers: tuple[tuple[bytes, bytes], ...] = (),
    ) -> Response:
        """Dispatch a fully buffered request without going through ASGI."""
        return self.router.dispatch(method, path, query_string, body, headers=headers)

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and start the pounce development server.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        router = self.router

        _host = host if host is not None else self.config.host
        _port = port if port is not None else self.config.port
        logger.info("Serving %d routes on http://%s:%d", len(router), _host, _port)

        from signpost.server.dev import run_dev_server

        run_dev_server(
            self,
            _host,
            _port,
            reload=self.config.debug,
            reload_dirs=self.config.reload_dirs,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to the
        request handler.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            router=self.router,
            max_content_length=self.config.max_content_length,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs registered startup/shutdown hooks and signals completion
        back to the server.
        """
        try:
            self._ensure_frozen()
        except ConfigurationError as exc:
            logger.error("Invalid route configuration: %s", exc)
            await receive()
            await send({"type": "lifespan.startup.failed", "message": str(exc)})
            return

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.run_startup_hooks()
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                await self.run_shutdown_hooks()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def run_startup_hooks(self) -> None:
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def run_shutdown_hooks(self) -> None:
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking.

        Multiple ASGI worker threads could call __call__() concurrently on
        the first request. This ensures exactly one thread compiles.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the pending routes into a frozen Router.

        MUST only be called while holding _freeze_lock. Raises
        ``ConfigurationError`` for duplicate or malformed routes, leaving the
        app unfrozen.
        """
        router = Router(error_handlers=self._error_handlers, debug=self.config.debug)
        for pending in self._pending_routes:
            router.register(
                pending.method,
                pending.path,
                pending.handler,
                json=pending.json,
                name=pending.name,
            )
        router.freeze()
        logger.debug("Compiled %d routes", len(router))

        self._router = router
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and error handlers before calling app.run()."
            )
            raise ConfigurationError(msg)
