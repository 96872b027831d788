"""Development server.

Starts a pounce ASGI server with the live signpost App object.
Single worker; reload only when the app runs in debug mode.
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_dirs: tuple[str, ...] = (),
    app_path: str | None = None,
    log_level: str = "info",
) -> None:
    """Start a pounce server with the given signpost App.

    Args:
        app: ASGI callable (signpost App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        reload_dirs: Extra directories to watch alongside cwd.
        app_path: Optional ``"module:attribute"`` import string.  When
            provided, pounce reimports the app on each reload cycle so
            that code changes on disk take effect immediately.
        log_level: Server log level (debug, info, warning, error, critical).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_dirs=reload_dirs,
        log_level=log_level,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
