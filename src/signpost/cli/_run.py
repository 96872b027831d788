"""``signpost run`` — development server command."""

import argparse
import sys

from signpost.cli._resolve import resolve_app
from signpost.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it with pounce.

    CLI flags override ``AppConfig.host`` and ``AppConfig.port``.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        app._ensure_frozen()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from signpost.server.dev import run_dev_server

    run_dev_server(
        app,
        args.host if args.host is not None else app.config.host,
        args.port if args.port is not None else app.config.port,
        reload=app.config.debug,
        reload_dirs=app.config.reload_dirs,
        app_path=args.app,
        log_level=app.config.log_level,
    )
