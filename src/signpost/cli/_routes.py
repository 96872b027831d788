"""``signpost routes`` — list registered routes.

Resolves an import string to a signpost App and prints all registered
routes in match order with method, path, and handler info.
"""

import argparse
import sys

from signpost.cli._resolve import resolve_app
from signpost.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a signpost app.

    Resolves ``args.app`` to an App instance, freezes it, and prints
    a table of METHOD, PATH, and handler name.
    """
    try:
        app = resolve_app(args.app)
        router = app.router
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        handler_name = route.handler_name
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        if route.consumes_json:
            handler_name = f"{handler_name} [json]"
        rows.append((route.method, route.path, handler_name))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))
