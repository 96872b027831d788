"""Turn a ``"module:attribute"`` string into a signpost App.

Used by ``signpost run`` and ``signpost routes``.
"""

import importlib

from signpost.app import App


def resolve_app(import_string: str) -> App:
    """Import *import_string* and return the App it names.

    ``"pkg.module:name"`` reads ``name`` from ``pkg.module``; a bare
    ``"pkg.module"`` reads ``app``. A callable that is not already an App
    is treated as a factory and called without arguments.

    Raises:
        ModuleNotFoundError: The module cannot be imported.
        AttributeError: The module has no such attribute.
        TypeError: The target is not an App, or its factory failed.
    """
    module_name, _, attr = import_string.partition(":")
    target = getattr(importlib.import_module(module_name), attr or "app")

    if not isinstance(target, App) and callable(target):
        try:
            target = target()
        except Exception as exc:
            msg = f"App factory {import_string!r} failed: {exc}"
            raise TypeError(msg) from exc

    if isinstance(target, App):
        return target
    msg = f"{import_string!r} is a {type(target).__name__}, not a signpost.App instance"
    raise TypeError(msg)
