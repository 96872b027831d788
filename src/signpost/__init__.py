"""Signpost — first-match HTTP routing with an ASGI front door.

Routes are matched in registration order against fully buffered requests.
Handlers are plain synchronous functions that return their response.

Basic usage::

    from signpost import App

    app = App()

    @app.get("/name/:name")
    def greet(name: str):
        return f"Hello, {name}!"

    @app.post("/name", json=True)
    def greet_json(body):
        return f"Hello, {body['name']}!"

    app.run()

Without an app or server::

    from signpost import Router

    router = Router()
    router.register("GET", "/json", lambda: {"hello": "JSON"})
    router.freeze()
    response = router.dispatch("GET", "/json")
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "MalformedBodyError",
    "NotFoundError",
    "QueryParams",
    "Request",
    "Response",
    "Route",
    "Router",
    "SignpostError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import signpost`` fast while providing a clean top-level API.
    """
    if name == "App":
        from signpost.app import App

        return App

    if name == "AppConfig":
        from signpost.config import AppConfig

        return AppConfig

    if name == "Request":
        from signpost.http.request import Request

        return Request

    if name == "Response":
        from signpost.http.response import Response

        return Response

    if name == "QueryParams":
        from signpost.http.query import QueryParams

        return QueryParams

    if name in ("Route", "Router"):
        from signpost import routing as _routing

        return getattr(_routing, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MalformedBodyError",
        "NotFoundError",
        "SignpostError",
    ):
        from signpost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
