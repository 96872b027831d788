"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:  ``/users``    (is_param=False)
    Param:    ``/:id``      (is_param=True, param_name="id")
    Param:    ``/{id}``     (is_param=True, param_name="id")
    Typed:    ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"

    @property
    def key(self) -> str:
        """Canonical form used to compare patterns (``:id`` == ``{id}``)."""
        if not self.is_param:
            return self.value
        if self.param_type == "str":
            return f"{{{self.param_name}}}"
        return f"{{{self.param_name}:{self.param_type}}}"

    @property
    def shape(self) -> str:
        """Pattern key with the parameter name erased."""
        if not self.is_param:
            return self.value
        return f"{{:{self.param_type}}}"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created once during setup and kept for the life of the router.
    """

    path: str
    method: str
    handler: Callable[..., Any]
    segments: tuple[PathSegment, ...] = ()
    consumes_json: bool = False
    name: str | None = None

    @property
    def pattern(self) -> str:
        """Normalised pattern string, e.g. ``/name/{name}``."""
        return "/" + "/".join(seg.key for seg in self.segments)

    @property
    def handler_name(self) -> str:
        return getattr(self.handler, "__name__", repr(self.handler))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
