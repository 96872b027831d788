"""Routing — ordered route table with first-match dispatch.

Routes are registered during setup and the table becomes read-only when
the router freezes.
"""

from signpost.routing.route import PathSegment, Route, RouteMatch
from signpost.routing.router import Router, parse_pattern

__all__ = ["PathSegment", "Route", "RouteMatch", "Router", "parse_pattern"]
