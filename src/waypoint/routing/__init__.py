"""Routing — ordered route table with longest-prefix matching.

Routes are validated when the table is built; the table never changes
afterwards.
"""

from waypoint.routing.route import Backend, MatchMode, NoRouteMatched, Route, RoutingDecision
from waypoint.routing.table import RouteTable, resolve

__all__ = [
    "Backend",
    "MatchMode",
    "NoRouteMatched",
    "Route",
    "RouteTable",
    "RoutingDecision",
    "resolve",
]
