"""Waypoint — path-based HTTP routing for ingress-style gateways.

Routes pick a backend by request path, the way an Ingress does with
``pathType: Exact`` / ``Prefix`` and a rewrite target.

Resolving paths::

    from waypoint import Backend, MatchMode, Route, RouteTable

    table = RouteTable([
        Route("/", Backend("notes-svc", 8000)),
        Route("/api/", Backend("api-svc", 8000), rewrite_target="/"),
    ])
    decision = table.resolve("/api/items")
    decision.effective_path   # "/items"

Serving a route file::

    from waypoint import Gateway, load_file

    table, config = load_file("routes.yaml")
    app = Gateway(table, config)   # ASGI application
"""

__version__ = "0.1.0"
__all__ = [
    "Backend",
    "Gateway",
    "GatewayConfig",
    "HTTPError",
    "InvalidRouteConfig",
    "MatchMode",
    "NoRouteError",
    "NoRouteMatched",
    "Route",
    "RouteTable",
    "RoutingDecision",
    "WaypointError",
    "load_file",
    "resolve",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name in (
        "Backend",
        "MatchMode",
        "NoRouteMatched",
        "Route",
        "RouteTable",
        "RoutingDecision",
        "resolve",
    ):
        from waypoint import routing as _routing

        return getattr(_routing, name)

    if name == "Gateway":
        from waypoint.gateway import Gateway

        return Gateway

    if name == "GatewayConfig":
        from waypoint.config import GatewayConfig

        return GatewayConfig

    if name == "load_file":
        from waypoint.loader import load_file

        return load_file

    if name in ("HTTPError", "InvalidRouteConfig", "NoRouteError", "WaypointError"):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
