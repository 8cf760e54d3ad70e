"""Immutable route table with longest-prefix matching.

The table is validated and ordered once, when it is built. Resolving a
path afterwards is a read-only scan, so one table can be shared by any
number of concurrent request handlers.
"""

from collections.abc import Iterable, Iterator

from waypoint.errors import InvalidRouteConfig, NoRouteError
from waypoint.routing.matching import matches, rewrite_path
from waypoint.routing.route import Backend, MatchMode, NoRouteMatched, Route, RoutingDecision

_FORBIDDEN_PATH_CHARS = frozenset("?# \t\r\n")


def validate_route(route: Route) -> None:
    """Raise ``InvalidRouteConfig`` if ``route`` cannot be served."""
    label = route.name or route.path or "<empty>"

    if not isinstance(route.path, str) or not route.path:
        msg = f"Route {label!r}: path must be a non-empty string"
        raise InvalidRouteConfig(msg)
    if not route.path.startswith("/"):
        msg = f"Route {label!r}: path {route.path!r} must start with '/'"
        raise InvalidRouteConfig(msg)
    if _FORBIDDEN_PATH_CHARS.intersection(route.path):
        msg = f"Route {label!r}: path {route.path!r} contains whitespace, '?' or '#'"
        raise InvalidRouteConfig(msg)

    if not isinstance(route.mode, MatchMode):
        msg = f"Route {label!r}: unknown match mode {route.mode!r}"
        raise InvalidRouteConfig(msg)

    target = route.rewrite_target
    if target is not None and (not isinstance(target, str) or not target.startswith("/")):
        msg = f"Route {label!r}: rewrite target {target!r} must start with '/'"
        raise InvalidRouteConfig(msg)

    _validate_backend(label, route.backend)


def _validate_backend(label: str, backend: Backend) -> None:
    host = backend.host
    if not isinstance(host, str) or not host or any(c in host for c in "/ \t"):
        msg = f"Route {label!r}: invalid backend host {host!r}"
        raise InvalidRouteConfig(msg)
    port = backend.port
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        msg = f"Route {label!r}: backend port {port!r} must be an integer in 1..65535"
        raise InvalidRouteConfig(msg)


class RouteTable:
    """Ordered, validated, immutable collection of routes.

    Usage::

        table = RouteTable([
            Route("/", Backend("web", 8000)),
            Route("/api/", Backend("api", 8000), rewrite_target="/"),
        ])
        decision = table.resolve("/api/items")

    Among matching routes the longest path wins; equal lengths fall
    back to registration order.
    """

    __slots__ = ("_by_specificity", "_routes")

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        ordered = tuple(routes)
        seen: dict[tuple[str, MatchMode], Route] = {}
        for route in ordered:
            validate_route(route)
            key = (route.path, route.mode)
            if key in seen:
                msg = (
                    f"Duplicate {route.mode} route for {route.path!r}: "
                    f"{seen[key].describe()} and {route.describe()}"
                )
                raise InvalidRouteConfig(msg)
            seen[key] = route

        self._routes = ordered
        # sorted() is stable, so ties keep registration order.
        self._by_specificity = tuple(sorted(ordered, key=lambda r: -len(r.path)))

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_by_specificity"):
            msg = "RouteTable is immutable; build a new table instead."
            raise AttributeError(msg)
        object.__setattr__(self, name, value)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All routes in registration order."""
        return self._routes

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({len(self._routes)} routes)"

    def resolve(self, path: str) -> RoutingDecision | NoRouteMatched:
        """Select the best route for ``path``.

        Returns a ``RoutingDecision`` on success and a ``NoRouteMatched``
        value (falsy) otherwise. Never raises for an unmatched path.

        A non-empty path without a leading "/" is read as if it had one,
        so Prefix "/" really does catch every path.
        """
        if path and not path.startswith("/"):
            path = "/" + path
        for route in self._by_specificity:
            if matches(route, path):
                effective = rewrite_path(route, path)
                return RoutingDecision(
                    route=route,
                    effective_path=effective,
                    backend_url=route.backend.url(effective),
                )
        return NoRouteMatched(path=path, hints=self._near_misses(path))

    def match(self, path: str) -> RoutingDecision:
        """Like ``resolve()`` but raises ``NoRouteError`` on a miss."""
        result = self.resolve(path)
        if isinstance(result, NoRouteMatched):
            raise NoRouteError(result.path, result.hints)
        return result

    def _near_misses(self, path: str) -> tuple[str, ...]:
        """Explain which routes would have matched with a different mode."""
        hints: list[str] = []
        for route in self._routes:
            if route.mode is MatchMode.EXACT:
                as_prefix = Route(route.path, route.backend, MatchMode.PREFIX)
                if matches(as_prefix, path):
                    hints.append(
                        f"Exact route {route.path!r} only matches {route.path!r} itself; "
                        f"use Prefix to also match {path!r}"
                    )
            elif route.path.endswith("/") and path == route.path.rstrip("/"):
                hints.append(
                    f"Prefix route {route.path!r} requires the trailing slash; "
                    f"{path!r} has none"
                )
        return tuple(hints)


def resolve(path: str, table: RouteTable) -> RoutingDecision | NoRouteMatched:
    """Resolve ``path`` against ``table``. See ``RouteTable.resolve``."""
    return table.resolve(path)
