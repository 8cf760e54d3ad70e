"""Path comparison and rewriting for a single route.

Both functions are pure; the route table calls them for every
candidate route.
"""

from waypoint.routing.route import MatchMode, Route


def matches(route: Route, path: str) -> bool:
    """Whether ``route`` accepts the request ``path``.

    Exact routes need an identical string. Prefix routes need the
    prefix to end on a segment boundary::

        Prefix /api   matches /api, /api/, /api/items  but not /apis
        Prefix /api/  matches /api/, /api/items        but not /api
        Prefix /      matches everything that starts with "/"

    ``RouteTable.resolve`` adds a missing leading "/" before calling this.
    """
    if route.mode is MatchMode.EXACT:
        return path == route.path

    prefix = route.path
    if not path.startswith(prefix):
        return False
    if prefix.endswith("/") or len(path) == len(prefix):
        return True
    return path[len(prefix)] == "/"


def rewrite_path(route: Route, path: str) -> str:
    """Compute the path forwarded to the backend for a matched ``path``.

    The matched prefix is replaced with the rewrite target and the
    remainder is kept. Without a rewrite target the path is unchanged.
    """
    target = route.rewrite_target
    if target is None:
        return path

    rest = path[len(route.path) :]
    # "/api" -> "/" on "/api/items" must give "/items", not "//items".
    if target.endswith("/") and rest.startswith("/") and not route.path.endswith("/"):
        rest = rest[1:]
    return target + rest
