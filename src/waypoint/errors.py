"""Waypoint exception hierarchy.

Shared across the route table, loader, and gateway so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class InvalidRouteConfig(WaypointError):
    """Raised when a route or route file is invalid.

    Only ever raised while building a ``RouteTable`` or loading a route
    file, never while resolving a request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WaypointError):
    """An error that maps directly to an HTTP status code.

    ``code`` is sent back to the client in the ``x-waypoint-error``
    header so a routing miss can be told apart from a backend failure.
    """

    status: int
    detail: str = ""
    code: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NoRouteError(HTTPError):  # noqa: N818
    """No route matched the request path."""

    def __init__(
        self,
        path: str,
        hints: tuple[str, ...] = (),
        *,
        status: int = 404,
    ) -> None:
        super().__init__(status=status, detail=f"No route matches {path!r}", code="no-route")
        object.__setattr__(self, "path", path)
        object.__setattr__(self, "hints", hints)

    # Set in __init__; declared for type checkers.
    path: str
    hints: tuple[str, ...]


class BadGateway(HTTPError):  # noqa: N818
    """502 — a route matched but its backend could not be reached."""

    def __init__(self, detail: str = "Bad Gateway") -> None:
        super().__init__(status=502, detail=detail, code="backend-unreachable")


class GatewayTimeout(HTTPError):  # noqa: N818
    """504 — a route matched but its backend did not answer in time."""

    def __init__(self, detail: str = "Gateway Timeout") -> None:
        super().__init__(status=504, detail=detail, code="backend-timeout")
