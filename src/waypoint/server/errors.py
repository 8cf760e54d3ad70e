"""Error replies for gateway requests.

Maps HTTPError exceptions and unexpected failures to Response objects.
Every reply carries ``x-waypoint-error`` so clients and operators can
tell a routing miss from a backend failure at a glance.
"""

import logging

from waypoint._internal.asgi import HTTPScope
from waypoint.errors import HTTPError, NoRouteError
from waypoint.http.response import Response

logger = logging.getLogger("waypoint.gateway")

ERROR_HEADER = "x-waypoint-error"

_ERROR_NAMES = {
    "no-route": "no_route",
    "backend-unreachable": "backend_unreachable",
    "backend-timeout": "backend_timeout",
}


def handle_http_error(exc: HTTPError, request: HTTPScope) -> Response:
    """Map an HTTPError to a JSON Response."""
    payload: dict[str, object] = {
        "error": _ERROR_NAMES.get(exc.code, exc.code or "http_error"),
        "status": exc.status,
        "detail": exc.detail,
    }
    if isinstance(exc, NoRouteError):
        logger.warning(
            "No route for %s %s%s",
            request.method,
            request.path,
            "".join(f"\n  hint: {hint}" for hint in exc.hints),
        )
        payload["path"] = exc.path
        payload["hints"] = list(exc.hints)
    else:
        logger.error("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    resp = Response.json(payload, status=exc.status)
    if exc.code:
        resp = resp.with_header(ERROR_HEADER, exc.code)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: HTTPScope) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path, exc_info=exc)
    return Response.json(
        {"error": "internal_error", "status": 500, "detail": "Internal Server Error"},
        status=500,
    ).with_header(ERROR_HEADER, "internal")
