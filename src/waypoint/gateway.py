"""Gateway — the ASGI application that serves a route table.

Resolves every request against an immutable ``RouteTable`` and either
forwards it to the matched backend or answers with a distinguishable
error. Routing misses, unreachable backends and backend timeouts each
get their own status and ``x-waypoint-error`` code.
"""

import logging

import httpx

from waypoint._internal.asgi import HTTPScope, Receive, Scope, Send
from waypoint.config import GatewayConfig
from waypoint.errors import HTTPError, NoRouteError
from waypoint.http.response import Response, StreamingResponse
from waypoint.routing.route import NoRouteMatched
from waypoint.routing.table import RouteTable
from waypoint.server.errors import handle_http_error, handle_internal_error
from waypoint.server.proxy import create_client, forward, read_body
from waypoint.server.sender import send_response, send_streaming_response

logger = logging.getLogger("waypoint.gateway")


class Gateway:
    """ASGI 3.0 gateway over a fixed route table.

    Usage::

        table, config = load_file("routes.yaml")
        app = Gateway(table, config)

    ``transport`` replaces httpx's network transport, which is how tests
    stand in for real backends.
    """

    __slots__ = ("_client", "_transport", "config", "table")

    def __init__(
        self,
        table: RouteTable,
        config: GatewayConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.table = table
        self.config = config or GatewayConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return
        await self.handle_request(scope, receive, send)

    async def handle_request(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process a single HTTP request through resolve and forward."""
        request = HTTPScope.from_scope(scope)
        response: Response | StreamingResponse

        try:
            decision = self.table.resolve(request.path)
            if isinstance(decision, NoRouteMatched):
                raise NoRouteError(
                    decision.path, decision.hints, status=self.config.no_route_status
                )
            body = await read_body(receive)
            response = await forward(self.client, request, decision, body, self.config)
        except HTTPError as exc:
            response = handle_http_error(exc, request)
        except Exception as exc:
            response = handle_internal_error(exc, request)

        if isinstance(response, StreamingResponse):
            await send_streaming_response(response, send)
        else:
            await send_response(response, send)

    @property
    def client(self) -> httpx.AsyncClient:
        """Shared backend client, created on first use outside lifespan."""
        if self._client is None:
            self._client = create_client(self.config, transport=self._transport)
        return self._client

    async def startup(self) -> None:
        self._client = create_client(self.config, transport=self._transport)
        logger.info("Gateway serving %d routes", len(self.table))
        for route in self.table:
            logger.debug("  %s", route.describe())

    async def shutdown(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Opens the backend client at startup and closes it at shutdown,
        signalling completion back to the server.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return
