"""Async test client for waypoint gateways.

Sends requests through the ASGI interface directly — no sockets — and
returns the same ``Response`` type the gateway uses for its own replies.
"""

from typing import Any
from urllib.parse import unquote

from waypoint.gateway import Gateway
from waypoint.http.response import Response


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for a ``Gateway``.

    Usage::

        async with TestClient(gateway) as client:
            response = await client.get("/api/items")
            assert response.status == 200

    Entering the context runs the gateway's startup (opening its backend
    client); leaving it runs shutdown.
    """

    __slots__ = ("client", "gateway")

    def __init__(self, gateway: Gateway, *, client: tuple[str, int] = ("127.0.0.1", 0)) -> None:
        self.gateway = gateway
        self.client = client

    async def __aenter__(self) -> "TestClient":
        await self.gateway.startup()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.gateway.shutdown()

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, headers=headers, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send an arbitrary request through the gateway."""
        # Split path and query string; servers hand apps the decoded path
        path_part, _, query_string = path.partition("?")

        raw_headers: list[tuple[bytes, bytes]] = [(b"host", b"testserver")]
        for name, value in (headers or {}).items():
            key = name.lower().encode("latin-1")
            if key == b"host":
                raw_headers = [h for h in raw_headers if h[0] != b"host"]
            raw_headers.append((key, value.encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "path": unquote(path_part),
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": self.client,
        }

        request_body = body or b""
        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.gateway(scope, receive, send)

        content_type = ""
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name_str = name_b.decode("latin-1")
            value_str = value_b.decode("latin-1")
            if name_str == "content-type":
                content_type = value_str
            elif name_str != "content-length":
                extra_headers.append((name_str, value_str))

        return Response(
            body=b"".join(response_body_parts),
            status=response_status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )
