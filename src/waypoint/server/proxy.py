"""Forward a routed request to its backend with httpx.

One attempt per request, bounded by the client's timeouts. Transport
failures become ``BadGateway`` / ``GatewayTimeout`` so the gateway can
report them distinctly from a routing miss.
"""

import logging
import uuid
from collections.abc import AsyncGenerator
from urllib.parse import quote, unquote_to_bytes

import httpx

from waypoint._internal.asgi import HTTPScope, Receive
from waypoint.config import GatewayConfig
from waypoint.errors import BadGateway, GatewayTimeout
from waypoint.http.response import StreamingResponse
from waypoint.routing.route import RoutingDecision

logger = logging.getLogger("waypoint.proxy")

HOP_BY_HOP = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "proxy-connection",
        "te",
        "trailer",
        "trailers",
        "transfer-encoding",
        "upgrade",
    }
)


def create_client(
    config: GatewayConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the shared backend client from gateway settings."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.upstream_timeout, connect=config.connect_timeout),
        follow_redirects=False,
        transport=transport,
    )


def _strip_hop_by_hop(headers: list[tuple[str, str]]) -> list[tuple[str, str]]:
    """Drop hop-by-hop headers, including any named in ``Connection``."""
    dropped = set(HOP_BY_HOP)
    for name, value in headers:
        if name.lower() == "connection":
            dropped.update(token.strip().lower() for token in value.split(","))
    return [(name, value) for name, value in headers if name.lower() not in dropped]


def upstream_headers(
    request: HTTPScope,
    config: GatewayConfig,
) -> list[tuple[str, str]]:
    """Headers sent to the backend.

    The client's Host is preserved. With ``forward_headers`` on, the
    usual ingress headers are added: ``x-forwarded-for``,
    ``x-forwarded-host``, ``x-forwarded-proto``, ``x-original-uri``
    and a request id (kept if the client sent one).
    """
    headers = _strip_hop_by_hop(
        [(k.decode("latin-1"), v.decode("latin-1")) for k, v in request.headers]
    )
    if not config.forward_headers:
        return headers

    managed = {"x-forwarded-for", "x-forwarded-host", "x-forwarded-proto", "x-original-uri"}
    headers = [(k, v) for k, v in headers if k.lower() not in managed]

    forwarded_for = request.header("x-forwarded-for")
    if request.client is not None:
        client_ip = request.client[0]
        forwarded_for = f"{forwarded_for}, {client_ip}" if forwarded_for else client_ip
    if forwarded_for:
        headers.append(("x-forwarded-for", forwarded_for))

    host = request.header("host")
    if host:
        headers.append(("x-forwarded-host", host))
    headers.append(("x-forwarded-proto", request.scheme))
    headers.append(("x-original-uri", request.target))

    if request.header(config.request_id_header) is None:
        headers.append((config.request_id_header, uuid.uuid4().hex))
    return headers


# RFC 3986 pchar delimiters, left alone when re-encoding a decoded path
_PATH_SAFE = "/:@!$&'()*+,;="
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


def _raw_offset(raw: bytes, decoded_length: int) -> int:
    """Index into ``raw`` after the first ``decoded_length`` decoded bytes."""
    index = 0
    for _ in range(decoded_length):
        escape = raw[index : index + 3]
        if len(escape) == 3 and escape[0:1] == b"%" and set(escape[1:]) <= _HEX_DIGITS:
            index += 3
        else:
            index += 1
    return index


def backend_path(request: HTTPScope, decision: RoutingDecision) -> str:
    """Path sent to the backend, keeping the client's percent-encoding.

    Matching runs on the decoded path, but ``%2F``, ``%3F`` and ``%23``
    must reach the backend still encoded. The part of the path kept
    after the rewrite is therefore sliced out of ``raw_path``. Servers
    that omit ``raw_path`` (or send one that does not decode to
    ``path``) get the effective path re-encoded instead.
    """
    effective = decision.effective_path
    raw = request.raw_path
    if raw is None or unquote_to_bytes(raw) != request.path.encode("utf-8"):
        return quote(effective, safe=_PATH_SAFE)

    target = decision.route.rewrite_target or ""
    kept = effective[len(target) :]
    consumed = len(request.path.encode("utf-8")) - len(kept.encode("utf-8"))
    remainder = raw[_raw_offset(raw, consumed) :].decode("latin-1")
    return quote(target, safe=_PATH_SAFE) + remainder


async def read_body(receive: Receive) -> bytes:
    """Drain the ASGI request body."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


async def _relay(upstream: httpx.Response) -> AsyncGenerator[bytes, None]:
    try:
        async for chunk in upstream.aiter_raw():
            yield chunk
    finally:
        await upstream.aclose()


async def forward(
    client: httpx.AsyncClient,
    request: HTTPScope,
    decision: RoutingDecision,
    body: bytes,
    config: GatewayConfig,
) -> StreamingResponse:
    """Send the request to the routed backend and stream its reply back.

    Raises:
        BadGateway: The backend refused the connection or broke the
            protocol.
        GatewayTimeout: The backend did not connect or answer in time.
    """
    url = decision.route.backend.url(backend_path(request, decision))
    if request.query_string:
        url = f"{url}?{request.query_string.decode('latin-1')}"

    upstream_request = client.build_request(
        request.method,
        url,
        headers=upstream_headers(request, config),
        content=body,
    )
    backend = decision.route.backend

    try:
        upstream = await client.send(upstream_request, stream=True)
    except httpx.TimeoutException as exc:
        logger.error("Timeout calling %s for %s %s", backend, request.method, request.path)
        msg = f"Backend {backend} timed out"
        raise GatewayTimeout(msg) from exc
    except httpx.TransportError as exc:
        logger.error("Cannot reach %s for %s %s: %s", backend, request.method, request.path, exc)
        msg = f"Backend {backend} is unreachable"
        raise BadGateway(msg) from exc

    logger.debug(
        "%s %s -> %s %d", request.method, request.path, upstream_request.url, upstream.status_code
    )
    return StreamingResponse(
        chunks=_relay(upstream),
        status=upstream.status_code,
        headers=tuple(_strip_hop_by_hop(list(upstream.headers.multi_items()))),
    )
