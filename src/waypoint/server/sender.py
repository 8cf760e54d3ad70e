"""ASGI response sending — translates waypoint responses to ASGI messages.

Handles both buffered gateway replies and streamed backend replies.
"""

import logging
from contextlib import aclosing

from waypoint._internal.asgi import Send
from waypoint.http.response import Response, StreamingResponse

logger = logging.getLogger("waypoint.gateway")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _encode_headers(headers: tuple[tuple[str, str], ...]) -> list[tuple[bytes, bytes]]:
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers]


async def send_response(response: Response, send: Send) -> None:
    """Translate a buffered Response into ASGI send() calls."""
    raw_headers = [(b"content-type", response.content_type.encode("latin-1"))]
    raw_headers.extend(_encode_headers(response.headers))

    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )


async def send_streaming_response(response: StreamingResponse, send: Send) -> None:
    """Relay a streamed backend reply.

    Sends headers immediately, then each chunk as an ASGI body message
    with ``more_body=True``, and closes with an empty body. Once the
    headers are out the status can no longer change, so a mid-stream
    backend failure is logged and the body is cut short. A failing
    ``send`` (the client went away) is logged and re-raised. Either way
    the backend stream is closed before returning.
    """
    async with aclosing(response.chunks) as chunks:
        await send(
            {
                "type": "http.response.start",
                "status": response.status,
                "headers": _encode_headers(response.headers),
            }
        )

        while True:
            try:
                chunk = await anext(chunks)
            except StopAsyncIteration:
                break
            except Exception:
                logger.exception(
                    "Backend stream failed after %d response was started", response.status
                )
                break

            if not chunk:
                continue
            try:
                await send(
                    {
                        "type": "http.response.body",
                        "body": chunk,
                        "more_body": True,
                    }
                )
            except Exception as exc:
                logger.warning(
                    "Client send failed during %d response; closing backend stream: %s",
                    response.status,
                    exc,
                )
                raise

    await send({"type": "http.response.body", "body": b"", "more_body": False})
