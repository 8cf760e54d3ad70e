"""HTTP responses with a chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """A fully buffered HTTP response.

    The gateway builds these for its own replies (routing misses,
    backend failures); proxied backend replies are streamed instead.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def json(cls, data: Any, *, status: int = 200) -> Response:
        return cls(
            body=json_module.dumps(data),
            status=status,
            content_type="application/json",
        )

    # -- Chainable transformations --

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    # -- Body helpers (also how TestClient callers read replies) --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header ``name`` (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return default


@dataclass(frozen=True, slots=True)
class StreamingResponse:
    """A response whose body is relayed chunk by chunk.

    Used for proxied backend replies: headers are sent as soon as the
    backend answers, then each chunk as it arrives. ``headers`` carries
    the backend's headers verbatim (minus hop-by-hop ones), including
    its content type. The sender closes ``chunks`` once the reply ends,
    which releases the backend connection.
    """

    chunks: AsyncGenerator[bytes, None]
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()
