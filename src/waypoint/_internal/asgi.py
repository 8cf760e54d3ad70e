"""Typed ASGI definitions.

Replaces the standard Scope = MutableMapping[str, Any] with a typed
dataclass for internal use.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

# Raw ASGI types (matching the ASGI 3.0 spec)
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Typed HTTP scope parsed from a raw ASGI scope dict."""

    method: str
    path: str
    query_string: bytes
    scheme: str
    headers: tuple[tuple[bytes, bytes], ...]
    client: tuple[str, int] | None
    raw_path: bytes | None = None

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            query_string=scope.get("query_string", b""),
            scheme=scope.get("scheme", "http"),
            headers=tuple((bytes(k), bytes(v)) for k, v in scope.get("headers", ())),
            client=(client[0], client[1]) if client else None,
            raw_path=scope.get("raw_path"),
        )

    def header(self, name: str) -> str | None:
        """First value of a request header, decoded as latin-1."""
        wanted = name.lower().encode("latin-1")
        for key, value in self.headers:
            if key.lower() == wanted:
                return value.decode("latin-1")
        return None

    @property
    def target(self) -> str:
        """Path plus query string, as the client sent it."""
        path = self.raw_path.decode("latin-1") if self.raw_path is not None else self.path
        if self.query_string:
            return f"{path}?{self.query_string.decode('latin-1')}"
        return path
