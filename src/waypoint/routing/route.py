"""Route, Backend, and routing result frozen dataclasses."""

from dataclasses import dataclass
from enum import StrEnum


class MatchMode(StrEnum):
    """How a route's path is compared to the request path.

    Values are spelled the way Ingress ``pathType`` spells them.
    """

    EXACT = "Exact"
    PREFIX = "Prefix"


@dataclass(frozen=True, slots=True)
class Backend:
    """A downstream service address."""

    host: str
    port: int

    @property
    def authority(self) -> str:
        return f"{self.host}:{self.port}"

    def url(self, path: str) -> str:
        return f"http://{self.authority}{path}"

    def __str__(self) -> str:
        return self.authority


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created while loading configuration and validated when the
    ``RouteTable`` is built.
    """

    path: str
    backend: Backend
    mode: MatchMode = MatchMode.PREFIX
    rewrite_target: str | None = None
    name: str | None = None

    def describe(self) -> str:
        """One-line summary used in logs and CLI output."""
        text = f"{self.mode} {self.path} -> {self.backend}"
        if self.rewrite_target is not None:
            text += f" (rewrite {self.rewrite_target})"
        if self.name:
            text += f" [{self.name}]"
        return text


@dataclass(frozen=True, slots=True)
class RoutingDecision:
    """Result of a successful resolve."""

    route: Route
    effective_path: str
    backend_url: str


@dataclass(frozen=True, slots=True)
class NoRouteMatched:
    """Result of a resolve where no route matched.

    ``hints`` point at routes that almost matched, typically an
    ``Exact`` route sitting on a parent path of the request.
    """

    path: str
    hints: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return False
