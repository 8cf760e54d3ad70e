"""Gateway configuration.

GatewayConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from waypoint.errors import InvalidRouteConfig

_LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """Gateway configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = GatewayConfig(host="0.0.0.0", upstream_timeout=10.0)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    workers: int = 1

    # Backend calls
    upstream_timeout: float = 30.0
    connect_timeout: float = 5.0

    # Status sent when no route matches (404 or 503)
    no_route_status: int = 404

    # Forwarding headers (x-forwarded-*, x-original-uri, request id)
    forward_headers: bool = True
    request_id_header: str = "x-request-id"

    log_level: str = "info"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GatewayConfig":
        """Build a config from the ``gateway:`` section of a route file.

        Keys may use ``snake_case`` or ``kebab-case``. Unknown keys and
        values of the wrong type raise ``InvalidRouteConfig``.
        """
        if not isinstance(data, Mapping):
            msg = f"'gateway' must be a mapping, got {type(data).__name__}"
            raise InvalidRouteConfig(msg)

        fields = {f.name: f for f in dataclasses.fields(cls)}
        values: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = str(raw_key).replace("-", "_")
            if key not in fields:
                msg = f"Unknown gateway setting {raw_key!r}"
                raise InvalidRouteConfig(msg)
            values[key] = _coerce(key, type(fields[key].default), value)

        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        if not 0 < self.port < 65536:
            msg = f"gateway port {self.port} must be in 1..65535"
            raise InvalidRouteConfig(msg)
        if self.workers < 0:
            msg = "gateway workers must be >= 0 (0 = auto-detect)"
            raise InvalidRouteConfig(msg)
        if self.upstream_timeout <= 0 or self.connect_timeout <= 0:
            msg = "gateway timeouts must be positive"
            raise InvalidRouteConfig(msg)
        if not 400 <= self.no_route_status < 600:
            msg = f"no_route_status {self.no_route_status} must be a 4xx or 5xx status"
            raise InvalidRouteConfig(msg)
        if self.log_level.lower() not in _LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(_LOG_LEVELS)}"
            raise InvalidRouteConfig(msg)


def _coerce(key: str, kind: type, value: Any) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
    elif kind is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif isinstance(value, kind):
        return value
    msg = f"gateway setting {key!r} expects {kind.__name__}, got {value!r}"
    raise InvalidRouteConfig(msg)
