"""Start a gateway under the pounce ASGI server."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from waypoint.gateway import Gateway


def run_server(
    gateway: Gateway,
    host: str,
    port: int,
    *,
    workers: int = 1,
    log_level: str = "info",
) -> None:
    """Serve ``gateway`` until interrupted.

    pounce's ``run()`` takes an import string, but the gateway is a live
    object built from a route file, so ``pounce.Server`` is used
    directly with the ASGI callable. Each worker runs the lifespan
    protocol and therefore gets its own backend client.

    Args:
        gateway: The ASGI gateway to serve.
        host: Bind host address.
        port: Bind port number.
        workers: Worker count (0 = auto-detect from CPU count).
        log_level: Server log level (debug, info, warning, error, critical).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_level=log_level,
    )
    Server(config, gateway).run()
