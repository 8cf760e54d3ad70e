"""``waypoint run`` — start the gateway server.

Loads a route file, configures logging, and serves the gateway with
pounce. CLI flags override the file's ``gateway:`` settings and are
validated the same way; a bad value exits 1 before the server starts.
"""

import argparse
import logging
import sys
from dataclasses import replace

from waypoint.cli._load import load_or_exit
from waypoint.errors import InvalidRouteConfig
from waypoint.gateway import Gateway


def run_gateway(args: argparse.Namespace) -> None:
    """Build the gateway from ``args.file`` and serve it."""
    table, config = load_or_exit(args.file)

    overrides = {
        "host": args.host,
        "port": args.port,
        "workers": args.workers,
        "log_level": args.log_level,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    try:
        config.validate()
    except InvalidRouteConfig as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from waypoint.server.run import run_server

    run_server(
        Gateway(table, config),
        config.host,
        config.port,
        workers=config.workers,
        log_level=config.log_level,
    )
