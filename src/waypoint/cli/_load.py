"""Route file loading shared by every subcommand.

Configuration errors are fatal: the message goes to stderr and the
command exits with status 1.
"""

import sys

from waypoint.config import GatewayConfig
from waypoint.errors import InvalidRouteConfig
from waypoint.loader import load_file
from waypoint.routing.table import RouteTable


def load_or_exit(path: str) -> tuple[RouteTable, GatewayConfig]:
    """Load ``path`` or exit 1 with an ``Error:`` line on stderr."""
    try:
        return load_file(path)
    except (InvalidRouteConfig, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
