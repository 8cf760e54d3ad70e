"""``waypoint check`` — route file validation command.

Loads and validates a route file, printing a summary. Exact routes are
called out because they silently reject every deeper path.
"""

import argparse

from waypoint.cli._load import load_or_exit
from waypoint.routing.route import MatchMode


def run_check(args: argparse.Namespace) -> None:
    """Validate a route file; exits 1 if it is invalid."""
    table, config = load_or_exit(args.file)

    exact = [route for route in table if route.mode is MatchMode.EXACT]
    print(
        f"OK: {len(table)} routes ({len(exact)} Exact, {len(table) - len(exact)} Prefix) "
        f"from {args.file}"
    )
    print(f"Gateway: {config.host}:{config.port}, no-route status {config.no_route_status}")
    for route in exact:
        print(f"note: Exact route {route.path!r} matches only {route.path!r}, not its sub-paths")
