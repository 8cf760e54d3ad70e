"""``waypoint routes`` — list routes.

Loads a route file and prints every route with its mode, path, rewrite
target, and backend, in registration order.
"""

import argparse

from waypoint.cli._load import load_or_exit


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of MODE, PATH, REWRITE, and BACKEND."""
    table, _config = load_or_exit(args.file)

    rows: list[tuple[str, str, str, str]] = [
        (str(route.mode), route.path, route.rewrite_target or "-", str(route.backend))
        for route in table
    ]

    # Column widths, never narrower than the headers
    headers = ("MODE", "PATH", "REWRITE", "BACKEND")
    widths = [max([len(headers[i]), *(len(row[i]) for row in rows)]) for i in range(3)]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max((len(row[3]) for row in rows), default=0)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
