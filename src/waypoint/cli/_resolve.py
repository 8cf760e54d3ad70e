"""``waypoint resolve`` — show how a request path resolves.

The offline counterpart of a request through the gateway: prints the
winning route, the effective path, and the backend URL, or the reasons
nothing matched.
"""

import argparse
import sys

from waypoint.cli._load import load_or_exit
from waypoint.routing.route import NoRouteMatched


def run_resolve(args: argparse.Namespace) -> None:
    """Resolve ``args.path``; exits 1 if no route matches."""
    table, _config = load_or_exit(args.file)

    result = table.resolve(args.path)
    if isinstance(result, NoRouteMatched):
        print(f"No route matches {result.path!r}", file=sys.stderr)
        for hint in result.hints:
            print(f"hint: {hint}", file=sys.stderr)
        raise SystemExit(1)

    print(f"route:     {result.route.describe()}")
    print(f"path:      {result.effective_path}")
    print(f"backend:   {result.backend_url}")
