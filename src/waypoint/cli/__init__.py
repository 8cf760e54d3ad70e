"""Waypoint CLI — route file validation, inspection, and the gateway server.

Entry point registered as ``waypoint`` in ``pyproject.toml``::

    [project.scripts]
    waypoint = "waypoint.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypoint`` command."""
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint — path-based HTTP routing for ingress-style gateways.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint check ---------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a route file")
    check_parser.add_argument("file", help="Route file (YAML route list or Ingress manifests)")

    # -- waypoint routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes in registration order")
    routes_parser.add_argument("file", help="Route file")

    # -- waypoint resolve -------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Show how a request path resolves")
    resolve_parser.add_argument("file", help="Route file")
    resolve_parser.add_argument("path", help="Request path, e.g. /api/items")

    # -- waypoint run -----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the gateway server")
    run_parser.add_argument("file", help="Route file")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect)",
    )
    run_parser.add_argument(
        "--log-level",
        choices=["critical", "error", "warning", "info", "debug"],
        default=None,
        help="Log level (overrides the route file)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from waypoint.cli._check import run_check

        run_check(args)
    elif args.command == "routes":
        from waypoint.cli._routes import run_routes

        run_routes(args)
    elif args.command == "resolve":
        from waypoint.cli._resolve import run_resolve

        run_resolve(args)
    elif args.command == "run":
        from waypoint.cli._run import run_gateway

        run_gateway(args)
