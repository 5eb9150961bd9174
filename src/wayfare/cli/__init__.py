"""wayfare CLI — serve an app from an import string.

Entry point registered as ``wayfare`` in ``pyproject.toml``::

    [project.scripts]
    wayfare = "wayfare.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wayfare`` command."""
    parser = argparse.ArgumentParser(
        prog="wayfare",
        description="wayfare — a small async HTTP router with a middleware pipeline.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wayfare run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the development server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- wayfare routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from wayfare.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from wayfare.cli._routes import list_routes

        list_routes(args)
