"""``wayfare routes`` — list registered routes.

Prints the route table in registration order, which is also the order
duplicate checks ran in.
"""

import argparse
import sys

from wayfare.cli._resolve import resolve_app


def list_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / HANDLER table for ``args.app``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        handler_name = getattr(route.handler, "__name__", type(route.handler).__name__)
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        rows.append((route.method, route.path, handler_name))

    method_width = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    path_width = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{method_width}}}  {{:<{path_width}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    for row in rows:
        print(fmt.format(*row))
