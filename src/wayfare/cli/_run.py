"""``wayfare run`` — development server command."""

import argparse
import sys

from wayfare.cli._resolve import resolve_app
from wayfare.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and start the development server.

    ``--host`` and ``--port`` override the app's config. The app is
    frozen first so a bad route table fails before binding.
    """
    try:
        app = resolve_app(args.app)
        app._ensure_frozen()
    except (
        ModuleNotFoundError,
        AttributeError,
        TypeError,
        ValueError,
        ConfigurationError,
    ) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from wayfare.server.dev import run_dev_server

    run_dev_server(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        reload=app.config.debug,
        app_path=args.app,
        log_level=app.config.log_level,
    )
