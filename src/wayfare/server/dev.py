"""Development server.

Starts a pounce ASGI server with the live wayfare App object.
pounce is an optional dependency (``pip install wayfare[server]``).
Any other ASGI server can host the app directly instead.
"""

import logging

from wayfare.errors import ConfigurationError


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
    log_level: str = "info",
) -> None:
    """Start a single-worker pounce server for *app*.

    Args:
        app: ASGI callable (wayfare App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes.
        app_path: Optional ``"module:attribute"`` import string so the
            server can reimport the app on reload.
        log_level: Root logging level name for the process.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "The development server requires pounce, which is not installed. "
            "Install it with: pip install wayfare[server]"
        )
        raise ConfigurationError(msg) from exc

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    server = Server(config, app, app_path=app_path)
    server.run()
