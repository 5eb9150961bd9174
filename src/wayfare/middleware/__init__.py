"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    RequestLogger -- One access-log line per request (Express "dev" format)
"""

from wayfare.middleware.access_log import RequestLogger
from wayfare.middleware.protocol import Middleware, Next

__all__ = [
    "Middleware",
    "Next",
    "RequestLogger",
]
