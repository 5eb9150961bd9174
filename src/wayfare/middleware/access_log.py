"""Request logging middleware in the Express "dev" format.

One line per request, after the response is known::

    GET /about 200 0.412 ms - 10

Level follows the status class: INFO below 400, WARNING for 4xx,
ERROR for 5xx.
"""

import logging
import time

from wayfare.http.request import Request
from wayfare.http.response import Response
from wayfare.middleware.protocol import Next

access_logger = logging.getLogger("wayfare.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLogger:
    """Log method, URL, status, elapsed time and body length.

    Usage::

        app.use(RequestLogger())

    Register it first so the elapsed time covers the rest of the chain.
    The response is returned untouched.
    """

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or access_logger

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.perf_counter()
        response = await next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        length = len(response.body_bytes)
        self.logger.log(
            _level_for(response.status),
            "%s %s %d %.3f ms - %s",
            request.method,
            request.url,
            response.status,
            elapsed_ms,
            length if length else "-",
        )
        return response
