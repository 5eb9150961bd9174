"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The framework checks the shape, not the lineage.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from wayfare.http.request import Request
from wayfare.http.response import Response

# The rest of the chain, ending in route dispatch. One-shot per request.
Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for wayfare middleware.

    Return ``await next(request)`` to continue, or return a ``Response``
    of your own to short-circuit. Accepts both functions and callable
    objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class Maintenance:
            async def __call__(self, request: Request, next: Next) -> Response:
                return Response("Down for maintenance").with_status(503)
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
