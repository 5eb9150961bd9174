"""Error handling for wayfare requests.

Maps HTTPError exceptions and unexpected failures to Response objects,
using registered error handlers or plain-text defaults.
"""

import inspect
import logging
from collections.abc import Mapping

from wayfare._internal.invoke import invoke
from wayfare._internal.types import ErrorHandler
from wayfare.errors import HTTPError
from wayfare.http.request import Request
from wayfare.http.response import Response
from wayfare.server.negotiation import negotiate
from wayfare.templating.integration import ViewRenderer

logger = logging.getLogger("wayfare.server")


async def call_error_handler(
    handler: ErrorHandler,
    request: Request,
    exc: Exception,
    renderer: ViewRenderer | None,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = await invoke(handler, request, exc)
    elif len(params) == 1:
        result = await invoke(handler, request)
    else:
        result = await invoke(handler)

    return negotiate(result, renderer=renderer)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: Mapping[int | type, ErrorHandler],
    renderer: ViewRenderer | None,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers.

    A registered handler that itself fails is logged and replaced by the
    plain-text default, so the request still gets exactly one response.
    """
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    # Exact exception type first, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        try:
            response = await call_error_handler(handler, request, exc, renderer)
        except Exception:
            logger.exception(
                "Error handler %s failed for %d %s %s",
                _name(handler), exc.status, request.method, request.path,
            )
            return _default_http_response(exc)
        # Keep the error's status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    return _default_http_response(exc)


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: Mapping[int | type, ErrorHandler],
    renderer: ViewRenderer | None,
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        try:
            response = await call_error_handler(handler, request, exc, renderer)
        except Exception:
            logger.exception(
                "Error handler %s failed for 500 %s %s",
                _name(handler), request.method, request.path,
            )
            return _default_internal_response(exc, debug)
        if response.status == 200:
            response = response.with_status(500)
        return response

    return _default_internal_response(exc, debug)


def _default_http_response(exc: HTTPError) -> Response:
    response = Response(
        body=exc.detail or f"Error {exc.status}",
        content_type="text/plain; charset=utf-8",
        status=exc.status,
    )
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def _default_internal_response(exc: Exception, debug: bool) -> Response:
    body = "Internal Server Error"
    if debug:
        body = f"{body}\n\n{type(exc).__name__}: {exc}"
    return Response(body=body, content_type="text/plain; charset=utf-8", status=500)


def _name(obj: object) -> str:
    return getattr(obj, "__qualname__", None) or type(obj).__qualname__
