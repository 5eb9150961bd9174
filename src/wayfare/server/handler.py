"""Request pipeline — middleware chain, route dispatch, error conversion.

``dispatch()`` is transport-free: it takes a ``Request`` and returns the
single ``Response`` for it. ``handle_request()`` is the only function
that touches raw ASGI, translating a scope into a ``Request`` and the
``Response`` back into ``send()`` calls.
"""

import inspect
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeAlias

from wayfare._internal.asgi import Receive, Scope, Send
from wayfare._internal.invoke import invoke
from wayfare._internal.types import ErrorHandler
from wayfare.errors import ConfigurationError, HTTPError
from wayfare.http.request import Request
from wayfare.http.response import Response
from wayfare.middleware.protocol import Middleware
from wayfare.routing.route import Handler
from wayfare.routing.router import Router
from wayfare.server.errors import handle_http_error, handle_internal_error
from wayfare.server.negotiation import negotiate
from wayfare.server.sender import send_response
from wayfare.templating.integration import ViewRenderer

_Step: TypeAlias = Callable[[Request], Awaitable[Response]]


async def dispatch(
    request: Request,
    *,
    router: Router,
    middleware: tuple[Middleware, ...],
    error_handlers: Mapping[int | type, ErrorHandler],
    renderer: ViewRenderer | None = None,
    debug: bool = False,
) -> Response:
    """Run *request* through the middleware chain and the router.

    Middleware runs in registration order. Each one either returns a
    response of its own (short-circuit) or awaits ``next(request)``.
    The innermost step matches ``(method, path)`` exactly and invokes
    that route's handler.

    Errors are converted to responses at the step that raised them, so
    outer middleware (e.g. ``RequestLogger``) always sees a Response,
    including the 404 for an unmatched path and the 500 for a failing
    handler.
    """

    def guard(step: _Step) -> _Step:
        async def guarded(req: Request) -> Response:
            try:
                return await step(req)
            except HTTPError as exc:
                return await handle_http_error(exc, req, error_handlers, renderer)
            except Exception as exc:
                return await handle_internal_error(exc, req, error_handlers, renderer, debug)

        return guarded

    async def endpoint(req: Request) -> Response:
        route = router.match(req.method, req.path)
        args, kwargs = _handler_arguments(route.handler, req)
        result = await invoke(route.handler, *args, **kwargs)
        return negotiate(result, renderer=renderer)

    step = guard(endpoint)
    for mw in reversed(middleware):
        step = guard(_link(mw, step, renderer))

    return await step(request)


def _link(mw: Middleware, downstream: _Step, renderer: ViewRenderer | None) -> _Step:
    """Bind *mw* to the rest of the chain with a one-shot ``next``."""

    async def step(req: Request) -> Response:
        called = False

        async def next_(r: Request) -> Response:
            nonlocal called
            if called:
                msg = (
                    f"Middleware {_name(mw)} called next() more than once; "
                    "a request may produce only one response."
                )
                raise ConfigurationError(msg)
            called = True
            return await downstream(r)

        result = await mw(req, next_)
        return negotiate(result, renderer=renderer)

    return step


def _handler_arguments(handler: Handler, request: Request) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Decide how to pass the request to *handler*.

    Resolution order:
    1. Any parameter named ``request`` or annotated ``Request`` gets it by keyword.
    2. Otherwise a single required positional parameter gets it positionally.
    3. Otherwise the handler is called with no arguments.
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs = {
        name: request
        for name, param in sig.parameters.items()
        if name == "request" or param.annotation is Request
    }
    if kwargs:
        return (), kwargs

    required = [
        param
        for param in sig.parameters.values()
        if param.default is inspect.Parameter.empty
        and param.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if len(required) == 1:
        return (request,), {}
    return (), {}


def _name(obj: object) -> str:
    return getattr(obj, "__qualname__", None) or type(obj).__qualname__


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Middleware, ...],
    error_handlers: Mapping[int | type, ErrorHandler],
    renderer: ViewRenderer | None = None,
    debug: bool = False,
) -> None:
    """Process a single ASGI HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = await dispatch(
        request,
        router=router,
        middleware=middleware,
        error_handlers=error_handlers,
        renderer=renderer,
        debug=debug,
    )
    await send_response(response, send, method=request.method)

