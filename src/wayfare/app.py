"""wayfare application class.

Mutable during setup (route registration, middleware, error handlers).
Frozen at runtime when app.run(), app.dispatch() or __call__() is first
invoked.
"""

import importlib.util
import inspect
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from wayfare._internal.asgi import Receive, Scope, Send
from wayfare._internal.types import ErrorHandler, Hook
from wayfare.config import AppConfig
from wayfare.errors import ConfigurationError
from wayfare.http.request import Request
from wayfare.http.response import Response
from wayfare.middleware.protocol import Middleware
from wayfare.routing.route import Handler, Route
from wayfare.routing.router import Router
from wayfare.server.handler import dispatch, handle_request
from wayfare.templating.integration import KidaRenderer, ViewRenderer


class App:
    """The wayfare application.

    Owns the route table and the middleware chain. There is no
    module-level registry: whoever constructs the App owns it and hands
    it to the server.

    Usage::

        app = App()
        app.use(RequestLogger())

        @app.get("/")
        def index():
            return "Hello World!"

    Thread safety:
        Setup is single-threaded (decorators at import time). The freeze
        transition uses a Lock + double-check so exactly one thread
        compiles the app when several requests arrive first at once.
        After freeze, the route table, middleware tuple and renderer are
        read-only and shared by all requests.
    """

    __slots__ = (
        "_custom_renderer",
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_pending_routes",
        "_registered",
        "_renderer",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "_template_filters",
        "_template_globals",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        renderer: ViewRenderer | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[Route] = []
        self._registered: set[tuple[str, str]] = set()
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._template_filters: dict[str, Callable[..., Any]] = {}
        self._template_globals: dict[str, Any] = {}
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._custom_renderer: ViewRenderer | None = renderer
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._router: Router | None = None
        self._middleware: tuple[Middleware, ...] = ()
        self._renderer: ViewRenderer | None = None

    # -- Route registration --

    def register(
        self,
        method: str,
        path: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for exactly *method* and *path*.

        Raises ``ConfigurationError`` if that ``(method, path)`` pair is
        already taken, and ``RuntimeError`` once the app is serving.
        """
        self._check_not_frozen()
        route = Route(method=method.upper(), path=path, handler=handler, name=name)
        if route.key in self._registered:
            msg = f"Duplicate route {route.method} {route.path!r}: already registered."
            raise ConfigurationError(msg)
        self._registered.add(route.key)
        self._pending_routes.append(route)
        return route

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: Exact URL path. Compared verbatim, case-sensitive.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name, kept for introspection.
        """

        def decorator(func: Handler) -> Handler:
            for method in methods or ["GET"]:
                self.register(method, path, func, name=name)
            return func

        return decorator

    def get(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Shorthand for ``route(path, methods=["GET"])``."""
        return self.route(path, methods=["GET"], name=name)

    def post(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Shorthand for ``route(path, methods=["POST"])``."""
        return self.route(path, methods=["POST"], name=name)

    def put(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Shorthand for ``route(path, methods=["PUT"])``."""
        return self.route(path, methods=["PUT"], name=name)

    def delete(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Shorthand for ``route(path, methods=["DELETE"])``."""
        return self.route(path, methods=["DELETE"], name=name)

    @property
    def routes(self) -> list[Route]:
        """Registered routes, in registration order."""
        if self._router is not None:
            return self._router.routes
        return list(self._pending_routes)

    # -- Middleware --

    def use(self, middleware: Middleware) -> None:
        """Append a middleware to the chain.

        Middleware runs in the order it was added: the first one added
        sees the request first and the response last.
        """
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator.

        The handler may take ``()``, ``(request)`` or ``(request, exc)``::

            @app.error(404)
            def not_found(request: Request):
                return f"Nothing at {request.path}"
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Template integration --

    def template_filter(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template filter."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            self._template_filters[name or func.__name__] = func
            return func

        return decorator

    def template_global(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template global."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            self._template_globals[name or func.__name__] = func
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register an async or sync shutdown hook via decorator.

        Hooks run in registration order during ASGI lifespan shutdown.
        """
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Dispatch --

    async def dispatch(self, request: Request) -> Response:
        """Produce the one response for *request*.

        Runs the middleware chain, then exact ``(method, path)`` routing.
        No transport involved::

            response = await app.dispatch(Request.build("GET", "/"))
        """
        self._ensure_frozen()
        assert self._router is not None

        return await dispatch(
            request,
            router=self._router,
            middleware=self._middleware,
            error_handlers=self._error_handlers,
            renderer=self._renderer,
            debug=self.config.debug,
        )

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the development server (the ``app.listen()`` of wayfare).

        Compiles the app first so configuration errors, such as a
        duplicate route, surface before the socket is bound.
        """
        self._ensure_frozen()

        from wayfare.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan directly, then delegates HTTP scopes to the
        request pipeline. Other scope types are ignored.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handlers=self._error_handlers,
            renderer=self._renderer,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs registered startup/shutdown hooks and signals completion
        back to the server.
        """
        try:
            self._ensure_frozen()
        except ConfigurationError as exc:
            await receive()
            await send({"type": "lifespan.startup.failed", "message": str(exc)})
            return

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self._run_hooks(self._startup_hooks)
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self._run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return

    @staticmethod
    async def _run_hooks(hooks: list[Hook]) -> None:
        for hook in hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Compile route table (the router re-checks duplicates)
        router = Router()
        for route in self._pending_routes:
            router.add(route)
        router.compile()
        self._router = router

        # 2. Capture middleware as an immutable tuple
        self._middleware = tuple(self._middleware_list)

        # 3. View renderer: explicit one wins; otherwise kida over
        #    template_dir when both the directory and kida are present.
        if self._custom_renderer is not None:
            self._renderer = self._custom_renderer
        elif Path(self.config.template_dir).is_dir() and importlib.util.find_spec("kida"):
            self._renderer = KidaRenderer.from_config(
                self.config,
                filters=self._template_filters,
                globals_=self._template_globals,
            )

        if (self._template_filters or self._template_globals) and not isinstance(
            self._renderer, KidaRenderer
        ):
            names = ", ".join([*self._template_filters, *self._template_globals])
            msg = (
                f"Template filters/globals ({names}) were registered, but the app "
                "has no kida renderer to receive them. Configure an existing "
                "template_dir, install wayfare[templates], and do not pass renderer=."
            )
            raise ConfigurationError(msg)

        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and error handlers before calling app.run()."
            )
            raise RuntimeError(msg)
