"""wayfare — a small async HTTP router with a middleware pipeline.

Exact (method, path) routing, ordered middleware, one response per
request, ASGI at the edge.

Basic usage::

    from wayfare import App, RequestLogger

    app = App()
    app.use(RequestLogger())

    @app.get("/")
    def index():
        return "Hello World!"

    @app.get("/about")
    def about():
        return "About page"

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "Middleware",
    "Next",
    "NotFound",
    "Redirect",
    "Request",
    "RequestLogger",
    "Response",
    "Route",
    "Router",
    "Template",
    "WayfareError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wayfare`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wayfare.app import App

        return App

    if name == "AppConfig":
        from wayfare.config import AppConfig

        return AppConfig

    if name == "Request":
        from wayfare.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from wayfare.http import response as _resp

        return getattr(_resp, name)

    if name in ("Route", "Router"):
        from wayfare import routing as _routing

        return getattr(_routing, name)

    if name == "Template":
        from wayfare.templating.returns import Template

        return Template

    if name in ("Middleware", "Next", "RequestLogger"):
        from wayfare import middleware as _mw

        return getattr(_mw, name)

    if name in ("WayfareError", "ConfigurationError", "HTTPError", "NotFound"):
        from wayfare import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
