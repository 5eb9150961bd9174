"""Compiled router with exact (method, path) matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes. Matching is a single dict
lookup: case-sensitive, no parameters, no wildcards, no trailing-slash
folding.
"""

from wayfare.errors import ConfigurationError, NotFound
from wayfare.routing.route import Route


class Router:
    """Route table keyed by ``(method, path)``.

    Usage::

        router = Router()
        router.add(Route("GET", "/", index))
        router.add(Route("GET", "/about", about))
        router.compile()
        route = router.match("GET", "/about")

    Registering the same ``(method, path)`` twice raises
    ``ConfigurationError``: at most one handler can answer a request.
    """

    __slots__ = ("_compiled", "_table")

    def __init__(self) -> None:
        self._table: dict[tuple[str, str], Route] = {}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        existing = self._table.get(route.key)
        if existing is not None:
            msg = (
                f"Duplicate route {route.method} {route.path!r}: already handled by "
                f"{_describe(existing.handler)}, cannot also register {_describe(route.handler)}."
            )
            raise ConfigurationError(msg)

        self._table[route.key] = route

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._table.values())

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> Route:
        """Return the route registered for exactly *method* and *path*.

        Raises ``NotFound`` if there is none.
        """
        route = self._table.get((method, path))
        if route is None:
            raise NotFound(f"No route matches {method} {path!r}")
        return route


def _describe(handler: object) -> str:
    """Human-readable handler name for error messages."""
    name = getattr(handler, "__qualname__", None) or type(handler).__qualname__
    module = getattr(handler, "__module__", None)
    return f"{module}.{name}" if module else name
