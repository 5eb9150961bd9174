"""Route frozen dataclass and the Handler protocol."""

from dataclasses import dataclass
from typing import Any, Protocol


class Handler(Protocol):
    """Anything that turns a request into a response value.

    Plain functions, async functions, and objects with ``__call__`` all
    qualify. The request argument is optional: zero-argument handlers
    are called without it::

        def index():
            return "Hello World!"

        async def echo(request: Request):
            return await request.text()

        class About:
            def __call__(self, request: Request) -> str:
                return "About page"
    """

    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during app setup, compiled into the router at freeze time.
    ``method`` is always upper-case; ``path`` is compared verbatim.
    """

    method: str
    path: str
    handler: Handler
    name: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        """The ``(method, path)`` pair that identifies this route."""
        return (self.method, self.path)
