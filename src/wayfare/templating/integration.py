"""View renderer protocol and the kida-backed implementation.

The app holds one renderer, created once during ``App._freeze()`` and
shared read-only by every request. kida is an optional dependency
(``pip install wayfare[templates]``); it is imported only when a
``KidaRenderer`` is actually built.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from wayfare.config import AppConfig
from wayfare.errors import ConfigurationError


@runtime_checkable
class ViewRenderer(Protocol):
    """Turns a view name and its variables into a response body."""

    def render(self, name: str, context: Mapping[str, Any]) -> str: ...


def _import_kida() -> Any:
    """Import kida or raise a clear error."""
    try:
        import kida
    except ImportError as exc:
        msg = (
            "Template rendering requires kida, which is not installed. "
            "Install it with: pip install wayfare[templates]"
        )
        raise ConfigurationError(msg) from exc
    return kida


class KidaRenderer:
    """Render views from a directory with a kida ``Environment``.

    Usage::

        renderer = KidaRenderer.from_config(AppConfig(template_dir="views"))
        html = renderer.render("index.html", {"title": "Home"})

    Pass ``env`` to reuse an environment you configured yourself.
    """

    __slots__ = ("env",)

    def __init__(self, env: Any) -> None:
        self.env = env

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        filters: dict[str, Callable[..., Any]] | None = None,
        globals_: dict[str, Any] | None = None,
    ) -> KidaRenderer:
        """Build an environment over ``config.template_dir``."""
        kida = _import_kida()
        env = kida.Environment(
            loader=kida.FileSystemLoader(str(Path(config.template_dir))),
            autoescape=config.autoescape,
            auto_reload=config.debug,
            trim_blocks=config.trim_blocks,
            lstrip_blocks=config.lstrip_blocks,
        )
        if filters:
            env.update_filters(filters)
        for name, value in (globals_ or {}).items():
            env.add_global(name, value)
        return cls(env)

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Render template *name* with *context*."""
        template = self.env.get_template(name)
        return template.render(dict(context))
