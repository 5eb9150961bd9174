"""View rendering — the ``Template`` return type and renderer adapters."""

from wayfare.templating.integration import KidaRenderer, ViewRenderer
from wayfare.templating.returns import Template

__all__ = ["KidaRenderer", "Template", "ViewRenderer"]
