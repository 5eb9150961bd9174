"""Shared type aliases used across wayfare modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Error handler: receives (), (request) or (request, exc) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]

# Lifespan hook: sync or async, no arguments
Hook: TypeAlias = Callable[[], Any]
