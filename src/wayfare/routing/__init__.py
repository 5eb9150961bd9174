"""Routing — exact (method, path) route table.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

from wayfare.routing.route import Handler, Route
from wayfare.routing.router import Router

__all__ = ["Handler", "Route", "Router"]
