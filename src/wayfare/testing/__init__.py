"""Test utilities for wayfare applications::

    from wayfare.testing import TestClient
"""

from wayfare.testing.client import TestClient

__all__ = ["TestClient"]
