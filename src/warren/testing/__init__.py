"""Test utilities for warren applications.

Provides an async test client that drives the ASGI app directly::

    from warren.testing import TestClient
"""

from warren.testing.client import TestClient

__all__ = ["TestClient"]
