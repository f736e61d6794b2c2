"""Test utilities for roost applications.

    from roost.testing import TestClient
"""

from roost.testing.client import TestClient

__all__ = ["TestClient"]
