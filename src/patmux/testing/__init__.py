"""Test utilities for patmux muxes.

    from patmux.testing import TestClient
"""

from patmux.testing.client import TestClient

__all__ = ["TestClient"]
