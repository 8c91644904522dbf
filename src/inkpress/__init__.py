"""Inkpress - blogging backend authentication core.

Account registration, password login, access/refresh token issuance and
session revocation behind a FastAPI HTTP binding.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
