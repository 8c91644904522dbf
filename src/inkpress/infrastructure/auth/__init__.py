"""Authentication infrastructure components.

This module provides password hashing and the access/refresh token
services used by the auth core.
"""

from inkpress.infrastructure.auth.jwt_service import (
    AccessTokenClaims,
    InvalidTokenError,
    TokenIssuer,
    TokenVerifier,
)
from inkpress.infrastructure.auth.password_hasher import CredentialHasher

__all__ = [
    "AccessTokenClaims",
    "CredentialHasher",
    "InvalidTokenError",
    "TokenIssuer",
    "TokenVerifier",
]
