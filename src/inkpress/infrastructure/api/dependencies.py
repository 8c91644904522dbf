"""FastAPI dependencies for authentication and authorization.

Provides the shared auth components, per-request services and the bearer
access-token dependency. Access-token checks verify signature and expiry
only; they never touch the database.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.core.config import AuthConfig, get_auth_config
from inkpress.core.errors import UnauthorizedError
from inkpress.core.logging import get_logger
from inkpress.domain.entities import ROLE_ADMIN
from inkpress.domain.services import AccountService, AuthService
from inkpress.infrastructure.auth import (
    CredentialHasher,
    InvalidTokenError,
    TokenIssuer,
    TokenVerifier,
)
from inkpress.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)


@lru_cache
def get_credential_hasher() -> CredentialHasher:
    """Process-wide credential hasher."""
    return CredentialHasher(get_auth_config())


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Process-wide token issuer."""
    return TokenIssuer(get_auth_config())


@lru_cache
def get_token_verifier() -> TokenVerifier:
    """Process-wide token verifier."""
    return TokenVerifier(get_auth_config())


def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    config: Annotated[AuthConfig, Depends(get_auth_config)],
    hasher: Annotated[CredentialHasher, Depends(get_credential_hasher)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthService:
    """Build the auth service for the current request."""
    return AuthService(session=session, config=config, hasher=hasher, issuer=issuer)


def get_account_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> AccountService:
    """Build the account service for the current request."""
    return AccountService(session)


@dataclass(frozen=True)
class CurrentAccount:
    """Represents the current authenticated account.

    Extracted from a valid access token.
    """

    account_id: str
    email: str
    role: str


def get_current_account(
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentAccount:
    """Extract and validate the current account from the Authorization header.

    Args:
        verifier: Access-token verifier.
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        CurrentAccount: The authenticated account's context.

    Raises:
        UnauthorizedError: If the header is missing or the token is not valid.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise UnauthorizedError("Access token required")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise InvalidTokenError()

    claims = verifier.verify(parts[1])
    return CurrentAccount(account_id=claims.subject_id, email=claims.email, role=claims.role)


# Type alias for dependency injection
AuthenticatedAccount = Annotated[CurrentAccount, Depends(get_current_account)]


def require_admin(current_account: AuthenticatedAccount) -> CurrentAccount:
    """Ensure the current account has the admin role.

    Raises:
        HTTPException: 403 if the account is not an admin.
    """
    if current_account.role != ROLE_ADMIN:
        logger.info("Admin access denied", account_id=current_account.account_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_account


AdminAccount = Annotated[CurrentAccount, Depends(require_admin)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
