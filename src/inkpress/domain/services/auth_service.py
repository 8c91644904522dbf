"""Authentication flows: register, login, refresh, logout and profile.

Each flow is a short linear pipeline over the account and session stores.
Failures surface as :class:`AuthError` subclasses with fixed, non-revealing
messages; unexpected store or hashing failures become :class:`InternalError`.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from argon2.exceptions import HashingError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.core.config import AuthConfig
from inkpress.core.errors import (
    AuthError,
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)
from inkpress.core.logging import get_logger
from inkpress.domain.entities import ROLE_USER, Account
from inkpress.domain.services.password_validator import (
    PasswordValidator,
    default_password_validator,
    validate_name,
    validate_username,
)
from inkpress.infrastructure.auth import CredentialHasher, TokenIssuer
from inkpress.infrastructure.persistence.database import utcnow
from inkpress.infrastructure.persistence.models import AccountModel
from inkpress.infrastructure.persistence.repositories import (
    AccountRepository,
    SessionRepository,
)

logger = get_logger(__name__)

DUPLICATE_ACCOUNT = "User with this email or username already exists"
INVALID_CREDENTIALS = "Invalid email or password"
ACCOUNT_DEACTIVATED = "Account is deactivated"
REFRESH_TOKEN_REQUIRED = "Refresh token is required"
INVALID_REFRESH_TOKEN = "Invalid refresh token"
REFRESH_TOKEN_EXPIRED = "Refresh token has expired"
ACCOUNT_UNAVAILABLE = "User not found or inactive"
ACCOUNT_NOT_FOUND = "User not found"
UNEXPECTED_ERROR = "An unexpected error occurred"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful register or login."""

    account: Account
    access_token: str
    refresh_token: str
    expires_in: int


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of a successful refresh."""

    access_token: str
    expires_in: int


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Orchestrates the authentication flows for one database session.

    The hasher and token issuer are process-wide and shared; the service
    itself is cheap and built per request.
    """

    def __init__(
        self,
        session: AsyncSession,
        config: AuthConfig,
        hasher: CredentialHasher,
        issuer: TokenIssuer,
        password_validator: PasswordValidator = default_password_validator,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the auth service.

        Args:
            session: SQLAlchemy async session.
            config: Immutable auth configuration.
            hasher: Credential hasher.
            issuer: Access and refresh token issuer.
            password_validator: Password strength policy.
            clock: Source of the current time.
        """
        self.session = session
        self.config = config
        self.hasher = hasher
        self.issuer = issuer
        self.password_validator = password_validator
        self.clock = clock
        self.accounts = AccountRepository(session)
        self.sessions = SessionRepository(session)

    async def register(
        self,
        email: str,
        username: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> AuthResult:
        """Create an account and open its first session.

        Raises:
            BadRequestError: If the input breaks a registration rule.
            ConflictError: If the email or username is already in use.
            InternalError: On unexpected store or hashing failures.
        """
        email = normalize_email(email)
        username = username.strip()

        issues = [
            *self.password_validator.validate(password),
            *validate_username(username),
            *validate_name("first_name", first_name),
            *validate_name("last_name", last_name),
        ]
        if issues:
            logger.info("Registration failed: validation", error_count=len(issues))
            raise BadRequestError(
                "Validation error", errors=[issue.as_dict() for issue in issues]
            )

        try:
            email_taken = await self.accounts.email_exists(email)
            username_taken = await self.accounts.username_exists(username)
            if email_taken or username_taken:
                logger.info("Registration failed: identity already in use")
                raise ConflictError(DUPLICATE_ACCOUNT)

            password_hash = await asyncio.to_thread(self.hasher.hash, password)

            account = AccountModel(
                email=email,
                username=username,
                password_hash=password_hash,
                first_name=first_name,
                last_name=last_name,
                role=ROLE_USER,
            )
            try:
                await self.accounts.create(account)
            except IntegrityError:
                # Lost a race with a concurrent registration.
                await self.session.rollback()
                logger.info("Registration failed: unique constraint violated")
                raise ConflictError(DUPLICATE_ACCOUNT) from None

            result = await self._open_session(account)
            await self.session.commit()
        except AuthError:
            raise
        except (SQLAlchemyError, HashingError) as e:
            raise await self._internal("Registration failed", e) from e

        logger.info("Account registered", account_id=account.id)
        return result

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate by email and password and open a new session.

        Raises:
            UnauthorizedError: For unknown email, wrong password or an
                inactive account.
            InternalError: On unexpected store failures.
        """
        email = normalize_email(email)
        try:
            account = await self.accounts.get_by_email(email)
            if account is None:
                # Same cost as a real check so timing does not reveal the miss.
                await asyncio.to_thread(self.hasher.verify, password, self.hasher.dummy_hash)
                logger.info("Login failed: unknown email")
                raise UnauthorizedError(INVALID_CREDENTIALS)

            if not account.is_active:
                logger.info("Login failed: account inactive", account_id=account.id)
                raise UnauthorizedError(ACCOUNT_DEACTIVATED)

            if not await asyncio.to_thread(self.hasher.verify, password, account.password_hash):
                logger.info("Login failed: wrong password", account_id=account.id)
                raise UnauthorizedError(INVALID_CREDENTIALS)

            if self.hasher.needs_rehash(account.password_hash):
                new_hash = await asyncio.to_thread(self.hasher.hash, password)
                await self.accounts.update_password_hash(account.id, new_hash)
                logger.info("Password hash upgraded", account_id=account.id)

            result = await self._open_session(account)
            await self.session.commit()
        except AuthError:
            raise
        except (SQLAlchemyError, HashingError) as e:
            raise await self._internal("Login failed", e) from e

        logger.info("Login succeeded", account_id=account.id)
        return result

    async def refresh(self, refresh_token: str | None) -> RefreshResult:
        """Exchange a refresh token for a new access token.

        The refresh token itself is not rotated and stays valid.

        Raises:
            BadRequestError: If no refresh token was supplied.
            UnauthorizedError: If the token is unknown, revoked or expired, or
                its account is gone or inactive.
        """
        if not refresh_token:
            raise BadRequestError(REFRESH_TOKEN_REQUIRED)

        try:
            record = await self.sessions.get_by_token(refresh_token)
            if record is None or record.is_revoked:
                logger.info("Refresh failed: unknown or revoked token")
                raise UnauthorizedError(INVALID_REFRESH_TOKEN)

            if self.sessions.is_expired(record, self.clock()):
                logger.info("Refresh failed: token expired", session_id=record.id)
                raise UnauthorizedError(REFRESH_TOKEN_EXPIRED)

            account = await self.accounts.get_by_id(record.account_id)
            if account is None or not account.is_active:
                logger.info("Refresh failed: account unavailable", account_id=record.account_id)
                raise UnauthorizedError(ACCOUNT_UNAVAILABLE)
        except AuthError:
            raise
        except SQLAlchemyError as e:
            raise await self._internal("Refresh failed", e) from e

        access_token = self.issuer.issue_access_token(
            subject_id=account.id, email=account.email, role=account.role, now=self.clock()
        )
        logger.info("Access token refreshed", account_id=account.id)
        return RefreshResult(access_token=access_token, expires_in=self.issuer.expires_in)

    async def logout(self, refresh_token: str | None = None) -> None:
        """Revoke the given refresh token, if any.

        Never fails for unknown or already-revoked tokens.
        """
        if not refresh_token:
            return
        try:
            await self.sessions.revoke(refresh_token)
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._internal("Logout failed", e) from e
        logger.info("Logged out")

    async def get_profile(self, account_id: str) -> Account:
        """Return the public fields of an account.

        Raises:
            NotFoundError: If the account does not exist.
        """
        account = await self.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError(ACCOUNT_NOT_FOUND)
        return Account.from_model(account)

    async def _open_session(self, account: AccountModel) -> AuthResult:
        now = self.clock()
        access_token = self.issuer.issue_access_token(
            subject_id=account.id, email=account.email, role=account.role, now=now
        )
        refresh_token = self.issuer.issue_refresh_token()
        await self.sessions.create(
            account_id=account.id,
            token=refresh_token,
            lifetime=self.config.refresh_token_lifetime,
            now=now,
        )
        return AuthResult(
            account=Account.from_model(account),
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.issuer.expires_in,
        )

    async def _internal(self, event: str, error: Exception) -> InternalError:
        await self.session.rollback()
        logger.exception(event)
        return InternalError(UNEXPECTED_ERROR, detail=str(error))
