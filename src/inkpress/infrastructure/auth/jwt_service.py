"""Access and refresh token services.

Access tokens are signed, self-contained JWTs carrying identity claims and
are verified without touching the database. Refresh tokens are opaque
random strings; their state lives in the session store.
"""

import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from inkpress.core.config import MIN_SECRET_KEY_LENGTH, AuthConfig
from inkpress.core.errors import ConfigurationError, UnauthorizedError

REFRESH_TOKEN_BYTES = 48

_REQUIRED_CLAIMS = ["sub", "email", "role", "iat", "exp", "iss"]


class InvalidTokenError(UnauthorizedError):
    """Raised for every access-token failure.

    Expired, forged, malformed and incomplete tokens are deliberately not
    distinguished.
    """

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class AccessTokenClaims:
    """Identity claims carried by an access token."""

    subject_id: str
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime
    token_id: str | None = None


def _check_secret(config: AuthConfig) -> None:
    if len(config.secret_key) < MIN_SECRET_KEY_LENGTH:
        raise ConfigurationError(
            f"Signing secret must be at least {MIN_SECRET_KEY_LENGTH} characters"
        )


class TokenIssuer:
    """Creates signed access tokens and opaque refresh tokens."""

    def __init__(self, config: AuthConfig) -> None:
        """Initialize the issuer.

        Args:
            config: Auth configuration with the signing secret and lifetimes.

        Raises:
            ConfigurationError: If the signing secret is too short.
        """
        _check_secret(config)
        self._config = config

    @property
    def access_token_lifetime(self) -> timedelta:
        """Configured access-token lifetime."""
        return self._config.access_token_lifetime

    @property
    def expires_in(self) -> int:
        """Access-token lifetime in whole seconds."""
        return int(self._config.access_token_lifetime.total_seconds())

    def issue_access_token(
        self,
        subject_id: str,
        email: str,
        role: str,
        now: datetime | None = None,
    ) -> str:
        """Create a signed access token.

        Args:
            subject_id: The account's unique identifier.
            email: The account's email address.
            role: The account's role tag.
            now: Issue time; defaults to the current UTC time.

        Returns:
            Encoded JWT access token.
        """
        issued_at = now or datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "iss": self._config.issuer,
            "sub": subject_id,
            "email": email,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + self._config.access_token_lifetime,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._config.secret_key, algorithm=self._config.algorithm)

    @staticmethod
    def issue_refresh_token() -> str:
        """Generate an opaque, high-entropy refresh token.

        The token carries no claims; it is only a lookup key.
        """
        return secrets.token_urlsafe(REFRESH_TOKEN_BYTES)


class TokenVerifier:
    """Validates access-token signatures and expiry.

    Safe to call on every protected request: no I/O is performed.
    """

    def __init__(self, config: AuthConfig) -> None:
        _check_secret(config)
        self._config = config

    def verify(self, token: str) -> AccessTokenClaims:
        """Validate an access token and extract its claims.

        Args:
            token: The encoded JWT.

        Returns:
            The verified claims.

        Raises:
            InvalidTokenError: On any signature, format, claim or expiry problem.
        """
        try:
            payload = jwt.decode(
                token,
                self._config.secret_key,
                algorithms=[self._config.algorithm],
                issuer=self._config.issuer,
                options={"require": _REQUIRED_CLAIMS},
                leeway=0,
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e

        subject_id = payload["sub"]
        email = payload["email"]
        role = payload["role"]
        if not all(isinstance(value, str) and value for value in (subject_id, email, role)):
            raise InvalidTokenError()

        try:
            return AccessTokenClaims(
                subject_id=subject_id,
                email=email,
                role=role,
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_id=payload.get("jti"),
            )
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidTokenError() from e
