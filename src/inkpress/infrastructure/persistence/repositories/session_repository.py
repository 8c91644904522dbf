"""Session store for refresh tokens.

Persists refresh-token sessions with their expiry and revocation state.
Tokens are looked up by their SHA-256 digest; the raw token never reaches
the database.
"""

import hashlib
from datetime import datetime, timedelta

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.core.errors import ConflictError
from inkpress.infrastructure.persistence.database import as_utc, utcnow
from inkpress.infrastructure.persistence.models import SessionModel


class SessionConflictError(ConflictError):
    """Raised when a refresh token collides with an existing one."""

    def __init__(self) -> None:
        super().__init__("Refresh token already exists")


class SessionRepository:
    """Repository for refresh-token sessions."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    @staticmethod
    def hash_token(token: str) -> str:
        """Hash a refresh token using SHA-256.

        Args:
            token: The raw refresh token.

        Lone surrogates are hashed as-is, so such a token simply matches
        no stored session.

        Returns:
            SHA-256 hex digest of the token.
        """
        return hashlib.sha256(token.encode("utf-8", "surrogatepass")).hexdigest()

    async def create(
        self,
        account_id: str,
        token: str,
        lifetime: timedelta,
        now: datetime | None = None,
    ) -> SessionModel:
        """Store a new, unrevoked session expiring after ``lifetime``.

        Args:
            account_id: Owning account.
            token: The raw refresh token.
            lifetime: How long the session stays valid.
            now: Creation time; defaults to the current UTC time.

        Returns:
            The stored session.

        Raises:
            SessionConflictError: If the token already exists.
        """
        created_at = now or utcnow()
        model = SessionModel(
            account_id=account_id,
            token_hash=self.hash_token(token),
            expires_at=created_at + lifetime,
            is_revoked=False,
            created_at=created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise SessionConflictError() from e
        return model

    async def get_by_token(self, token: str) -> SessionModel | None:
        """Look up a session by its raw refresh token.

        Args:
            token: The raw refresh token.

        Returns:
            The session if found, None otherwise.
        """
        stmt = select(SessionModel).where(
            SessionModel.token_hash == self.hash_token(token)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def revoke(self, token: str) -> None:
        """Revoke a session by its raw refresh token.

        Idempotent: unknown and already-revoked tokens are not an error.
        """
        await self._session.execute(
            update(SessionModel)
            .where(SessionModel.token_hash == self.hash_token(token))
            .values(is_revoked=True)
            .execution_options(synchronize_session="evaluate")
        )

    async def revoke_all_for_account(self, account_id: str) -> int:
        """Revoke every unrevoked session of an account.

        Returns:
            Number of sessions revoked.
        """
        result = await self._session.execute(
            update(SessionModel)
            .where(
                SessionModel.account_id == account_id,
                SessionModel.is_revoked == False,  # noqa: E712
            )
            .values(is_revoked=True)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount

    async def count_active_for_account(self, account_id: str, now: datetime | None = None) -> int:
        """Count sessions of an account that are still usable."""
        now = now or utcnow()
        result = await self._session.execute(
            select(func.count(SessionModel.id)).where(
                SessionModel.account_id == account_id,
                SessionModel.is_revoked == False,  # noqa: E712
                SessionModel.expires_at > now,
            )
        )
        return result.scalar_one() or 0

    @staticmethod
    def is_expired(record: SessionModel, now: datetime | None = None) -> bool:
        """True once ``now`` has reached the session's expiry."""
        return (now or utcnow()) >= as_utc(record.expires_at)

    @classmethod
    def is_valid(cls, record: SessionModel, now: datetime | None = None) -> bool:
        """True iff the session is not revoked and not yet expired."""
        return not record.is_revoked and not cls.is_expired(record, now)
