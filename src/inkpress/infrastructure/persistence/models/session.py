"""SQLAlchemy model for refresh-token sessions.

Each row is one login session. The refresh token itself is never stored;
only its SHA-256 digest is, for lookup.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpress.infrastructure.persistence.database import Base, utcnow


class SessionModel(Base):
    """Refresh-token session owned by exactly one account.

    A session is usable only while it is neither revoked nor expired. Both
    conditions are terminal; rows are never deleted by the application.
    """

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    # Token hash (SHA-256) - indexed for fast lookup
    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    account_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    is_revoked: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    account = relationship("AccountModel", back_populates="sessions")

    def __repr__(self) -> str:
        return (
            f"SessionModel(id={self.id!r}, account_id={self.account_id!r}, "
            f"is_revoked={self.is_revoked!r})"
        )
