"""Persistence repositories for database operations."""

from inkpress.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from inkpress.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
    SessionConflictError,
)

__all__ = [
    "AccountRepository",
    "SessionRepository",
    "SessionConflictError",
]
