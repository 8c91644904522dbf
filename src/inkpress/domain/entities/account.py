"""Account entity as exposed to callers.

The public view of a registered account. It deliberately has no password
hash field, so nothing built from it can leak one.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inkpress.infrastructure.persistence.models import AccountModel

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = frozenset({ROLE_USER, ROLE_ADMIN})


@dataclass(frozen=True)
class Account:
    """Public fields of an account.

    Attributes:
        id: Unique identifier (UUID string).
        email: Normalised email address.
        username: Unique username.
        first_name: Optional first name.
        last_name: Optional last name.
        is_active: Whether the account can authenticate.
        is_verified: Informational verification flag.
        role: Coarse authorization tag.
        created_at: Timestamp when the account was created.
        updated_at: Timestamp when the account was last updated.
    """

    id: str
    email: str
    username: str
    first_name: str | None
    last_name: str | None
    is_active: bool
    is_verified: bool
    role: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, model: "AccountModel") -> "Account":
        """Build the public view from an ORM row."""
        return cls(
            id=model.id,
            email=model.email,
            username=model.username,
            first_name=model.first_name,
            last_name=model.last_name,
            is_active=model.is_active,
            is_verified=model.is_verified,
            role=model.role,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
