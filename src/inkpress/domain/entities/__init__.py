"""Domain entities for Inkpress.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from inkpress.domain.entities.account import ROLE_ADMIN, ROLE_USER, ROLES, Account

__all__ = [
    "Account",
    "ROLE_ADMIN",
    "ROLE_USER",
    "ROLES",
]
