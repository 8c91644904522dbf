"""SQLAlchemy models for the Inkpress auth tables.

All models inherit from the Base class defined in database.py and are
created on application startup outside production.
"""

from inkpress.infrastructure.persistence.models.account import AccountModel
from inkpress.infrastructure.persistence.models.session import SessionModel

__all__ = [
    "AccountModel",
    "SessionModel",
]
