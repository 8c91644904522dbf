"""Domain services for Inkpress.

Services hold the business flows that span the account and session stores.
"""

from inkpress.domain.services.account_service import AccountService
from inkpress.domain.services.auth_service import (
    AuthResult,
    AuthService,
    RefreshResult,
    normalize_email,
)
from inkpress.domain.services.password_validator import (
    PasswordValidator,
    ValidationIssue,
    default_password_validator,
    validate_name,
    validate_username,
)

__all__ = [
    "AccountService",
    "AuthResult",
    "AuthService",
    "PasswordValidator",
    "RefreshResult",
    "ValidationIssue",
    "default_password_validator",
    "normalize_email",
    "validate_name",
    "validate_username",
]
