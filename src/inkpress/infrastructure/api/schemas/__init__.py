"""API Schemas for request/response validation."""

from inkpress.infrastructure.api.schemas.auth_schemas import (
    AccountResponse,
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    TokenRefreshResponse,
    ValidationErrorDetail,
)
from inkpress.infrastructure.api.schemas.users_schemas import (
    UpdateProfileRequest,
    UpdateRoleRequest,
    UpdateStatusRequest,
)

__all__ = [
    "AccountResponse",
    "AuthResponse",
    "ErrorResponse",
    "LoginRequest",
    "LogoutRequest",
    "MessageResponse",
    "RefreshRequest",
    "RegisterRequest",
    "TokenRefreshResponse",
    "UpdateProfileRequest",
    "UpdateRoleRequest",
    "UpdateStatusRequest",
    "ValidationErrorDetail",
]
