"""Pydantic schemas for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request body for account registration."""

    email: EmailStr = Field(..., description="Account email address")
    username: str = Field(..., min_length=1, description="Unique username")
    password: str = Field(..., min_length=1, description="Account password")
    first_name: str | None = Field(None, description="Optional first name")
    last_name: str | None = Field(None, description="Optional last name")


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")


class RefreshRequest(BaseModel):
    """Request body for exchanging a refresh token."""

    refresh_token: str | None = Field(None, description="Refresh token from login")


class LogoutRequest(BaseModel):
    """Request body for logout; the token is optional."""

    refresh_token: str | None = Field(None, description="Refresh token to revoke")


class AccountResponse(BaseModel):
    """Public account fields."""

    id: str = Field(..., description="Account ID (UUID)")
    email: str = Field(..., description="Account email address")
    username: str = Field(..., description="Unique username")
    first_name: str | None = None
    last_name: str | None = None
    role: str = Field(..., description="Role tag")
    is_active: bool = Field(..., description="Whether the account can log in")
    is_verified: bool = Field(..., description="Whether the email is verified")
    created_at: datetime = Field(..., description="When the account was created")
    updated_at: datetime = Field(..., description="When the account was last updated")

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Response for successful authentication (login/register)."""

    token: str = Field(..., description="Access token")
    refresh_token: str = Field(..., description="Opaque refresh token")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    account: AccountResponse = Field(..., description="Account information")


class TokenRefreshResponse(BaseModel):
    """Response for a successful token refresh."""

    token: str = Field(..., description="New access token")
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class ValidationErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str = Field(..., description="Field name that failed validation")
    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Machine-readable error code")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Error kind")
    message: str = Field(..., description="Human-readable error message")
    details: list[ValidationErrorDetail] | None = None
    detail: str | None = Field(None, description="Diagnostics, outside production only")
