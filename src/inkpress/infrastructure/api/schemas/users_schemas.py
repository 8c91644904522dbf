"""Pydantic schemas for account maintenance endpoints."""

from pydantic import BaseModel, Field


class UpdateProfileRequest(BaseModel):
    """Request body for profile updates; omitted fields are unchanged."""

    first_name: str | None = Field(None, description="New first name")
    last_name: str | None = Field(None, description="New last name")
    username: str | None = Field(None, description="New username")


class UpdateRoleRequest(BaseModel):
    """Request body for changing an account's role."""

    role: str = Field(..., description="Role tag: 'user' or 'admin'")


class UpdateStatusRequest(BaseModel):
    """Request body for activating or deactivating an account."""

    is_active: bool = Field(..., description="Whether the account may log in")
