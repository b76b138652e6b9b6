"""Pydantic schemas for user operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from taskhub.core.constants import (
    MAX_NAME_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from taskhub.core.permissions.roles import Role


class UserBase(BaseModel):
    """Base schema for user data."""

    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)


class UserUpdate(BaseModel):
    """Schema for a user updating a profile."""

    full_name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)


class UserRoleUpdate(BaseModel):
    """Schema for an administrator changing a user's global role."""

    role: Role


class UserResponse(UserBase):
    """Schema for user response data."""

    id: UUID
    role: Role
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    """Schema for listing users."""

    items: list[UserResponse]
    total: int
    page: int
    page_size: int


# ============================================================
# Authentication Schemas
# ============================================================


class RegisterRequest(UserBase):
    """Schema for user registration."""

    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )


class LoginRequest(BaseModel):
    """Schema for email/password login."""

    email: EmailStr
    password: str
