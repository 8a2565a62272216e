"""Pydantic schemas for users and authentication."""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from jobly.schemas.common import (
    CamelInput,
    CamelModel,
    EmailAddress,
    check_password_bytes,
    require_not_null,
)


class UserRegister(CamelInput):
    """Self-service registration payload."""

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=72)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: EmailAddress = Field(min_length=6, max_length=60)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class UserCreate(UserRegister):
    """Admin-only payload which may grant the admin flag."""

    is_admin: bool = False


class UserUpdate(CamelInput):
    """Schema for patching a user; ``username`` and ``isAdmin`` are not updatable."""

    password: str | None = Field(default=None, min_length=5, max_length=72)
    first_name: str | None = Field(default=None, min_length=1, max_length=30)
    last_name: str | None = Field(default=None, min_length=1, max_length=30)
    email: EmailAddress | None = None

    @field_validator("password", "first_name", "last_name", "email")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        return require_not_null(value, info.field_name)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str | None) -> str | None:
        return value if value is None else check_password_bytes(value)


class TokenRequest(CamelInput):
    """Credentials exchanged for a token."""

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1)


class TokenResponse(CamelModel):
    token: str


class UserResponse(CamelModel):
    """Schema returned for users; never includes the password hash."""

    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserEnvelope(CamelModel):
    user: UserResponse


class UserCreatedEnvelope(CamelModel):
    user: UserResponse
    token: str


class UserListEnvelope(CamelModel):
    users: list[UserResponse]


class UserDeleted(CamelModel):
    deleted: str


__all__ = [
    "TokenRequest",
    "TokenResponse",
    "UserCreate",
    "UserCreatedEnvelope",
    "UserDeleted",
    "UserEnvelope",
    "UserListEnvelope",
    "UserRegister",
    "UserResponse",
    "UserUpdate",
]
