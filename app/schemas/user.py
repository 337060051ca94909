"""Request/response schemas for user accounts and authentication."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.security import NAME_MAX_LEN, NAME_MIN_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.common import PagedQuery


def _clean_name(value: str) -> str:
    """Names are stored trimmed; whitespace-only names are rejected."""
    name = value.strip()
    if not name:
        raise ValueError("name must not be blank")
    return name


class SignUpRequest(BaseModel):
    """New account credentials. Email may be mandatory (ENFORCE_EMAIL)."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: EmailStr | None = None
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _clean_name(v)


class SignInRequest(BaseModel):
    name_or_email: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UserUpdate(BaseModel):
    """Partial update; at least one field must be set."""

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return None if v is None else _clean_name(v)


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str | None = None
    created_at: datetime
    updated_at: datetime
    admin: bool = False
    permission: int = 0


class UserSummary(BaseModel):
    """Compact user reference used in audit fields."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


class AuthResponse(BaseModel):
    """Returned by sign-up and admin creation: the account plus a bearer token."""

    user: UserResponse
    token: str


class UserListParams(PagedQuery):
    is_admin: bool = False
