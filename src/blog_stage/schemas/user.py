"""User and authentication Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from blog_stage.models.user import UserRole, UserStatus

from .common import CamelModel


class SignUpRequest(CamelModel):
    """Schema for e-mail/password registration."""

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    image: str | None = None
    phone: str | None = Field(None, max_length=32)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class SignInRequest(CamelModel):
    """Schema for e-mail/password sign-in."""

    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class UserResponse(CamelModel):
    """Public view of an account; never includes the password hash."""

    id: str
    name: str
    email: str
    email_verified: bool
    image: str | None
    phone: str | None
    role: UserRole
    status: UserStatus
    created_at: datetime
    updated_at: datetime


class TokenResponse(CamelModel):
    """Response returned after a successful sign-in or verification."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    user: UserResponse
