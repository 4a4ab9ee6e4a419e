# src/blog_stage/models/user.py
"""SQLAlchemy models for user accounts."""

from __future__ import annotations

import enum

from sqlalchemy import Boolean, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog_stage.db.base import Base, TimestampMixin, new_id


class UserRole(str, enum.Enum):
    """Roles understood by the access guard."""

    USER = "USER"
    ADMIN = "ADMIN"


class UserStatus(str, enum.Enum):
    """Account status; only ACTIVE accounts may act on the API."""

    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"


class User(TimestampMixin, Base):
    """Registered account, authenticated by e-mail and password."""

    __tablename__ = "user_account"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        default=UserRole.USER,
        nullable=False,
    )
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus, name="user_status"),
        default=UserStatus.ACTIVE,
        nullable=False,
    )

    @property
    def is_admin(self) -> bool:
        """Return True if the account holds the ADMIN role."""
        return self.role == UserRole.ADMIN
