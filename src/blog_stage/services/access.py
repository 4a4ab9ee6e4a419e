"""Capability checks shared by route guards and services."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from blog_stage.models import User, UserRole


@dataclass(frozen=True)
class Principal:
    """The authenticated caller as seen by the service layer."""

    id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> Principal:
        return cls(id=user.id, role=user.role)


def authorize(principal: Principal | None, allowed_roles: Iterable[UserRole]) -> bool:
    """Return True if ``principal`` holds one of ``allowed_roles``."""
    if principal is None:
        return False
    return principal.role in set(allowed_roles)


def can_mutate(principal: Principal | None, owner_id: str | None) -> bool:
    """Return True if ``principal`` may change or delete a record owned by ``owner_id``."""
    if principal is None:
        return False
    if principal.is_admin:
        return True
    return owner_id is not None and principal.id == owner_id
