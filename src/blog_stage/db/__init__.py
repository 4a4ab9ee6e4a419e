"""Database base classes, engine and sessions."""

from .base import Base, TimestampMixin, new_id, utcnow
from .session import SessionLocal, engine, get_db, session_scope

__all__ = [
    "Base",
    "SessionLocal",
    "TimestampMixin",
    "engine",
    "get_db",
    "new_id",
    "session_scope",
    "utcnow",
]
