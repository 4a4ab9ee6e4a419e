# src/blog_stage/models/__init__.py
"""SQLAlchemy models for the Blog Stage application."""

from .comment import Comment, CommentStatus
from .post import Post, PostStatus, PostTag
from .user import User, UserRole, UserStatus

__all__ = [
    "Comment", "CommentStatus",
    "Post", "PostStatus", "PostTag",
    "User", "UserRole", "UserStatus",
]
