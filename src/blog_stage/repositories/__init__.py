"""Data access helpers wrapping SQLAlchemy queries."""

from .comment_repo import CommentRepository
from .post_repo import PostFilters, PostRepository

__all__ = ["CommentRepository", "PostFilters", "PostRepository"]
