"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import (
    CommentCreate,
    CommentModerate,
    CommentResponse,
    CommentThread,
    CommentUpdate,
)
from .common import ErrorResponse, MessageResponse, PaginationMeta
from .post import (
    PostCreate,
    PostDetail,
    PostPage,
    PostResponse,
    PostStats,
    PostUpdate,
    PostWithCommentCount,
)
from .user import SignInRequest, SignUpRequest, TokenResponse, UserResponse

__all__ = [
    "CommentCreate", "CommentModerate", "CommentResponse", "CommentThread", "CommentUpdate",
    "ErrorResponse", "MessageResponse", "PaginationMeta",
    "PostCreate", "PostDetail", "PostPage", "PostResponse", "PostStats", "PostUpdate",
    "PostWithCommentCount",
    "SignInRequest", "SignUpRequest", "TokenResponse", "UserResponse",
]
