"""Post-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field, field_validator, model_validator

from blog_stage.models.post import TAG_MAX_LENGTH, TITLE_MAX_LENGTH, PostStatus

from .comment import CommentThread
from .common import CamelModel, PaginationMeta

_NON_NULLABLE_FIELDS = ("title", "content", "tags", "status", "is_featured")

Tag = Annotated[str, Field(max_length=TAG_MAX_LENGTH)]


def _clean_tags(values: list[str]) -> list[str]:
    cleaned = [value.strip() for value in values]
    return [value for value in cleaned if value]


class PostCreate(CamelModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1)
    tags: list[Tag] = Field(..., description="Ordered list of tags")
    thumbnail: str | None = Field(None, description="Optional thumbnail URL")
    status: PostStatus = PostStatus.DRAFT

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("tags")
    @classmethod
    def _strip_tags(cls, value: list[str]) -> list[str]:
        return _clean_tags(value)


class PostUpdate(CamelModel):
    """Partial update; only fields present in the request are applied."""

    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = Field(None, min_length=1)
    tags: list[Tag] | None = None
    thumbnail: str | None = None
    status: PostStatus | None = None
    is_featured: bool | None = None

    @field_validator("tags")
    @classmethod
    def _strip_tags(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else _clean_tags(value)

    @model_validator(mode="after")
    def _reject_nulls(self) -> PostUpdate:
        for name in _NON_NULLABLE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class PostResponse(CamelModel):
    """Schema for post information returned by the API."""

    id: str
    title: str
    content: str
    thumbnail: str | None
    is_featured: bool
    status: PostStatus
    tags: list[str]
    views: int
    author_id: str | None
    created_at: datetime
    updated_at: datetime


class PostWithCommentCount(PostResponse):
    """Post row annotated with the number of comments it has."""

    comment_count: int = 0


class PostDetail(PostResponse):
    """Single post with its approved comment threads."""

    comments: list[CommentThread] = Field(default_factory=list)


class PostPage(CamelModel):
    """Pagination envelope for post listings."""

    data: list[PostResponse]
    pagination: PaginationMeta


class PostStats(CamelModel):
    """Aggregate counts for the admin dashboard."""

    total_post: int
    published_posts: int
    draft_posts: int
    archived_posts: int
    total_comments: int
    approved_comment: int
    reject_comment: int
    total_users: int
    admin_count: int
    user_count: int
    total_views: int
