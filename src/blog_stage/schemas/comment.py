"""Comment-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from blog_stage.models.comment import CommentStatus

from .common import CamelModel


class CommentCreate(CamelModel):
    """Schema for posting a comment or a reply."""

    content: str = Field(..., min_length=1)
    post_id: str = Field(..., min_length=1)
    parent_id: str | None = Field(None, description="Comment being replied to")

    @field_validator("content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class CommentUpdate(CamelModel):
    """Author edit; ``status`` is honoured for administrators only."""

    content: str | None = Field(None, min_length=1)
    status: str | None = None


class CommentModerate(CamelModel):
    """Moderation request body.

    ``status`` is kept as a plain string so that the service can report an
    unknown value with its own message.
    """

    status: str | None = None


class CommentResponse(CamelModel):
    """Schema for comment information returned by the API."""

    id: str
    content: str
    author_id: str
    post_id: str
    parent_id: str | None
    status: CommentStatus
    created_at: datetime
    updated_at: datetime


class CommentThread(CommentResponse):
    """Comment with its visible replies nested underneath."""

    replies: list[CommentThread] = Field(default_factory=list)
