# src/blog_stage/models/comment.py
"""SQLAlchemy models for threaded comments."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog_stage.db.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from .post import Post


class CommentStatus(str, enum.Enum):
    """Moderation state of a comment.

    New comments start APPROVED; administrators move them between the two
    states through moderation.
    """

    APPROVED = "APPROVED"
    REJECT = "REJECT"


class Comment(TimestampMixin, Base):
    """Comment on a post, optionally replying to another comment."""

    __tablename__ = "comment"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Reply chain; top-level comments have parent_id = NULL.
    parent_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    status: Mapped[CommentStatus] = mapped_column(
        Enum(CommentStatus, name="comment_status"),
        default=CommentStatus.APPROVED,
        nullable=False,
    )

    post: Mapped[Post] = relationship("Post", back_populates="comments")
    parent: Mapped[Comment | None] = relationship(
        "Comment",
        back_populates="replies",
        remote_side="Comment.id",
    )
    replies: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )
