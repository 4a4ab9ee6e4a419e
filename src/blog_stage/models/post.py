# src/blog_stage/models/post.py
"""SQLAlchemy models for posts and their tags."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog_stage.db.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from .comment import Comment

TITLE_MAX_LENGTH = 225
TAG_MAX_LENGTH = 100


class PostStatus(str, enum.Enum):
    """Publication state of a post."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class Post(TimestampMixin, Base):
    """Blog post owned by a single author."""

    __tablename__ = "post"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[PostStatus] = mapped_column(
        Enum(PostStatus, name="post_status"),
        default=PostStatus.DRAFT,
        nullable=False,
    )
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # Nullable so that posts survive the removal of their author account.
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    tag_links: Mapped[list[PostTag]] = relationship(
        "PostTag",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostTag.position",
        lazy="selectin",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
    )

    @property
    def tags(self) -> list[str]:
        """Return tags in the order they were supplied."""
        return [link.tag for link in self.tag_links]

    @tags.setter
    def tags(self, values: list[str]) -> None:
        self.tag_links = [PostTag(tag=tag, position=index) for index, tag in enumerate(values)]


class PostTag(Base):
    """A single tag attached to a post; ``position`` keeps the tag order."""

    __tablename__ = "post_tag"

    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    tag: Mapped[str] = mapped_column(String(TAG_MAX_LENGTH), nullable=False, index=True)

    post: Mapped[Post] = relationship("Post", back_populates="tag_links")
