"""Data access helpers for working with comments."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blog_stage.models import Comment, CommentStatus

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, comment_id: str) -> Comment | None:
        return self.session.get(Comment, comment_id)

    def list_by_author(self, author_id: str) -> list[Comment]:
        """Return all comments written by ``author_id``, newest first."""
        stmt = (
            select(Comment)
            .where(Comment.author_id == author_id)
            .order_by(Comment.created_at.desc(), Comment.id)
        )
        return list(self.session.scalars(stmt))

    def list_for_post(self, post_id: str, status: CommentStatus | None = None) -> list[Comment]:
        """Return the comments of a post in creation order."""
        stmt = select(Comment).where(Comment.post_id == post_id)
        if status is not None:
            stmt = stmt.where(Comment.status == status)
        stmt = stmt.order_by(Comment.created_at, Comment.id)
        return list(self.session.scalars(stmt))

    def add(self, comment: Comment) -> Comment:
        self.session.add(comment)
        self.session.flush()
        return comment

    def delete(self, comment: Comment) -> None:
        """Remove a comment; replies are removed with it."""
        self.session.delete(comment)
        self.session.flush()

    def count_by_status(self) -> dict[CommentStatus, int]:
        """Return the number of comments in each status."""
        rows = self.session.execute(select(Comment.status, func.count()).group_by(Comment.status))
        counts = {comment_status: 0 for comment_status in CommentStatus}
        for comment_status, count in rows:
            counts[CommentStatus(comment_status)] = int(count)
        return counts
