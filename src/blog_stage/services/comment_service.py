"""Threaded comments with ownership checks and admin moderation."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog_stage.db.base import utcnow
from blog_stage.models import Comment, CommentStatus
from blog_stage.repositories.comment_repo import CommentRepository
from blog_stage.repositories.post_repo import PostRepository
from blog_stage.schemas.comment import CommentCreate, CommentModerate, CommentUpdate
from blog_stage.schemas.common import MessageResponse
from blog_stage.services.access import Principal, can_mutate
from blog_stage.services.errors import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_ALLOWED_STATUSES = ", ".join(status.value for status in CommentStatus)


def parse_comment_status(value: str | None) -> CommentStatus:
    """Return the ``CommentStatus`` named by ``value``.

    Raises:
        ValidationError: If ``value`` is missing or not a known status.
    """
    if not value:
        raise ValidationError(
            "Status is required",
            errors=[f"status must be one of: {_ALLOWED_STATUSES}"],
        )
    try:
        return CommentStatus(value)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid comment status '{value}'",
            errors=[f"status must be one of: {_ALLOWED_STATUSES}"],
        ) from exc


class CommentService:
    """Service implementing the comment lifecycle."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.comments = CommentRepository(session)
        self.posts = PostRepository(session)

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def _get_or_404(self, comment_id: str) -> Comment:
        comment = self.comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    def _ensure_can_mutate(self, comment: Comment, principal: Principal, action: str) -> None:
        if not can_mutate(principal, comment.author_id):
            logger.warning("User %s denied %s of comment %s", principal.id, action, comment.id)
            raise ForbiddenError("You are not the owner of this comment!")

    def _transition(self, comment: Comment, status: CommentStatus) -> None:
        if comment.status == status:
            raise ValidationError(
                f"Your provided status ({status.value}) is already up to date."
            )
        comment.status = status

    def create_comment(self, data: CommentCreate, author_id: str | None) -> Comment:
        """Store a new comment, or a reply when ``parent_id`` is given.

        Raises:
            UnauthorizedError: If no author is supplied.
            NotFoundError: If the post or the parent comment does not exist.
            ValidationError: If the parent belongs to another post.
        """
        if not author_id:
            raise UnauthorizedError("You are unauthorized!")

        if not self.posts.exists(data.post_id):
            raise NotFoundError("Post not found")

        if data.parent_id is not None:
            parent = self.comments.get_by_id(data.parent_id)
            if parent is None:
                raise NotFoundError("Parent comment not found")
            if parent.post_id != data.post_id:
                raise ValidationError("Parent comment belongs to a different post")

        comment = Comment(
            content=data.content,
            post_id=data.post_id,
            parent_id=data.parent_id,
            author_id=author_id,
            status=CommentStatus.APPROVED,
        )
        self.comments.add(comment)
        self._commit()
        self.session.refresh(comment)
        logger.info("Comment %s created on post %s by %s", comment.id, comment.post_id, author_id)
        return comment

    def get_comment_by_id(self, comment_id: str) -> Comment:
        return self._get_or_404(comment_id)

    def get_comments_by_author(self, author_id: str) -> list[Comment]:
        """Return all comments by ``author_id`` regardless of status."""
        return self.comments.list_by_author(author_id)

    def update_comment(self, comment_id: str, patch: CommentUpdate, principal: Principal) -> Comment:
        """Edit a comment the caller owns.

        A ``status`` change is a moderation action: it is refused for
        non-admin callers and follows the moderation rules for admins.
        """
        comment = self._get_or_404(comment_id)
        self._ensure_can_mutate(comment, principal, "update")

        changes = patch.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")

        new_status: CommentStatus | None = None
        if "status" in changes:
            if not principal.is_admin:
                raise ForbiddenError("Only administrators can change comment status")
            new_status = parse_comment_status(changes["status"])

        content = changes.get("content", comment.content)
        if content is None or not content.strip():
            raise ValidationError("Content must not be empty")

        if new_status is not None:
            self._transition(comment, new_status)
        comment.content = content

        comment.updated_at = utcnow()
        self._commit()
        self.session.refresh(comment)
        logger.info("Comment %s updated by %s", comment.id, principal.id)
        return comment

    def delete_comment(self, comment_id: str, principal: Principal) -> MessageResponse:
        """Delete a comment and, recursively, every reply beneath it."""
        comment = self._get_or_404(comment_id)
        self._ensure_can_mutate(comment, principal, "deletion")

        self.comments.delete(comment)
        self._commit()
        logger.info("Comment %s deleted by %s", comment_id, principal.id)
        return MessageResponse(message="Comment deleted successfully")

    def moderate_comment(self, comment_id: str, data: CommentModerate) -> Comment:
        """Move a comment between APPROVED and REJECT.

        Callers must already be authorized as administrators.

        Raises:
            ValidationError: If the status is missing, unknown or unchanged.
            NotFoundError: If the comment does not exist.
        """
        status = parse_comment_status(data.status)
        comment = self._get_or_404(comment_id)
        self._transition(comment, status)
        comment.updated_at = utcnow()

        self._commit()
        self.session.refresh(comment)
        logger.info("Comment %s moderated to %s", comment.id, status.value)
        return comment
