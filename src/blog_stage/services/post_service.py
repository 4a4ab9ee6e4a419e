"""Post query and command service."""
from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog_stage.db.base import utcnow
from blog_stage.models import Comment, CommentStatus, Post, PostStatus, User, UserRole
from blog_stage.repositories.comment_repo import CommentRepository
from blog_stage.repositories.post_repo import PostFilters, PostRepository
from blog_stage.schemas.comment import CommentResponse, CommentThread
from blog_stage.schemas.common import MessageResponse, PaginationMeta
from blog_stage.schemas.post import (
    PostCreate,
    PostDetail,
    PostPage,
    PostResponse,
    PostStats,
    PostUpdate,
    PostWithCommentCount,
)
from blog_stage.services.access import Principal, can_mutate
from blog_stage.services.errors import ForbiddenError, NotFoundError, UnauthorizedError
from blog_stage.services.pagination import PageOptions, total_pages

logger = logging.getLogger(__name__)


def build_comment_threads(comments: list[Comment]) -> list[CommentThread]:
    """Nest ``comments`` under their parents.

    Replies whose parent is absent from ``comments`` are dropped together
    with their subtree.
    """
    children: dict[str | None, list[Comment]] = defaultdict(list)
    for comment in comments:
        children[comment.parent_id].append(comment)

    def _thread(comment: Comment) -> CommentThread:
        return CommentThread(
            **CommentResponse.model_validate(comment).model_dump(),
            replies=[_thread(reply) for reply in children.get(comment.id, [])],
        )

    # ``comments`` arrive oldest first; top-level threads are shown newest first.
    roots = list(reversed(children.get(None, [])))
    return [_thread(root) for root in roots]


class PostService:
    """Service handling post listing, ownership checks and statistics."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.comments = CommentRepository(session)

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def _get_or_404(self, post_id: str) -> Post:
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def create_post(self, data: PostCreate, author_id: str | None) -> Post:
        """Store a new post owned by ``author_id``.

        Raises:
            UnauthorizedError: If no author is supplied.
        """
        if not author_id:
            raise UnauthorizedError("You are unauthorized!")

        post = Post(
            title=data.title,
            content=data.content,
            thumbnail=data.thumbnail,
            status=data.status,
            is_featured=False,
            views=0,
            author_id=author_id,
        )
        post.tags = data.tags
        self.posts.add(post)
        self._commit()
        self.session.refresh(post)
        logger.info("Post %s created by %s", post.id, author_id)
        return post

    def get_all_posts(self, filters: PostFilters, options: PageOptions) -> PostPage:
        """Return a filtered, sorted page of posts in the pagination envelope."""
        posts, total = self.posts.list_page(filters, options)
        return PostPage(
            data=[PostResponse.model_validate(post) for post in posts],
            pagination=PaginationMeta(
                total=total,
                page=options.page,
                limit=options.limit,
                total_pages=total_pages(total, options.limit),
            ),
        )

    def get_post_by_id(self, post_id: str) -> PostDetail:
        """Return a post with its approved comment threads, counting the view."""
        if not self.posts.exists(post_id):
            raise NotFoundError("Post not found")

        self.posts.increment_views(post_id)
        self._commit()

        post = self._get_or_404(post_id)
        self.session.refresh(post)
        approved = self.comments.list_for_post(post_id, CommentStatus.APPROVED)
        return PostDetail(
            **PostResponse.model_validate(post).model_dump(),
            comments=build_comment_threads(approved),
        )

    def get_my_posts(self, author_id: str | None) -> list[PostWithCommentCount]:
        """Return every post written by ``author_id``; the result is not paginated."""
        if not author_id:
            raise UnauthorizedError("You are unauthorized!")
        rows = self.posts.list_by_author_with_comment_counts(author_id)
        return [
            PostWithCommentCount(
                **PostResponse.model_validate(post).model_dump(),
                comment_count=count,
            )
            for post, count in rows
        ]

    def update_post(self, post_id: str, patch: PostUpdate, principal: Principal) -> Post:
        """Apply the fields present in ``patch`` to a post the caller may change.

        ``is_featured`` is an editorial flag; it is ignored unless the caller
        is an administrator.

        Raises:
            NotFoundError: If the post does not exist.
            ForbiddenError: If the caller is neither the author nor an admin.
        """
        post = self._get_or_404(post_id)
        if not can_mutate(principal, post.author_id):
            logger.warning("User %s denied update of post %s", principal.id, post_id)
            raise ForbiddenError("You are not the owner/creator of the post!")

        changes = patch.model_dump(exclude_unset=True)
        if not principal.is_admin:
            changes.pop("is_featured", None)

        tags = changes.pop("tags", None)
        if tags is not None:
            # Old rows must be gone before new ones reuse (post_id, position).
            post.tag_links.clear()
            self.session.flush()
            post.tags = tags

        for key, value in changes.items():
            setattr(post, key, value)
        post.updated_at = utcnow()

        self._commit()
        self.session.refresh(post)
        logger.info("Post %s updated by %s (%s)", post.id, principal.id, ", ".join(changes))
        return post

    def delete_post(self, post_id: str, principal: Principal) -> MessageResponse:
        """Delete a post the caller owns, or any post for administrators."""
        post = self._get_or_404(post_id)
        if not can_mutate(principal, post.author_id):
            logger.warning("User %s denied deletion of post %s", principal.id, post_id)
            raise ForbiddenError("You are not the owner/creator of the post!")

        self.posts.delete(post)
        self._commit()
        logger.info("Post %s deleted by %s", post_id, principal.id)
        return MessageResponse(message="Post deleted successfully")

    def get_stats(self) -> PostStats:
        """Return aggregate counts for posts, comments, users and views."""
        post_counts = self.posts.count_by_status()
        comment_counts = self.comments.count_by_status()
        role_counts = {role: 0 for role in UserRole}
        for role, count in self.session.execute(
            select(User.role, func.count()).group_by(User.role)
        ):
            role_counts[UserRole(role)] = int(count)

        return PostStats(
            total_post=sum(post_counts.values()),
            published_posts=post_counts[PostStatus.PUBLISHED],
            draft_posts=post_counts[PostStatus.DRAFT],
            archived_posts=post_counts[PostStatus.ARCHIVED],
            total_comments=sum(comment_counts.values()),
            approved_comment=comment_counts[CommentStatus.APPROVED],
            reject_comment=comment_counts[CommentStatus.REJECT],
            total_users=sum(role_counts.values()),
            admin_count=role_counts[UserRole.ADMIN],
            user_count=role_counts[UserRole.USER],
            total_views=self.posts.total_views(),
        )
