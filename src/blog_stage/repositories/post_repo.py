"""Data access helpers for working with posts."""
from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from blog_stage.models import Comment, Post, PostStatus, PostTag
from blog_stage.services.errors import ValidationError
from blog_stage.services.pagination import PageOptions

__all__ = ["PostFilters", "PostRepository", "SORTABLE_FIELDS"]

SORTABLE_FIELDS = {
    "createdAt": Post.created_at,
    "updatedAt": Post.updated_at,
    "title": Post.title,
    "views": Post.views,
    "status": Post.status,
    "isFeatured": Post.is_featured,
}
SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class PostFilters:
    """Optional narrowing criteria for post listings."""

    search: str | None = None
    tags: list[str] = field(default_factory=list)
    is_featured: bool | None = None
    status: PostStatus | None = None
    author_id: str | None = None


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _posts_tagged(tags: list[str]) -> Select[tuple[str]]:
    return select(PostTag.post_id).where(PostTag.tag.in_(tags))


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: str) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def exists(self, post_id: str) -> bool:
        """Return True if a post with ``post_id`` is stored."""
        stmt = select(Post.id).where(Post.id == post_id)
        return self.session.scalar(stmt) is not None

    def _conditions(self, filters: PostFilters) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if filters.search:
            pattern = f"%{_escape_like(filters.search)}%"
            conditions.append(
                or_(
                    Post.title.ilike(pattern, escape="\\"),
                    Post.content.ilike(pattern, escape="\\"),
                    Post.id.in_(_posts_tagged([filters.search])),
                )
            )
        if filters.tags:
            # A post matches when it carries at least one requested tag.
            conditions.append(Post.id.in_(_posts_tagged(filters.tags)))
        if filters.is_featured is not None:
            conditions.append(Post.is_featured.is_(filters.is_featured))
        if filters.status is not None:
            conditions.append(Post.status == filters.status)
        if filters.author_id:
            conditions.append(Post.author_id == filters.author_id)
        return conditions

    @staticmethod
    def _ordering(options: PageOptions) -> list[ColumnElement[object]]:
        column = SORTABLE_FIELDS.get(options.sort_by)
        if column is None:
            raise ValidationError(
                f"Cannot sort by '{options.sort_by}'",
                errors=[f"sortBy must be one of: {', '.join(SORTABLE_FIELDS)}"],
            )
        direction = options.sort_order.lower()
        if direction not in SORT_DIRECTIONS:
            raise ValidationError(
                f"Invalid sort order '{options.sort_order}'",
                errors=["sortOrder must be 'asc' or 'desc'"],
            )
        keys = [column, Post.created_at, Post.id]
        if direction == "asc":
            return [key.asc() for key in keys]
        return [key.desc() for key in keys]

    def list_page(self, filters: PostFilters, options: PageOptions) -> tuple[list[Post], int]:
        """Return one page of matching posts and the total number of matches."""
        conditions = self._conditions(filters)
        ordering = self._ordering(options)

        total = self.session.scalar(
            select(func.count()).select_from(Post).where(*conditions)
        ) or 0
        stmt = (
            select(Post)
            .where(*conditions)
            .order_by(*ordering)
            .offset(options.skip)
            .limit(options.limit)
        )
        return list(self.session.scalars(stmt)), total

    def list_by_author_with_comment_counts(self, author_id: str) -> list[tuple[Post, int]]:
        """Return every post by ``author_id``, newest first, with comment counts."""
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        stmt = (
            select(Post, comment_count)
            .where(Post.author_id == author_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return [(post, int(count or 0)) for post, count in self.session.execute(stmt)]

    def increment_views(self, post_id: str) -> None:
        """Bump the view counter in a single UPDATE statement."""
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(views=Post.views + 1)
            .execution_options(synchronize_session=False)
        )

    def add(self, post: Post) -> Post:
        """Stage a new post and flush so that defaults are populated."""
        self.session.add(post)
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Remove a post together with its tags and comments."""
        self.session.delete(post)
        self.session.flush()

    def count_by_status(self) -> dict[PostStatus, int]:
        """Return the number of posts in each status."""
        rows = self.session.execute(select(Post.status, func.count()).group_by(Post.status))
        counts = {post_status: 0 for post_status in PostStatus}
        for post_status, count in rows:
            counts[PostStatus(post_status)] = int(count)
        return counts

    def total_views(self) -> int:
        """Return the sum of all post view counters."""
        return int(self.session.scalar(select(func.coalesce(func.sum(Post.views), 0))) or 0)
