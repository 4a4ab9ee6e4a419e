# src/blog_stage/api/endpoints/posts.py
"""Post-related endpoints for the blog API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from blog_stage.api.dependencies import AdminDep, AnyUserDep, PostServiceDep
from blog_stage.models import Post, PostStatus
from blog_stage.repositories.post_repo import PostFilters
from blog_stage.schemas.common import ErrorResponse, MessageResponse
from blog_stage.schemas.post import (
    PostCreate,
    PostDetail,
    PostPage,
    PostResponse,
    PostStats,
    PostUpdate,
    PostWithCommentCount,
)
from blog_stage.services.errors import ValidationError
from blog_stage.services.pagination import normalize

router = APIRouter(
    prefix="/posts",
    tags=["posts"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


def parse_tags(raw: str | None) -> list[str]:
    """Split a comma-separated ``tags`` query value, dropping blanks."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def parse_bool_flag(raw: str | None) -> bool | None:
    """Map ``"true"``/``"false"`` to booleans; anything else means "no filter"."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


def parse_post_status(raw: str | None) -> PostStatus | None:
    if not raw:
        return None
    try:
        return PostStatus(raw)
    except ValueError as exc:
        allowed = ", ".join(post_status.value for post_status in PostStatus)
        raise ValidationError(
            f"Invalid post status '{raw}'",
            errors=[f"status must be one of: {allowed}"],
        ) from exc


@router.get("", response_model=PostPage)
async def get_all_posts(
    service: PostServiceDep,
    search: str | None = Query(None, description="Match against title, content or tag"),
    tags: str | None = Query(None, description="Comma-separated tags; any match"),
    is_featured: str | None = Query(None, alias="isFeatured"),
    post_status: str | None = Query(None, alias="status"),
    author_id: str | None = Query(None, alias="authorId"),
    page: str | None = Query(None),
    limit: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
) -> PostPage:
    """List posts with search, filters, pagination and sorting."""
    filters = PostFilters(
        search=search or None,
        tags=parse_tags(tags),
        is_featured=parse_bool_flag(is_featured),
        status=parse_post_status(post_status),
        author_id=author_id or None,
    )
    options = normalize(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)
    return service.get_all_posts(filters, options)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    principal: AnyUserDep,
    service: PostServiceDep,
) -> Post:
    """Create a new post owned by the caller."""
    return service.create_post(post_data, principal.id)


@router.get("/my-posts", response_model=list[PostWithCommentCount])
async def get_my_posts(
    principal: AnyUserDep,
    service: PostServiceDep,
) -> list[PostWithCommentCount]:
    """Return every post written by the caller, newest first."""
    return service.get_my_posts(principal.id)


@router.get("/stats", response_model=PostStats)
async def get_stats(
    _admin: AdminDep,
    service: PostServiceDep,
) -> PostStats:
    """Return blog-wide statistics (admin only)."""
    return service.get_stats()


@router.get("/{post_id}", response_model=PostDetail)
async def get_post_by_id(
    post_id: str,
    service: PostServiceDep,
) -> PostDetail:
    """Get a specific post with its approved comments."""
    return service.get_post_by_id(post_id)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    patch: PostUpdate,
    principal: AnyUserDep,
    service: PostServiceDep,
) -> Post:
    """Partially update a post (author or admin)."""
    return service.update_post(post_id, patch, principal)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    principal: AnyUserDep,
    service: PostServiceDep,
) -> MessageResponse:
    """Delete a post (author or admin)."""
    return service.delete_post(post_id, principal)
