# src/blog_stage/api/endpoints/comments.py
"""Comment-related endpoints for the blog API."""

from __future__ import annotations

from fastapi import APIRouter, status

from blog_stage.api.dependencies import AdminDep, AnyUserDep, CommentServiceDep
from blog_stage.models import Comment
from blog_stage.schemas.comment import (
    CommentCreate,
    CommentModerate,
    CommentResponse,
    CommentUpdate,
)
from blog_stage.schemas.common import ErrorResponse, MessageResponse

router = APIRouter(
    prefix="/comments",
    tags=["comments"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


@router.get("/author/{author_id}", response_model=list[CommentResponse])
async def get_comments_by_author(
    author_id: str,
    service: CommentServiceDep,
) -> list[Comment]:
    """List every comment written by an author."""
    return service.get_comments_by_author(author_id)


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment_by_id(
    comment_id: str,
    service: CommentServiceDep,
) -> Comment:
    """Get a specific comment by ID."""
    return service.get_comment_by_id(comment_id)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    principal: AnyUserDep,
    service: CommentServiceDep,
) -> Comment:
    """Comment on a post, or reply to a comment with ``parentId``."""
    return service.create_comment(comment_data, principal.id)


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    patch: CommentUpdate,
    principal: AnyUserDep,
    service: CommentServiceDep,
) -> Comment:
    """Edit a comment (author or admin)."""
    return service.update_comment(comment_id, patch, principal)


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: str,
    principal: AnyUserDep,
    service: CommentServiceDep,
) -> MessageResponse:
    """Delete a comment and its replies (author or admin)."""
    return service.delete_comment(comment_id, principal)


@router.patch("/{comment_id}/moderate", response_model=CommentResponse)
async def moderate_comment(
    comment_id: str,
    moderation: CommentModerate,
    _admin: AdminDep,
    service: CommentServiceDep,
) -> Comment:
    """Approve or reject a comment (admin only)."""
    return service.moderate_comment(comment_id, moderation)
