"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationMeta(CamelModel):
    """Paging information returned alongside list results."""

    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class MessageResponse(CamelModel):
    """Confirmation returned by commands that have no other payload."""

    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    """Error envelope used for every 4xx response."""

    success: bool = False
    message: str
    errors: list[str] | None = None
