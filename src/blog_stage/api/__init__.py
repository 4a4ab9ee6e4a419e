# src/blog_stage/api/__init__.py
"""HTTP API routers."""

from .endpoints import auth_router, comments_router, posts_router

__all__ = ["auth_router", "comments_router", "posts_router"]
