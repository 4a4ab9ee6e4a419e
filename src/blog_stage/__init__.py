"""Blog Stage: a blog backend with posts, threaded comments and moderation."""

__version__ = "1.0.0"
