# src/blog_stage/services/__init__.py
"""Business logic services for the Blog Stage application."""
