"""Core configuration, security and logging helpers."""
