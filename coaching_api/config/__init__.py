"""
Application configuration using Pydantic settings.

Configuration comes from environment variables with sensible defaults.
Supports an in-memory store mode for local development.
"""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
