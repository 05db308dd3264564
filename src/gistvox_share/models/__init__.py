"""Pydantic models for Gistvox records."""

from .post import Post, PUBLIC_AUDIENCE
from .user import User, ANONYMOUS
from .series import Series, SeriesListing

__all__ = [
    "Post",
    "PUBLIC_AUDIENCE",
    "User",
    "ANONYMOUS",
    "Series",
    "SeriesListing",
]
