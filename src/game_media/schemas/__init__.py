"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .post import (
    DeleteRequest,
    DeleteResponse,
    FeedResponse,
    LikeRequest,
    LikeResponse,
    PostView,
    UploadResponse,
)

__all__ = [
    "DeleteRequest", "DeleteResponse",
    "FeedResponse",
    "LikeRequest", "LikeResponse",
    "PostView",
    "UploadResponse",
]
