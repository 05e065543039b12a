# src/game_media/models/__init__.py
"""SQLAlchemy models for the Game Media application."""

from .game import Game
from .post import (
    Post,
    PostLike,
    PostPayload,
    PostTag,
    PostType,
    ScreenshotPayload,
    TextPayload,
    VideoPayload,
)
from .user import User, UserBlock

__all__ = [
    "Game",
    "Post", "PostLike", "PostTag", "PostType", "PostPayload",
    "ScreenshotPayload", "VideoPayload", "TextPayload",
    "User", "UserBlock",
]
