# src/game_media/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .media import router as media_router

__all__ = ["media_router"]
