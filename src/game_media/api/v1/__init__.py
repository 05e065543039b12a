"""Version 1 API endpoints."""

from .endpoints import media_router

__all__ = ["media_router"]
