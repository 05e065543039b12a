"""Error taxonomy raised by the media services.

Services raise these instead of ``HTTPException`` so they stay usable outside
a request; ``main.py`` maps them onto JSON responses.
"""

from __future__ import annotations

from fastapi import status


class MediaError(Exception):
    """Base class for errors with a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(MediaError):
    """Malformed identifier or rejected upload payload."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(MediaError):
    """Requested entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(MediaError):
    """Requester may not act on the entity."""

    status_code = status.HTTP_403_FORBIDDEN


__all__ = ["MediaError", "InvalidInputError", "NotFoundError", "ForbiddenError"]
