"""Image content-type checks and data URI encoding."""

from __future__ import annotations

import base64

from fastapi import UploadFile

from game_media.core.errors import InvalidInputError
from game_media.core.settings import settings


def is_valid_image(content_type: str | None) -> bool:
    """Return True when ``content_type`` is on the configured image whitelist."""
    if not content_type:
        return False
    normalized = content_type.split(";", 1)[0].strip().lower()
    return normalized in {value.lower() for value in settings.allowed_image_types}


def to_data_uri(data: bytes, content_type: str) -> str:
    """Encode raw image bytes as a ``data:`` URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


async def read_upload_file(upload: UploadFile, max_bytes: int, chunk_size: int = 64 * 1024) -> bytes:
    """Read an uploaded file, stopping as soon as it exceeds ``max_bytes``.

    Raises:
        InvalidInputError: If the file is larger than ``max_bytes``.
    """
    chunks: list[bytes] = []
    total = 0
    while chunk := await upload.read(min(chunk_size, max_bytes + 1 - total)):
        total += len(chunk)
        if total > max_bytes:
            raise InvalidInputError("Image too large.")
        chunks.append(chunk)
    return b"".join(chunks)
