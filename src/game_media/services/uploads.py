"""Validation and creation of new posts."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from game_media.core.errors import InvalidInputError
from game_media.core.settings import settings
from game_media.models import (
    Post,
    PostPayload,
    PostType,
    ScreenshotPayload,
    TextPayload,
    User,
    VideoPayload,
)
from game_media.repositories import Stores

from .images import is_valid_image

logger = logging.getLogger(__name__)

_VIDEO_ID = r"([0-9A-Za-z_-]*)"
YOUTUBE_URL_RE = re.compile(
    rf"youtube\.com/watch\?(?:.*&)?v={_VIDEO_ID}"
    rf"|youtube\.com/embed/{_VIDEO_ID}"
    rf"|youtu\.be/{_VIDEO_ID}"
)
EMBED_URL_TEMPLATE = "https://youtube.com/embed/{video_id}"


@dataclass(frozen=True)
class ImageUpload:
    data: bytes
    content_type: str | None


@dataclass(frozen=True)
class UploadSubmission:
    """Raw fields of an upload form; only the payload matching ``type`` is read."""

    title: str | None
    game_id: str | None
    tags: str | None
    type: str | None
    image: ImageUpload | None = None
    video: str | None = None
    text: str | None = None


def parse_tags(raw: str | None) -> list[str]:
    """Split comma-separated tags, trimming blanks and repeated tags."""
    tags: list[str] = []
    for part in (raw or "").split(","):
        tag = part.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def normalize_video_url(url: str | None) -> str:
    """Return the embed URL for a YouTube watch, embed or short link.

    Raises:
        InvalidInputError: If no video id can be extracted.
    """
    match = YOUTUBE_URL_RE.search(url or "")
    if match is None:
        raise InvalidInputError("Invalid youtube URL")
    video_id = next((group for group in match.groups() if group), None)
    if not video_id:
        raise InvalidInputError("Invalid youtube URL")
    return EMBED_URL_TEMPLATE.format(video_id=video_id)


def _build_payload(submission: UploadSubmission) -> PostPayload:
    try:
        post_type = PostType(submission.type)
    except ValueError as exc:
        raise InvalidInputError("Invalid upload.") from exc

    if post_type is PostType.SCREENSHOT:
        image = submission.image
        if image is None or not image.data:
            raise InvalidInputError("No image uploaded.")
        if not is_valid_image(image.content_type):
            raise InvalidInputError("Invalid image.")
        if len(image.data) > settings.max_upload_bytes:
            raise InvalidInputError("Image too large.")
        return ScreenshotPayload(data=image.data, content_type=image.content_type)

    if post_type is PostType.VIDEO:
        return VideoPayload(url=normalize_video_url(submission.video))

    body = submission.text or ""
    if not body or len(body) > settings.max_text_length:
        raise InvalidInputError("Invalid text.")
    return TextPayload(body=body)


def create_post(stores: Stores, submission: UploadSubmission, author: User) -> Post:
    """Validate ``submission`` and stage the new post.

    The post joins the author's and the game's media lists through its
    foreign keys, so both sides are written in the caller's transaction.

    Raises:
        InvalidInputError: On the first failed validation.
    """
    title = submission.title or ""
    if not title.strip():
        raise InvalidInputError("Invalid title.")

    game = stores.games.get_by_id(submission.game_id) if submission.game_id else None
    if game is None:
        raise InvalidInputError("Invalid Game ID.")

    tags = parse_tags(submission.tags)
    payload = _build_payload(submission)

    post = Post(title=title, author=author, game=game, likes=0)
    post.payload = payload
    post.tags = tags
    stores.posts.add(post)
    logger.info("User %s uploaded %s post %s to game %s", author.id, post.type, post.id, game.id)
    return post
