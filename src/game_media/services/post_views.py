"""Serialization of posts into client views."""
from __future__ import annotations

from game_media.models import (
    Post,
    ScreenshotPayload,
    TextPayload,
    User,
    VideoPayload,
)
from game_media.repositories import Stores
from game_media.schemas.post import PostView

from .images import is_valid_image, to_data_uri


def serialize_post(stores: Stores, post: Post, viewer: User | None) -> PostView | None:
    """Build the client view of ``post`` as seen by ``viewer``.

    Returns None when the post must be omitted: empty payload, missing author,
    author blocked the viewer, missing game, unusable screenshot, or an
    unknown post type.
    """
    payload = post.payload
    if payload is None:
        return None

    author = stores.users.get_by_id(post.author_id)
    if author is None:
        return None

    if viewer is not None and stores.users.has_blocked(author.id, viewer.id):
        return None

    game = stores.games.get_by_id(post.game_id)
    if game is None:
        return None

    fields: dict[str, str] = {}
    if isinstance(payload, ScreenshotPayload):
        if not payload.data or not is_valid_image(payload.content_type):
            return None
        fields["screenshot"] = to_data_uri(payload.data, payload.content_type or "")
    elif isinstance(payload, VideoPayload):
        fields["video"] = payload.url
    elif isinstance(payload, TextPayload):
        fields["text"] = payload.body
    else:
        return None

    return PostView(
        id=post.id,
        title=post.title,
        author_id=author.id,
        author_name=author.username,
        game_id=game.id,
        game_name=game.name,
        created=post.created.isoformat(),
        type=post.type,
        tags=post.tags,
        likes=post.likes,
        has_liked=viewer is not None and viewer.id in post.liker_ids,
        **fields,
    )
