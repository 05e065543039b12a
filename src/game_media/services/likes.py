"""Like toggling for posts."""
from __future__ import annotations

import logging
from typing import NamedTuple

from game_media.core.errors import NotFoundError
from game_media.models import PostLike, User
from game_media.repositories import Stores

logger = logging.getLogger(__name__)


class LikeState(NamedTuple):
    likes: int
    has_liked: bool


def toggle_like(stores: Stores, post_id: str, viewer: User) -> LikeState:
    """Like the post if ``viewer`` has not yet, otherwise remove the like.

    The like counter is recomputed from the liker set rather than adjusted,
    so it cannot drift. Changes are flushed; the caller commits.

    Raises:
        NotFoundError: If the post does not exist.
    """
    post = stores.posts.get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")

    existing = next((like for like in post.liked_by if like.user_id == viewer.id), None)
    if existing is not None:
        post.liked_by.remove(existing)
        has_liked = False
    else:
        post.liked_by.append(PostLike(post_id=post.id, user_id=viewer.id))
        has_liked = True

    post.likes = len(post.liked_by)
    stores.session.flush()
    logger.info("User %s %s post %s", viewer.id, "liked" if has_liked else "unliked", post.id)
    return LikeState(likes=post.likes, has_liked=has_liked)
