"""Deletion of a user's own posts."""
from __future__ import annotations

import logging

from game_media.core.errors import ForbiddenError, InvalidInputError
from game_media.models import User
from game_media.repositories import Stores

logger = logging.getLogger(__name__)


def delete_post(stores: Stores, post_id: str, game_id: str | None, requester: User) -> str:
    """Delete ``post_id`` if ``requester`` authored it and return its id.

    The post leaves the author's and the game's media lists in the same
    flush as the row itself; the caller commits.

    Raises:
        ForbiddenError: If the requester did not write the post.
        InvalidInputError: If ``game_id`` names a different game than the post's.
    """
    if not stores.posts.is_authored_by(post_id, requester.id):
        raise ForbiddenError("User is not the author of the post")

    post = stores.posts.get_by_id(post_id)
    if game_id and game_id != post.game_id:
        raise InvalidInputError("Invalid Game ID.")

    game = post.game
    stores.posts.delete(post)
    # Reload both media lists on next access so they no longer hold the post.
    stores.session.expire(requester, ["media"])
    if game is not None:
        stores.session.expire(game, ["media"])
    logger.info("User %s deleted post %s", requester.id, post_id)
    return post_id
