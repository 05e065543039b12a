"""Feed assembly: search, sort, serialize and bucket posts by type."""
from __future__ import annotations

import logging
import re
from enum import StrEnum

from game_media.core.errors import InvalidInputError
from game_media.models import Post, PostType, User
from game_media.repositories import Stores
from game_media.schemas.post import FeedResponse

from .post_views import serialize_post

logger = logging.getLogger(__name__)


class FeedSort(StrEnum):
    TITLE_ASCENDING = "title-ascending"
    TITLE_DESCENDING = "title-descending"
    LIKES_ASCENDING = "likes-ascending"
    LIKES_DESCENDING = "likes-descending"

    @classmethod
    def parse(cls, value: str | None) -> FeedSort:
        """Return the sort for ``value``; unknown or missing keys sort by most liked."""
        try:
            return cls(value)
        except ValueError:
            return cls.LIKES_DESCENDING


def compile_search(search: str | None) -> re.Pattern[str]:
    """Compile a case-insensitive search pattern; empty input matches everything."""
    try:
        return re.compile(search or "", re.IGNORECASE)
    except re.error as exc:
        raise InvalidInputError("Invalid search pattern") from exc


def _matches(pattern: re.Pattern[str], post: Post) -> bool:
    if pattern.search(post.title):
        return True
    return any(pattern.search(tag) for tag in post.tags)


def _sorted_posts(stores: Stores, sort: FeedSort) -> list[Post]:
    if sort is FeedSort.TITLE_ASCENDING:
        return stores.posts.list_by_title(descending=False)
    if sort is FeedSort.TITLE_DESCENDING:
        return stores.posts.list_by_title(descending=True)
    if sort is FeedSort.LIKES_ASCENDING:
        return stores.posts.list_by_likes(descending=False)
    return stores.posts.list_by_likes(descending=True)


def build_feed(
    stores: Stores,
    viewer: User | None,
    *,
    search: str | None = None,
    sort: str | None = None,
) -> FeedResponse:
    """Return the posts matching ``search`` grouped into type buckets.

    Posts that are suppressed for the viewer or fail to serialize are skipped;
    one broken post never hides the rest of the feed.
    """
    pattern = compile_search(search)
    result = FeedResponse()

    for post in _sorted_posts(stores, FeedSort.parse(sort)):
        if not _matches(pattern, post):
            continue
        try:
            view = serialize_post(stores, post, viewer)
        except Exception:
            logger.warning("Skipping post %s that failed to serialize", post.id, exc_info=True)
            continue
        if view is None:
            continue
        getattr(result, PostType(view.type).bucket).append(view)

    return result
