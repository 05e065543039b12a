# tests/services/test_feed.py
"""Tests for feed search, ordering and bucketing."""

from unittest.mock import patch

import pytest
from sqlalchemy import inspect

from game_media.core.errors import InvalidInputError
from game_media.models import ScreenshotPayload, VideoPayload
from game_media.services import post_views
from game_media.services.feed import FeedSort, build_feed


def _titles(views) -> list[str]:
    return [view.title for view in views]


def test_posts_are_grouped_by_type(stores, test_user, game, make_post, png_bytes) -> None:
    make_post(test_user, game, title="Note")
    make_post(test_user, game, title="Clip", payload=VideoPayload(url="https://youtube.com/embed/x1"))
    make_post(
        test_user,
        game,
        title="Shot",
        payload=ScreenshotPayload(data=png_bytes, content_type="image/png"),
    )

    feed = build_feed(stores, None)

    assert _titles(feed.texts) == ["Note"]
    assert _titles(feed.videos) == ["Clip"]
    assert _titles(feed.screenshots) == ["Shot"]


def test_empty_feed_has_all_buckets(stores) -> None:
    feed = build_feed(stores, None)

    assert feed.model_dump() == {"screenshots": [], "videos": [], "texts": []}


def test_default_sort_is_most_liked_first(stores, test_user, game, make_post) -> None:
    make_post(test_user, game, title="meh", likes=1)
    make_post(test_user, game, title="hit", likes=10)
    make_post(test_user, game, title="ok", likes=5)

    assert _titles(build_feed(stores, None).texts) == ["hit", "ok", "meh"]
    assert _titles(build_feed(stores, None, sort="bogus").texts) == ["hit", "ok", "meh"]


def test_likes_ascending(stores, test_user, game, make_post) -> None:
    make_post(test_user, game, title="meh", likes=1)
    make_post(test_user, game, title="hit", likes=10)
    make_post(test_user, game, title="ok", likes=5)

    feed = build_feed(stores, None, sort="likes-ascending")

    assert _titles(feed.texts) == ["meh", "ok", "hit"]


def test_title_sort_ignores_case(stores, test_user, game, make_post) -> None:
    for title in ("banana", "Cherry", "apple"):
        make_post(test_user, game, title=title)

    ascending = build_feed(stores, None, sort="title-ascending")
    descending = build_feed(stores, None, sort="title-descending")

    assert _titles(ascending.texts) == ["apple", "banana", "Cherry"]
    assert _titles(descending.texts) == ["Cherry", "banana", "apple"]


def test_title_sort_follows_locale_order(stores, test_user, game, make_post) -> None:
    for title in ("zelda", "Ōkami", "Apple", "apple", "Éclair"):
        make_post(test_user, game, title=title)

    ascending = build_feed(stores, None, sort="title-ascending")
    descending = build_feed(stores, None, sort="title-descending")

    assert _titles(ascending.texts) == ["apple", "Apple", "Éclair", "Ōkami", "zelda"]
    assert _titles(descending.texts) == ["zelda", "Ōkami", "Éclair", "Apple", "apple"]


def test_search_matches_title_or_tag_case_insensitively(stores, test_user, game, make_post) -> None:
    make_post(test_user, game, title="Boss fight", tags=["hornet"])
    make_post(test_user, game, title="Secret room", tags=["Boss"])
    make_post(test_user, game, title="Music", tags=["ost"])

    feed = build_feed(stores, None, search="boss", sort="title-ascending")

    assert _titles(feed.texts) == ["Boss fight", "Secret room"]


def test_search_accepts_regular_expressions(stores, test_user, game, make_post) -> None:
    make_post(test_user, game, title="Run 1")
    make_post(test_user, game, title="Run 22")
    make_post(test_user, game, title="Runner")

    feed = build_feed(stores, None, search=r"^run \d+$", sort="title-ascending")

    assert _titles(feed.texts) == ["Run 1", "Run 22"]


def test_invalid_search_pattern_is_rejected(stores) -> None:
    with pytest.raises(InvalidInputError):
        build_feed(stores, None, search="(unclosed")


def test_suppressed_posts_are_skipped(
    stores, test_user, other_user, game, make_post, block
) -> None:
    make_post(test_user, game, title="Hidden from viewer")
    make_post(other_user, game, title="Visible")
    block(test_user, other_user)

    assert _titles(build_feed(stores, other_user).texts) == ["Visible"]
    assert len(build_feed(stores, test_user).texts) == 2


def test_failing_post_does_not_break_feed(stores, test_user, game, make_post) -> None:
    broken = make_post(test_user, game, title="Broken")
    make_post(test_user, game, title="Fine")
    real_serialize = post_views.serialize_post

    def _serialize(stores_, post, viewer):
        if post.id == broken.id:
            raise RuntimeError("corrupt row")
        return real_serialize(stores_, post, viewer)

    with patch("game_media.services.feed.serialize_post", side_effect=_serialize):
        feed = build_feed(stores, None)

    assert _titles(feed.texts) == ["Fine"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("title-ascending", FeedSort.TITLE_ASCENDING),
        ("likes-ascending", FeedSort.LIKES_ASCENDING),
        (None, FeedSort.LIKES_DESCENDING),
        ("newest", FeedSort.LIKES_DESCENDING),
    ],
)
def test_sort_parsing(value, expected) -> None:
    assert FeedSort.parse(value) is expected


def test_feed_queries_leave_image_bytes_unloaded(
    stores, db_session, test_user, game, make_post, png_bytes
) -> None:
    make_post(
        test_user,
        game,
        payload=ScreenshotPayload(data=png_bytes, content_type="image/png"),
    )
    db_session.expunge_all()

    for posts in (stores.posts.list_by_likes(), stores.posts.list_by_title()):
        assert "screenshot_data" in inspect(posts[0]).unloaded
        assert posts[0].screenshot_data == png_bytes
        db_session.expunge_all()
