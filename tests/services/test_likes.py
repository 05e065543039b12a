# tests/services/test_likes.py
"""Tests for like toggling."""

import pytest

from game_media.core.errors import NotFoundError
from game_media.services.likes import toggle_like


def test_like_then_unlike_restores_count(stores, test_user, other_user, game, make_post) -> None:
    post = make_post(test_user, game, liked_by=[test_user])
    original = post.likes

    liked = toggle_like(stores, post.id, other_user)
    assert liked.has_liked is True
    assert liked.likes == original + 1
    assert other_user.id in post.liker_ids

    unliked = toggle_like(stores, post.id, other_user)
    assert unliked.has_liked is False
    assert unliked.likes == original
    assert post.likes == original
    assert other_user.id not in post.liker_ids


def test_count_is_recomputed_from_likers(stores, test_user, other_user, game, make_post) -> None:
    post = make_post(test_user, game, likes=41)

    state = toggle_like(stores, post.id, other_user)

    assert state.likes == 1
    assert post.likes == 1


def test_missing_post_raises_not_found(stores, test_user) -> None:
    with pytest.raises(NotFoundError):
        toggle_like(stores, "missing", test_user)
