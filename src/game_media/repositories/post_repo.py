"""Data access helpers for working with posts."""
from __future__ import annotations

import unicodedata

from sqlalchemy import select
from sqlalchemy.orm import Session, defer

from game_media.models.post import Post

__all__ = ["PostRepository", "title_sort_key"]


def title_sort_key(title: str) -> tuple[str, str, tuple[bool, ...]]:
    """Return a collation key ordering titles the way an English locale does.

    Letters compare by base character first, then by accent, then lowercase
    before uppercase, so "apple" < "Apple" < "Éclair" < "Ōkami" < "zelda".
    """
    decomposed = unicodedata.normalize("NFKD", title)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    accents = "".join(char for char in decomposed if unicodedata.combining(char))
    return base.casefold(), accents, tuple(char.isupper() for char in base)


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: str) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def is_authored_by(self, post_id: str, author_id: str) -> bool:
        """Return True when ``post_id`` exists and was written by ``author_id``."""
        stmt = select(Post.id).where(Post.id == post_id, Post.author_id == author_id)
        return self.session.scalar(stmt) is not None

    def list_by_title(self, *, descending: bool = False) -> list[Post]:
        """Return posts in locale order of their titles, ties by id."""
        stmt = select(Post).options(defer(Post.screenshot_data)).order_by(Post.id)
        posts = list(self.session.scalars(stmt))
        # sorted() is stable, so equal titles keep id order in both directions.
        return sorted(posts, key=lambda post: title_sort_key(post.title), reverse=descending)

    def list_by_likes(self, *, descending: bool = True) -> list[Post]:
        """Return posts ordered by like count, newest first among equals."""
        likes = Post.likes.desc() if descending else Post.likes.asc()
        stmt = (
            select(Post)
            .options(defer(Post.screenshot_data))
            .order_by(likes, Post.created.desc(), Post.id)
        )
        return list(self.session.scalars(stmt))

    def add(self, post: Post) -> Post:
        """Stage a new post and flush so its identifier is assigned."""
        self.session.add(post)
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Stage removal of a post together with its tags and likes."""
        self.session.delete(post)
        self.session.flush()
