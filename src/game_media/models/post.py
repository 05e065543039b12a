"""SQLAlchemy models for posts, their tags and likes.

A post carries exactly one payload matching its ``type``. ``Post.payload``
exposes it as one of the variant classes below so callers branch on the
variant instead of reading columns by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from game_media.db.session import Base
from game_media.db.time import utcnow

from .user import new_id

if TYPE_CHECKING:
    from .game import Game
    from .user import User


class PostType(StrEnum):
    """Kinds of feed items."""

    SCREENSHOT = "screenshot"
    VIDEO = "video"
    TEXT = "text"

    @property
    def bucket(self) -> str:
        """Return the pluralized feed bucket name."""
        return f"{self.value}s"


@dataclass(frozen=True)
class ScreenshotPayload:
    data: bytes | None
    content_type: str | None


@dataclass(frozen=True)
class VideoPayload:
    url: str


@dataclass(frozen=True)
class TextPayload:
    body: str


PostPayload = ScreenshotPayload | VideoPayload | TextPayload


class Post(Base):
    """Feed item authored by a user and filed under a game."""

    __tablename__ = "post"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )
    game_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("game.id"),
        nullable=False,
        index=True,
    )
    created: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    # Kept as text so rows written by other tools with unknown types still load.
    type: Mapped[str] = mapped_column(String(16), nullable=False)

    # Type-specific payload columns; only the one matching ``type`` is set.
    screenshot_data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    screenshot_content_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    video: Mapped[str | None] = mapped_column(Text, nullable=True)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Cached size of ``liked_by``.
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    author: Mapped[User] = relationship("User", back_populates="media")
    game: Mapped[Game] = relationship("Game", back_populates="media")
    tag_rows: Mapped[list[PostTag]] = relationship(
        "PostTag",
        order_by="PostTag.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    liked_by: Mapped[list[PostLike]] = relationship(
        "PostLike",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        """Return tags in the order they were submitted."""
        return [row.tag for row in self.tag_rows]

    @tags.setter
    def tags(self, values: list[str]) -> None:
        self.tag_rows = [PostTag(position=index, tag=tag) for index, tag in enumerate(values)]

    @property
    def liker_ids(self) -> set[str]:
        """Return identifiers of users who liked this post."""
        return {like.user_id for like in self.liked_by}

    @property
    def payload(self) -> PostPayload | None:
        """Return the payload variant for ``type``, or None when it is empty."""
        if self.type == PostType.SCREENSHOT:
            if self.screenshot_data is None and self.screenshot_content_type is None:
                return None
            return ScreenshotPayload(
                data=self.screenshot_data,
                content_type=self.screenshot_content_type,
            )
        if self.type == PostType.VIDEO:
            return VideoPayload(url=self.video) if self.video else None
        if self.type == PostType.TEXT:
            return TextPayload(body=self.text) if self.text else None
        return None

    @payload.setter
    def payload(self, value: PostPayload) -> None:
        self.screenshot_data = None
        self.screenshot_content_type = None
        self.video = None
        self.text = None
        if isinstance(value, ScreenshotPayload):
            self.type = PostType.SCREENSHOT.value
            self.screenshot_data = value.data
            self.screenshot_content_type = value.content_type
        elif isinstance(value, VideoPayload):
            self.type = PostType.VIDEO.value
            self.video = value.url
        elif isinstance(value, TextPayload):
            self.type = PostType.TEXT.value
            self.text = value.body
        else:
            raise TypeError(f"Unsupported payload: {type(value).__name__}")


class PostTag(Base):
    """One tag of a post, kept in submission order."""

    __tablename__ = "post_tag"

    post_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    tag: Mapped[str] = mapped_column(Text, nullable=False)


class PostLike(Base):
    """Per-user like on a post.

    The composite primary key prevents the same user liking twice.
    """

    __tablename__ = "post_like"

    post_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
