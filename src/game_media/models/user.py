"""SQLAlchemy models for user accounts and block lists."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from game_media.db.session import Base

if TYPE_CHECKING:
    from .post import Post


def new_id() -> str:
    """Return a fresh 32-character hex identifier."""
    return uuid4().hex


class User(Base):
    """Account that authors posts and may block other viewers."""

    __tablename__ = "user_account"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)

    # Authored posts in creation order.
    media: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="author",
        order_by="Post.created",
    )
    blocks: Mapped[list[UserBlock]] = relationship(
        "UserBlock",
        foreign_keys="UserBlock.blocker_id",
        cascade="all, delete-orphan",
    )

    @property
    def media_ids(self) -> list[str]:
        """Return identifiers of the posts this user authored."""
        return [post.id for post in self.media]

    @property
    def blocked_ids(self) -> set[str]:
        """Return identifiers of viewers this user has blocked."""
        return {block.blocked_id for block in self.blocks}


class UserBlock(Base):
    """Directed block: ``blocker_id`` hides their posts from ``blocked_id``."""

    __tablename__ = "user_block"

    blocker_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    # Not a foreign key: a block may name a viewer id that no longer exists.
    blocked_id: Mapped[str] = mapped_column(String(32), primary_key=True)
