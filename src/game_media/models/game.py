"""SQLAlchemy model for games that posts are filed under."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from game_media.db.session import Base

from .user import new_id

if TYPE_CHECKING:
    from .post import Post


class Game(Base):
    """A game with its own media list."""

    __tablename__ = "game"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    media: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="game",
        order_by="Post.created",
    )

    @property
    def media_ids(self) -> list[str]:
        """Return identifiers of the posts filed under this game."""
        return [post.id for post in self.media]
