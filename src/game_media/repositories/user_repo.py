"""Data access helpers for users and games."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from game_media.models import Game, User, UserBlock

__all__ = ["GameRepository", "UserRepository"]


class UserRepository:
    """Lookups for user accounts and their block lists."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def has_blocked(self, blocker_id: str, viewer_id: str) -> bool:
        """Return True when ``blocker_id`` has blocked ``viewer_id``."""
        stmt = select(UserBlock).where(
            UserBlock.blocker_id == blocker_id,
            UserBlock.blocked_id == viewer_id,
        )
        return self.session.scalars(stmt).first() is not None


class GameRepository:
    """Lookups for games."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, game_id: str) -> Game | None:
        """Return a game by identifier."""
        return self.session.get(Game, game_id)

    def add(self, game: Game) -> Game:
        """Stage a new game and flush so its identifier is assigned."""
        self.session.add(game)
        self.session.flush()
        return game
