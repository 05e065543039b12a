"""Repositories wrapping SQLAlchemy sessions."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from .post_repo import PostRepository
from .user_repo import GameRepository, UserRepository


@dataclass(frozen=True)
class Stores:
    """Repositories sharing one session, handed to each media service."""

    session: Session
    posts: PostRepository
    users: UserRepository
    games: GameRepository

    @classmethod
    def from_session(cls, session: Session) -> "Stores":
        return cls(
            session=session,
            posts=PostRepository(session),
            users=UserRepository(session),
            games=GameRepository(session),
        )


__all__ = ["GameRepository", "PostRepository", "Stores", "UserRepository"]
