"""Engine, session factory and schema bootstrap for the media database."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from game_media.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for users, games, posts and their link tables."""


# Register every mapped table on Base.metadata before create_all or alembic reads it.
import game_media.models  # noqa: E402,F401


def engine_options(url: str) -> dict[str, Any]:
    """Return ``create_engine`` keyword arguments suited to ``url``'s backend."""
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.sql_debug}
    if make_url(url).get_backend_name() == "sqlite":
        # get_db runs in the threadpool; async endpoints use the session on the loop thread.
        options["connect_args"] = {"check_same_thread": False}
    return options


engine = create_engine(
    settings.effective_database_url,
    **engine_options(settings.effective_database_url),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create any media tables missing from the configured database."""
    Base.metadata.create_all(bind=engine)
