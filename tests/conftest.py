# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterable, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from game_media.core.security import create_access_token
from game_media.db.session import Base
from game_media.db.session import get_db as app_get_session
from game_media.main import app as fastapi_app
from game_media.models import Game, Post, PostLike, PostPayload, TextPayload, User, UserBlock
from game_media.repositories import Stores

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)
_POST_CLOCK = count(1)
_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Fixtures commit so that an endpoint rolling back its own work keeps them.
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def stores(db_session: Session) -> Stores:
    """Repositories bound to the test session."""
    return Stores.from_session(db_session)


def _create_user(db_session: Session, username: str) -> User:
    user = User(username=f"{username}-{next(_USER_COUNTER)}")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _create_user(db_session, "author")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _create_user(db_session, "viewer")


@pytest.fixture()
def game(db_session: Session) -> Game:
    """Create a default test game."""
    game = Game(name="Hollow Knight")
    db_session.add(game)
    db_session.commit()
    return game


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture()
def block(db_session: Session) -> Callable[[User, User], None]:
    """Return a helper that makes one user block another."""

    def _block(blocker: User, blocked: User) -> None:
        db_session.add(UserBlock(blocker_id=blocker.id, blocked_id=blocked.id))
        db_session.commit()

    return _block


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory for persisted posts; later calls are newer posts."""

    def _make_post(
        author: User,
        game: Game,
        *,
        title: str = "Test post",
        payload: PostPayload | None = None,
        tags: Iterable[str] = (),
        likes: int | None = None,
        liked_by: Iterable[User] = (),
    ) -> Post:
        post = Post(
            title=title,
            author=author,
            game=game,
            created=_EPOCH + timedelta(minutes=next(_POST_CLOCK)),
        )
        post.payload = payload or TextPayload(body="Hello there")
        post.tags = list(tags)
        post.liked_by = [PostLike(user_id=user.id) for user in liked_by]
        post.likes = len(post.liked_by) if likes is None else likes
        db_session.add(post)
        db_session.commit()
        return post

    return _make_post


@pytest.fixture()
def png_bytes() -> bytes:
    """A minimal PNG signature followed by padding."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
