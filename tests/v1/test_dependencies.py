# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from game_media.api.v1.dependencies import get_current_user, get_optional_user
from game_media.core.security import create_access_token
from game_media.core.settings import settings


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def _future_exp() -> datetime:
    return datetime.now(UTC) + timedelta(minutes=5)


class TestGetCurrentUser:
    """Test the get_current_user dependency function."""

    def test_valid_token(self, db_session, test_user):
        """A token for an existing user resolves to that user."""
        token = create_access_token(test_user.id)

        assert get_current_user(_bearer(token), db_session) is test_user

    def test_malformed_token(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_bearer("malformed.jwt.token"), db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.detail == "Could not validate credentials"

    def test_missing_subject(self, db_session):
        token = jwt.encode(
            {"exp": _future_exp()},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_bearer(token), db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_user(self, db_session):
        token = create_access_token("f" * 32)

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_bearer(token), db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.detail == "User not found"

    def test_expired_token(self, db_session, test_user):
        token = jwt.encode(
            {"sub": test_user.id, "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(HTTPException):
            get_current_user(_bearer(token), db_session)

    def test_wrong_secret(self, db_session, test_user):
        token = jwt.encode(
            {"sub": test_user.id, "exp": _future_exp()},
            "another-secret",
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(HTTPException):
            get_current_user(_bearer(token), db_session)


class TestGetOptionalUser:
    """Test the get_optional_user dependency function."""

    def test_anonymous(self, db_session):
        assert get_optional_user(None, db_session) is None

    def test_authenticated(self, db_session, test_user):
        token = create_access_token(test_user.id)

        assert get_optional_user(_bearer(token), db_session) is test_user

    def test_invalid_token_is_not_treated_as_anonymous(self, db_session):
        with pytest.raises(HTTPException):
            get_optional_user(_bearer("garbage"), db_session)
