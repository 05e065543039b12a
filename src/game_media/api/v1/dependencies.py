"""Shared API dependencies for authentication and data access."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from game_media.core.security import decode_access_token
from game_media.db.session import get_db
from game_media.models import User
from game_media.repositories import Stores

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_stores(db: SessionDep) -> Stores:
    """Return repositories bound to the request's session."""
    return Stores.from_session(db)


StoresDep = Annotated[Stores, Depends(get_stores)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(token: str, db: Session) -> User:
    try:
        user_id = decode_access_token(token)
    except JWTError as err:
        raise _credentials_error() from err
    if user_id is None:
        raise _credentials_error()

    user = db.get(User, user_id)
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Raises:
        HTTPException: If token is invalid or user not found
    """
    return _resolve_user(credentials.credentials, db)


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Return the authenticated user, or None for anonymous requests.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    return _resolve_user(credentials.credentials, db)


# Type aliases for viewer dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
