"""JWT helpers for bearer-token identities."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import jwt

from game_media.core.settings import settings


def create_access_token(subject: str) -> str:
    """Create a JWT access token whose ``sub`` claim is the user id."""
    to_encode: dict[str, object] = {"sub": subject}
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> str | None:
    """Return the subject of a token, or None when the claim is missing.

    Raises:
        JWTError: If the signature or expiry check fails.
    """
    payload = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
    )
    subject = payload.get("sub")
    if subject is None:
        return None
    return str(subject)
