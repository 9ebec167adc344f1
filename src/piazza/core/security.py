"""Password hashing and access-token helpers."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from piazza.core.errors import AuthError
from piazza.core.settings import settings
from piazza.db.time import utcnow

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a salted hash of ``password`` suitable for storage."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash."""
    return pwd_context.verify(password, password_hash)


def create_access_token(user_id: int, *, now: datetime | None = None) -> str:
    """Issue a signed JWT whose subject is the user's id.

    Args:
        user_id: Primary key of the authenticated user.
        now: Issue instant; defaults to the current UTC time.

    Returns:
        Encoded token string.
    """
    issued_at = now or utcnow()
    expire = issued_at + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {"sub": str(user_id), "iat": issued_at, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token``.

    Raises:
        AuthError: If the token is malformed, expired or has no usable subject.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise AuthError("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise AuthError("Could not validate credentials")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise AuthError("Could not validate credentials") from err
