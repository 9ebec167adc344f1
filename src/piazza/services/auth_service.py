"""Account registration, login and credential resolution."""
from __future__ import annotations

import logging
from datetime import datetime

from piazza.core import security
from piazza.core.errors import AuthError, ConflictError
from piazza.domain.records import Principal
from piazza.models.user import User
from piazza.repositories.user_repo import UserRepository

__all__ = ["register_user", "authenticate", "resolve_principal"]

logger = logging.getLogger(__name__)


async def register_user(
    *,
    users: UserRepository,
    username: str,
    name: str,
    email: str,
    password: str,
    now: datetime,
) -> User:
    """Create an account after checking the username and email are free.

    Raises:
        ConflictError: If another account already uses the username or email.
    """
    email = email.lower()
    existing = await users.find_conflicting(username=username, email=email)
    if existing is not None:
        field = "username" if existing.username == username else "email"
        raise ConflictError(f"A user with this {field} already exists")

    user = await users.create(
        username=username,
        name=name,
        email=email,
        password_hash=security.hash_password(password),
        now=now,
    )
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


async def authenticate(
    *,
    users: UserRepository,
    email: str,
    password: str,
) -> str:
    """Check a login and return a fresh access token.

    Raises:
        AuthError: If the email is unknown or the password does not match.
            Both cases share one message.
    """
    user = await users.get_by_email(email.lower())
    if user is None or not security.verify_password(password, user.password_hash):
        logger.debug("Rejected login for %s", email)
        raise AuthError("Incorrect email or password")
    return security.create_access_token(user.id)


async def resolve_principal(*, users: UserRepository, token: str) -> Principal:
    """Verify ``token`` and return the identity it belongs to.

    Raises:
        AuthError: If the token is invalid or its user no longer exists.
    """
    user_id = security.decode_access_token(token)
    user = await users.get_by_id(user_id)
    if user is None:
        raise AuthError("User not found")
    return Principal(id=user.id, name=user.name)
