# tests/test_security.py
"""Tests for password hashing and access tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from piazza.core.errors import AuthError
from piazza.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from piazza.core.settings import settings
from piazza.db.time import utcnow


def test_password_hash_round_trip() -> None:
    """Hashes verify the original password only."""
    hashed = hash_password("s3cret-value")
    assert hashed != "s3cret-value"
    assert verify_password("s3cret-value", hashed)
    assert not verify_password("other-value", hashed)


def test_token_carries_user_id() -> None:
    """Decoding a fresh token yields the user id."""
    assert decode_access_token(create_access_token(42)) == 42


def test_expired_token_is_rejected() -> None:
    """Tokens past their expiry raise AuthError."""
    issued = utcnow() - timedelta(minutes=settings.access_token_expire_minutes + 5)
    token = create_access_token(7, now=issued)
    with pytest.raises(AuthError):
        decode_access_token(token)


def test_token_with_wrong_key_is_rejected() -> None:
    """Tokens signed with another key raise AuthError."""
    token = jwt.encode({"sub": "1"}, "not-the-secret", algorithm=settings.jwt_algorithm)
    with pytest.raises(AuthError):
        decode_access_token(token)


@pytest.mark.parametrize("claims", [{}, {"sub": "not-a-number"}])
def test_token_without_usable_subject_is_rejected(claims: dict[str, str]) -> None:
    """A missing or non-numeric subject raises AuthError."""
    token = jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(AuthError):
        decode_access_token(token)
