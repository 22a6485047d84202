"""Unit tests for password hashing and bearer tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from taskboard.auth.security import (
    create_access_token,
    hash_password,
    verify_password,
    verify_token,
)
from taskboard.config import settings
from taskboard.errors import AuthError, ValidationError


def test_password_hash_roundtrip():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_with_garbage_hash():
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_password_limited_to_72_bytes():
    assert verify_password("p" * 72, hash_password("p" * 72))
    with pytest.raises(ValidationError):
        hash_password("p" * 73)
    # Multi-byte characters count by their encoded size
    with pytest.raises(ValidationError):
        hash_password("\u00e9" * 37)
    assert not verify_password("p" * 80, hash_password("secret123"))


def test_token_carries_only_account_id():
    token = create_access_token("acc-1")
    assert verify_token(token) == "acc-1"
    claims = jwt.get_unverified_claims(token)
    assert set(claims) == {"sub", "iat", "exp"}


def test_token_lifetime_is_thirty_days():
    claims = jwt.get_unverified_claims(create_access_token("acc-1"))
    assert claims["exp"] - claims["iat"] == int(timedelta(days=30).total_seconds())


def test_expired_token_rejected():
    token = create_access_token("acc-1", expires_delta=timedelta(seconds=-5))
    with pytest.raises(AuthError, match="expired"):
        verify_token(token)


def test_tampered_token_rejected():
    token = jwt.encode({"sub": "acc-1"}, "some-other-key", algorithm=settings.jwt_algorithm)
    with pytest.raises(AuthError):
        verify_token(token)
    with pytest.raises(AuthError):
        verify_token("garbage")
