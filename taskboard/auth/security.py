"""Password hashing and bearer tokens.

Tokens carry only the account id; callers re-read the live account for
every decision.
"""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from taskboard.config import settings
from taskboard.errors import AuthError, ValidationError

# bcrypt only reads this many bytes and newer releases reject anything longer.
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    if password_too_long(password):
        raise ValidationError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if password_too_long(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(account_id: str, expires_delta: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": account_id,
        "iat": now,
        "exp": now + (expires_delta or timedelta(days=settings.token_expire_days)),
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> str:
    """Return the account id carried by a token."""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except ExpiredSignatureError:
        raise AuthError("Token expired")
    except JWTError:
        raise AuthError("Invalid token")
    account_id = payload.get("sub")
    if not account_id or not isinstance(account_id, str):
        raise AuthError("Invalid token")
    return account_id
