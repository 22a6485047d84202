"""Bearer token authentication dependencies."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.security import verify_token
from taskboard.database import get_db
from taskboard.errors import AuthError
from taskboard.models import Account
from taskboard.storage.repositories import get_account

AUTH_HEADER = APIKeyHeader(name="Authorization", auto_error=False)


def bearer_token(auth_header: str | None) -> str | None:
    """Token part of an ``Authorization: Bearer ...`` header, if present."""
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:].strip() or None


async def resolve_account(db: AsyncSession, auth_header: str | None) -> Account:
    token = bearer_token(auth_header)
    if not token:
        raise AuthError("Not authorized, no token")
    account_id = verify_token(token)
    account = await get_account(db, account_id)
    if not account:
        raise AuthError("User not found")
    return account


async def get_current_account(
    db: Annotated[AsyncSession, Depends(get_db)],
    auth_header: str | None = Depends(AUTH_HEADER),
) -> Account:
    """Live account behind the bearer token."""
    return await resolve_account(db, auth_header)


# Type aliases for dependency injection
DbDep = Annotated[AsyncSession, Depends(get_db)]
AccountDep = Annotated[Account, Depends(get_current_account)]
