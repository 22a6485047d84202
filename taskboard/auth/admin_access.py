"""Access strategies for the account-administration surface.

Two independent strategies, composed so that either may grant:

* ``SharedSecretStrategy`` - the break-glass shared secret. Grants global scope.
* ``TenantAdminStrategy`` - a bearer token belonging to a tenant admin. Grants
  scope over that admin's own tenant only.

Every grant is logged so each use of the shared secret leaves a trace.
"""

import hmac
import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.middleware import AUTH_HEADER, bearer_token, resolve_account
from taskboard.config import settings
from taskboard.database import get_db
from taskboard.errors import AuthError, ConfigurationError, ForbiddenError, TaskboardError
from taskboard.models import Account

logger = logging.getLogger(__name__)


@dataclass
class AdminGrant:
    """Outcome of a successful admin check.

    ``tenant_id`` is None for a global grant.
    """

    strategy: str
    tenant_id: str | None = None
    account: Account | None = None

    @property
    def is_global(self) -> bool:
        return self.tenant_id is None

    def covers(self, account: Account) -> bool:
        return self.is_global or account.tenant_id == self.tenant_id


@dataclass
class AdminCredentials:
    secret: str | None
    auth_header: str | None


def check_admin_secret(supplied: str | None) -> None:
    if not settings.admin_secret:
        raise ConfigurationError(
            "Admin secret not configured. Please set ADMIN_SECRET environment variable."
        )
    if not supplied or not hmac.compare_digest(supplied, settings.admin_secret):
        raise AuthError("Invalid admin secret")


class SharedSecretStrategy:
    name = "shared-secret"

    async def grant(self, db: AsyncSession, creds: AdminCredentials) -> AdminGrant | None:
        if not creds.secret or not settings.admin_secret:
            return None
        check_admin_secret(creds.secret)
        return AdminGrant(strategy=self.name)


class TenantAdminStrategy:
    name = "tenant-admin"

    async def grant(self, db: AsyncSession, creds: AdminCredentials) -> AdminGrant | None:
        if not bearer_token(creds.auth_header):
            return None
        account = await resolve_account(db, creds.auth_header)
        if not account.is_admin or not account.tenant_id:
            raise ForbiddenError("Admin access required")
        return AdminGrant(strategy=self.name, tenant_id=account.tenant_id, account=account)


class AnyOf:
    """Grant if any strategy grants; report the first failure otherwise."""

    def __init__(self, *strategies):
        self.strategies = strategies

    async def grant(self, db: AsyncSession, creds: AdminCredentials) -> AdminGrant:
        failure: TaskboardError | None = None
        for strategy in self.strategies:
            try:
                grant = await strategy.grant(db, creds)
            except TaskboardError as exc:
                failure = failure or exc
                continue
            if grant is not None:
                return grant
        raise failure or AuthError("Admin access required")


admin_access = AnyOf(SharedSecretStrategy(), TenantAdminStrategy())


async def _body_secret(request: Request) -> str | None:
    """``admin_secret`` from a JSON body, accepted alongside the header."""
    if request.method not in ("POST", "PUT"):
        return None
    try:
        body = await request.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        secret = body.get("admin_secret") or body.get("adminSecret")
        return secret if isinstance(secret, str) else None
    return None


async def require_admin(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    x_admin_secret: Annotated[str | None, Header()] = None,
    auth_header: str | None = Depends(AUTH_HEADER),
) -> AdminGrant:
    secret = x_admin_secret or await _body_secret(request)
    grant = await admin_access.grant(db, AdminCredentials(secret=secret, auth_header=auth_header))
    logger.warning(
        "Admin access granted via %s for %s %s%s",
        grant.strategy,
        request.method,
        request.url.path,
        "" if grant.is_global else f" (tenant {grant.tenant_id})",
    )
    return grant


AdminDep = Annotated[AdminGrant, Depends(require_admin)]
