"""Account administration outside the per-tenant role model.

Access comes from either the shared admin secret (all tenants) or a tenant
admin's bearer token (that tenant only); see ``taskboard.auth.admin_access``.
"""

import logging

from fastapi import APIRouter

from taskboard.auth.admin_access import AdminDep, check_admin_secret
from taskboard.auth.middleware import DbDep
from taskboard.engine.policy import policy
from taskboard.errors import NotFoundError, ValidationError
from taskboard.models import Role
from taskboard.schemas.admin import VerifySecretRequest, VerifySecretResponse
from taskboard.schemas.auth import AccountOut, RoleChangeResponse
from taskboard.storage import repositories as repo

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/verify-secret", response_model=VerifySecretResponse)
async def verify_secret(body: VerifySecretRequest):
    check_admin_secret(body.admin_secret)
    return VerifySecretResponse()


@router.get("/users", response_model=list[AccountOut])
async def list_users(grant: AdminDep, db: DbDep):
    """Every account for a global grant, else the granting admin's tenant."""
    if grant.is_global:
        return await repo.list_all_accounts(db)
    return await repo.list_tenant_accounts(db, grant.tenant_id)


async def _covered_account(db, grant, user_id: str):
    target = await repo.get_account(db, user_id)
    if not target or not grant.covers(target):
        raise NotFoundError("User not found")
    return target


@router.post("/set-admin/{user_id}", response_model=RoleChangeResponse)
async def set_admin(user_id: str, grant: AdminDep, db: DbDep):
    target = await _covered_account(db, grant, user_id)
    if target.is_admin:
        raise ValidationError("User is already an admin")
    target.role = Role.ADMIN.value
    await db.commit()
    logger.warning("Admin role granted to %s via %s", target.email, grant.strategy)
    return RoleChangeResponse(
        message=f"User {target.name} ({target.email}) has been set as admin",
        user=AccountOut.model_validate(target),
    )


@router.post("/remove-admin/{user_id}", response_model=RoleChangeResponse)
async def remove_admin(user_id: str, grant: AdminDep, db: DbDep):
    """Remove the admin role; still refuses to leave a tenant without an admin."""
    target = await _covered_account(db, grant, user_id)
    admins = await repo.count_admins(db, target.tenant_id) if target.tenant_id else 0
    policy.ensure_admin_removable(target, admins)
    target.role = Role.USER.value
    await db.commit()
    logger.warning("Admin role removed from %s via %s", target.email, grant.strategy)
    return RoleChangeResponse(
        message=f"Admin role removed from {target.name} ({target.email})",
        user=AccountOut.model_validate(target),
    )
