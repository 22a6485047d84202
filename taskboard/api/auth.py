"""Auth endpoints - registration, login, identity and tenant role management."""

import logging

from fastapi import APIRouter, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.admin_access import check_admin_secret
from taskboard.auth.middleware import AccountDep, DbDep
from taskboard.auth.security import (
    MAX_PASSWORD_BYTES,
    create_access_token,
    hash_password,
    password_too_long,
    verify_password,
)
from taskboard.engine.policy import policy
from taskboard.errors import (
    AuthError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from taskboard.models import Account, Role, Tenant
from taskboard.schemas.auth import (
    AccountOut,
    CompanyOut,
    IdentityResponse,
    LoginRequest,
    RegisterRequest,
    RoleChangeResponse,
    SessionResponse,
    SetAdminRequest,
)
from taskboard.storage import repositories as repo
from taskboard.utils.domains import company_name_for_domain, extract_domain, is_valid_email

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_PASSWORD_LENGTH = 6
MAX_NAME_LENGTH = 100


async def tenant_for_domain(db: AsyncSession, domain: str) -> Tenant:
    """Find the tenant owning an email domain, creating it on first use."""
    tenant = await repo.get_tenant_by_domain(db, domain)
    if tenant:
        return tenant
    tenant = await repo.create_tenant(db, company_name_for_domain(domain), domain)
    logger.info("Created tenant %s for domain %s", tenant.name, domain)
    return tenant


def session_response(account: Account, tenant: Tenant | None) -> SessionResponse:
    return SessionResponse(
        token=create_access_token(account.account_id),
        user=AccountOut.model_validate(account),
        company=CompanyOut.model_validate(tenant) if tenant else None,
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=SessionResponse)
async def register(body: RegisterRequest, db: DbDep):
    """
    Create an account in the tenant of the email's domain.
    The first account of a tenant becomes its admin.
    """
    name = (body.name or "").strip()
    email = (body.email or "").strip().lower()
    password = body.password or ""
    if not name or not email or not password:
        raise ValidationError("Please provide name, email, and password")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Name cannot exceed {MAX_NAME_LENGTH} characters")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if password_too_long(password):
        raise ValidationError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
    if not is_valid_email(email):
        raise ValidationError("Please provide a valid email address")
    domain = extract_domain(email)
    if not domain:
        raise ValidationError("Invalid email format")

    if await repo.get_account_by_email(db, email):
        raise DuplicateError("User already exists with this email")

    tenant = await tenant_for_domain(db, domain)
    is_first = await repo.count_accounts(db, tenant.tenant_id) == 0
    account = await repo.create_account(
        db,
        name=name,
        email=email,
        password_hash=hash_password(password),
        tenant_id=tenant.tenant_id,
        role=Role.ADMIN if is_first else Role.USER,
    )
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateError("User already exists with this email")

    logger.info("Registered %s in tenant %s as %s", email, tenant.tenant_id, account.role)
    return session_response(account, tenant)


@router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest, db: DbDep):
    """Verify credentials and return a fresh token."""
    email = (body.email or "").strip().lower()
    password = body.password or ""
    if not email or not password:
        raise ValidationError("Please provide email and password")
    if not is_valid_email(email):
        raise ValidationError("Please provide a valid email address")

    account = await repo.get_account_by_email(db, email)
    if not account or not verify_password(password, account.password_hash):
        logger.warning("Failed login for %s", email)
        raise AuthError("Invalid credentials")

    email_domain = extract_domain(email)
    if not email_domain:
        raise ValidationError("Invalid email format")

    tenant = await repo.get_tenant(db, account.tenant_id)
    if tenant is None:
        # Account predates tenants: attach it to its email domain's tenant.
        tenant = await tenant_for_domain(db, email_domain)
        if await repo.count_accounts(db, tenant.tenant_id) == 0:
            account.role = Role.ADMIN.value
        account.tenant_id = tenant.tenant_id
        logger.info("Attached legacy account %s to tenant %s", email, tenant.tenant_id)
    elif tenant.domain and tenant.domain != email_domain:
        raise ForbiddenError(
            "Email domain does not match company domain. Please contact support."
        )
    elif not tenant.domain:
        owner = await repo.get_tenant_by_domain(db, email_domain)
        if owner and owner.tenant_id != tenant.tenant_id:
            raise ForbiddenError(
                "Email domain does not match company domain. Please contact support."
            )
        tenant.domain = email_domain

    await db.commit()
    logger.info("Login for %s", email)
    return session_response(account, tenant)


@router.get("/me", response_model=IdentityResponse)
async def me(account: AccountDep, db: DbDep):
    """Current identity, re-read from the store."""
    tenant = await repo.get_tenant(db, account.tenant_id)
    return IdentityResponse(
        user=AccountOut.model_validate(account),
        company=CompanyOut.model_validate(tenant) if tenant else None,
    )


@router.get("/users", response_model=list[AccountOut])
async def list_users(account: AccountDep, db: DbDep):
    """Accounts in the caller's tenant, by name."""
    if not account.tenant_id:
        return []
    return await repo.list_tenant_accounts(db, account.tenant_id)


@router.get("/companies", response_model=list[CompanyOut])
async def list_companies(db: DbDep):
    """All tenants, by name. Public."""
    return await repo.list_tenants(db)


async def _target_in_tenant(db: AsyncSession, admin: Account, user_id: str, verb: str) -> Account:
    if not admin.is_admin:
        raise ForbiddenError(f"Only admins can {verb} users")
    target = await repo.get_account(db, user_id)
    if not target:
        raise NotFoundError("User not found")
    if not admin.tenant_id or target.tenant_id != admin.tenant_id:
        raise ForbiddenError(f"You can only {verb} users in your own company")
    return target


@router.post("/promote-user/{user_id}", response_model=RoleChangeResponse)
async def promote_user(user_id: str, account: AccountDep, db: DbDep):
    """Tenant admin grants the admin role to another account of the tenant."""
    target = await _target_in_tenant(db, account, user_id, "promote")
    if target.account_id == account.account_id:
        raise ValidationError("You are already an admin")
    if target.is_admin:
        raise ValidationError("User is already an admin")
    target.role = Role.ADMIN.value
    await db.commit()
    logger.info("%s promoted %s to admin", account.email, target.email)
    return RoleChangeResponse(
        message=f"User {target.name} ({target.email}) has been promoted to admin",
        user=AccountOut.model_validate(target),
    )


@router.post("/demote-user/{user_id}", response_model=RoleChangeResponse)
async def demote_user(user_id: str, account: AccountDep, db: DbDep):
    """Tenant admin removes the admin role; the tenant always keeps one admin."""
    target = await _target_in_tenant(db, account, user_id, "demote")
    policy.ensure_admin_removable(
        target,
        await repo.count_admins(db, target.tenant_id),
        acting=account,
    )
    target.role = Role.USER.value
    await db.commit()
    logger.info("%s demoted %s to user", account.email, target.email)
    return RoleChangeResponse(
        message=f"User {target.name} ({target.email}) has been demoted to regular user",
        user=AccountOut.model_validate(target),
    )


@router.post("/set-admin", response_model=RoleChangeResponse)
async def set_admin_by_email(body: SetAdminRequest, db: DbDep):
    """Grant admin by email using the shared admin secret."""
    check_admin_secret(body.admin_secret)
    if not body.email:
        raise ValidationError("Email is required")
    target = await repo.get_account_by_email(db, body.email)
    if not target:
        raise NotFoundError("User not found")
    target.role = Role.ADMIN.value
    await db.commit()
    logger.warning("Admin secret used to set %s as admin", target.email)
    return RoleChangeResponse(
        message=f"User {target.name} ({target.email}) has been set as admin",
        user=AccountOut.model_validate(target),
    )
