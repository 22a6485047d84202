"""Auth request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """POST /api/auth/register request."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    """POST /api/auth/login request."""

    email: str | None = None
    password: str | None = None


class SetAdminRequest(BaseModel):
    """POST /api/auth/set-admin request."""

    email: str | None = None
    admin_secret: str | None = Field(default=None, alias="adminSecret")

    model_config = ConfigDict(populate_by_name=True)


class AccountOut(BaseModel):
    """Account as returned to clients (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias="account_id")
    name: str
    email: str
    role: str
    company_id: str | None = Field(default=None, validation_alias="tenant_id")
    created_at: datetime | None = None


class CompanyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias="tenant_id")
    name: str
    domain: str | None = None


class SessionResponse(BaseModel):
    """Register/login response."""

    token: str
    user: AccountOut
    company: CompanyOut | None = None


class IdentityResponse(BaseModel):
    """GET /api/auth/me response."""

    user: AccountOut
    company: CompanyOut | None = None


class RoleChangeResponse(BaseModel):
    success: bool = True
    message: str
    user: AccountOut
