"""Break-glass admin schemas."""

from pydantic import BaseModel, ConfigDict, Field


class VerifySecretRequest(BaseModel):
    """POST /api/admin/verify-secret request."""

    model_config = ConfigDict(populate_by_name=True)

    admin_secret: str | None = Field(default=None, alias="adminSecret")


class VerifySecretResponse(BaseModel):
    success: bool = True
    message: str = "Admin secret verified"
