"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field

from taskdesk.domain.capabilities import Capability
from taskdesk.domain.enums import UserRole


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"


class MeResponse(BaseModel):
    """Current principal: identity, role capabilities and the dashboard it lands on."""

    id: str
    email: str
    full_name: str | None = None
    role: UserRole
    capabilities: list[Capability]
    dashboard: str
    manager_id: str | None = Field(
        default=None, description="Manager profile id, when the user has one"
    )
