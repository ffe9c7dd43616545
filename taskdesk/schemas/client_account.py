"""Client account API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from taskdesk.domain.enums import RecordStatus


class ClientAccountCreateRequest(BaseModel):
    """Request body for creating a client account."""

    account_name: str = Field(..., min_length=1, max_length=255)
    contact_person: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=64)
    status: RecordStatus = RecordStatus.ACTIVE


class ClientAccountUpdateRequest(BaseModel):
    """Request body for updating a client account (partial)."""

    account_name: str | None = Field(default=None, min_length=1, max_length=255)
    contact_person: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=64)
    status: RecordStatus | None = None


class ClientAccountResponse(BaseModel):
    """Client account response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    account_name: str
    contact_person: str | None
    email: str | None
    phone: str | None
    manager_id: str
    status: RecordStatus
    created_at: datetime
