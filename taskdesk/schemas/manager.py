"""Manager profile API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from taskdesk.domain.enums import RecordStatus


class ManagerCreateRequest(BaseModel):
    """Request body for creating a manager profile for an existing manager-role user."""

    user_id: str = Field(..., min_length=1)
    phone: str | None = Field(default=None, max_length=64)
    status: RecordStatus = RecordStatus.ACTIVE


class ManagerUpdateRequest(BaseModel):
    """Request body for updating a manager profile (partial)."""

    phone: str | None = Field(default=None, max_length=64)
    status: RecordStatus | None = None


class ManagerResponse(BaseModel):
    """Manager profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    full_name: str | None
    email: str | None
    phone: str | None
    status: RecordStatus
    created_at: datetime
    created_by: str | None
