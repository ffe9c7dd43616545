"""DTOs for manager profiles."""

from dataclasses import dataclass
from datetime import datetime

from taskdesk.domain.enums import RecordStatus


@dataclass(frozen=True)
class ManagerResult:
    """Manager profile joined with its user's name and email."""

    id: str
    user_id: str
    phone: str | None
    status: RecordStatus
    created_at: datetime
    created_by: str | None
    full_name: str | None = None
    email: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status is RecordStatus.ACTIVE
