"""DTOs for client accounts."""

from dataclasses import dataclass
from datetime import datetime

from taskdesk.domain.enums import RecordStatus


@dataclass(frozen=True)
class ClientAccountResult:
    """Client account read-model."""

    id: str
    account_name: str
    contact_person: str | None
    email: str | None
    phone: str | None
    manager_id: str
    status: RecordStatus
    created_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status is RecordStatus.ACTIVE
