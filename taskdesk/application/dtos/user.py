"""DTOs for users (no dependency on ORM)."""

from dataclasses import dataclass

from taskdesk.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model. No password."""

    id: str
    email: str
    full_name: str | None
    role: UserRole
    is_active: bool
