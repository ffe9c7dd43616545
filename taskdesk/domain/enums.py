"""Domain enumerations for Taskdesk.

Enums represent fixed sets of domain values (roles, task types, task and
record statuses). Values are the strings persisted by the record store.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Role of an authenticated principal."""

    ADMIN = "admin"
    MANAGER = "manager"


class TaskType(_ValuesMixin, str, Enum):
    """Kind of work a task represents. Fixed at creation."""

    AGREEMENT = "agreement"
    REVIEW = "review"
    NEW_ACCOUNT = "new_account"


class TaskStatus(_ValuesMixin, str, Enum):
    """Task lifecycle status. `new` is initial, `closed` is terminal."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    AGREEMENT_DONE = "agreement_done"
    WAITING_FOR_REVIEW = "waiting_for_review"
    REVIEW_DONE = "review_done"
    CLOSED = "closed"


class RecordStatus(_ValuesMixin, str, Enum):
    """Activation status shared by managers and client accounts."""

    ACTIVE = "active"
    INACTIVE = "inactive"
