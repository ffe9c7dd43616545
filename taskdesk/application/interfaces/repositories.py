"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain types only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from taskdesk.domain.enums import RecordStatus, TaskType, UserRole

if TYPE_CHECKING:
    from taskdesk.application.dtos.client_account import ClientAccountResult
    from taskdesk.application.dtos.manager import ManagerResult
    from taskdesk.application.dtos.task import TaskFilter, TaskResult
    from taskdesk.application.dtos.user import UserResult
    from taskdesk.domain.task_workflow import InitialTaskFields, TransitionOutcome


class ITaskRepository(Protocol):
    """Protocol for task repository (DIP)."""

    async def count_active_duplicates(
        self,
        task_type: TaskType,
        client_account_id: str,
        manager_id: str,
    ) -> int:
        """Return the number of non-closed tasks with the same (client, manager, type)."""

    async def create_task(
        self,
        fields: InitialTaskFields,
        *,
        description: str | None = None,
        created_by: str | None = None,
    ) -> TaskResult:
        """Insert an admitted task. Raises DuplicateActiveTaskException on the active-triple index."""

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        """Return task by ID, joined with client account and manager names."""

    async def list_tasks(
        self, filters: TaskFilter, skip: int = 0, limit: int = 100
    ) -> list[TaskResult]:
        """Return tasks matching filters, newest first."""

    async def list_all(self) -> list[TaskResult]:
        """Return every task (for analytics)."""

    async def apply_transition(
        self, task_id: str, outcome: TransitionOutcome
    ) -> TaskResult | None:
        """Apply status + timestamp patch only if status still equals outcome.previous_status.

        Returns the updated task, or None when no row matched.
        """


class IManagerRepository(Protocol):
    """Protocol for manager profile repository (DIP)."""

    async def get_by_id(self, manager_id: str) -> ManagerResult | None:
        """Return manager by ID joined with user."""

    async def get_by_user_id(self, user_id: str) -> ManagerResult | None:
        """Return the manager profile of a user."""

    async def list_managers(
        self,
        status: RecordStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ManagerResult]:
        """Return managers newest first, optionally filtered by status."""

    async def create_manager(
        self,
        user_id: str,
        *,
        phone: str | None,
        status: RecordStatus,
        created_by: str | None,
    ) -> ManagerResult:
        """Create a manager profile. Raises DuplicateRecordException if the user already has one."""

    async def update_manager(
        self,
        manager_id: str,
        *,
        phone: str | None = None,
        status: RecordStatus | None = None,
    ) -> ManagerResult | None:
        """Update phone and/or status. Returns None if not found."""

    async def delete_manager(self, manager_id: str) -> bool:
        """Delete manager (cascades). Returns False if not found."""


class IClientAccountRepository(Protocol):
    """Protocol for client account repository (DIP)."""

    async def get_by_id(self, account_id: str) -> ClientAccountResult | None:
        """Return client account by ID."""

    async def list_by_manager(
        self,
        manager_id: str,
        status: RecordStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ClientAccountResult]:
        """Return client accounts of manager, newest first."""

    async def create_account(
        self,
        manager_id: str,
        account_name: str,
        *,
        contact_person: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        status: RecordStatus = RecordStatus.ACTIVE,
    ) -> ClientAccountResult:
        """Create a client account owned by manager."""

    async def update_account(
        self, account_id: str, **changes: object
    ) -> ClientAccountResult | None:
        """Write the given fields (None clears a nullable column). Returns None if not found."""

    async def delete_account(self, account_id: str) -> bool:
        """Delete client account. Returns False if not found."""


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return the active user if email/password match, else None."""

    async def create_user(
        self,
        email: str,
        password: str,
        role: UserRole,
        full_name: str | None = None,
    ) -> UserResult:
        """Create a user. Raises DuplicateRecordException on duplicate email."""
