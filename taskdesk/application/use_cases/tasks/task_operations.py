"""Task operations: admin creation, manager status updates, listing."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taskdesk.application.dtos.task import TaskFilter, TaskResult
from taskdesk.domain.enums import TaskStatus, TaskType
from taskdesk.domain.exceptions import (
    AuthorizationException,
    InvalidTransitionException,
    ResourceNotFoundException,
    StaleTaskStatusException,
    ValidationException,
)
from taskdesk.domain.task_workflow import TaskWorkflow

if TYPE_CHECKING:
    from taskdesk.application.interfaces.repositories import (
        IClientAccountRepository,
        IManagerRepository,
        ITaskRepository,
    )
    from taskdesk.application.services.task_admission import TaskAdmissionService

logger = logging.getLogger(__name__)


class TaskService:
    """Creates tasks (admin) and moves them through the workflow (assigned manager)."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        manager_repo: IManagerRepository,
        client_account_repo: IClientAccountRepository,
        workflow: TaskWorkflow,
        admission: TaskAdmissionService,
    ) -> None:
        self._task_repo = task_repo
        self._manager_repo = manager_repo
        self._client_account_repo = client_account_repo
        self._workflow = workflow
        self._admission = admission

    async def create_task(
        self,
        *,
        task_type: TaskType | str,
        client_account_id: str,
        manager_id: str,
        description: str | None = None,
        created_by: str | None = None,
    ) -> TaskResult:
        """Create a task in status `new` for an active manager and one of their active accounts.

        Raises:
            ResourceNotFoundException: Manager or client account does not exist.
            ValidationException: Manager/account inactive, or account not owned by manager.
            DuplicateActiveTaskException: An active agreement/review task exists for the pair.
        """
        manager = await self._manager_repo.get_by_id(manager_id)
        if manager is None:
            raise ResourceNotFoundException("manager", manager_id)
        if not manager.is_active:
            raise ValidationException("Manager is inactive", field="manager_id")
        account = await self._client_account_repo.get_by_id(client_account_id)
        if account is None:
            raise ResourceNotFoundException("client_account", client_account_id)
        if account.manager_id != manager_id:
            raise ValidationException(
                "Client account does not belong to this manager",
                field="client_account_id",
            )
        if not account.is_active:
            raise ValidationException(
                "Client account is inactive", field="client_account_id"
            )

        fields = await self._admission.admit_creation(
            task_type, client_account_id, manager_id
        )
        task = await self._task_repo.create_task(
            fields,
            description=description or None,
            created_by=created_by,
        )
        logger.info(
            "Task created id=%s type=%s manager=%s client_account=%s",
            task.id,
            task.task_type.value,
            manager_id,
            client_account_id,
        )
        return task

    async def get_task(
        self, task_id: str, *, manager_id: str | None = None
    ) -> TaskResult:
        """Return task; when manager_id is given the task must be assigned to that manager."""
        task = await self._task_repo.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        if manager_id is not None and task.manager_id != manager_id:
            # Hide other managers' tasks instead of leaking their existence.
            raise ResourceNotFoundException("task", task_id)
        return task

    async def list_tasks(
        self, filters: TaskFilter, skip: int = 0, limit: int = 100
    ) -> list[TaskResult]:
        """Return tasks matching filters, newest first."""
        return await self._task_repo.list_tasks(filters, skip=skip, limit=limit)

    async def allowed_targets(
        self, task_id: str, *, manager_id: str | None = None
    ) -> tuple[TaskResult, list[TaskStatus]]:
        """Return the task and its permitted next statuses in workflow order."""
        task = await self.get_task(task_id, manager_id=manager_id)
        targets = self._workflow.allowed_targets(task.status)
        return task, [s for s in TaskStatus if s in targets]

    async def update_status(
        self,
        task_id: str,
        target_status: TaskStatus | str,
        *,
        manager_id: str,
    ) -> TaskResult:
        """Move the task to target_status on behalf of its assigned manager.

        Status and timestamp patch are written in one conditional update keyed
        on the status that was read.

        Raises:
            ResourceNotFoundException: Task does not exist.
            AuthorizationException: Caller is not the assigned manager.
            InvalidTransitionException: Target is not a permitted next status.
            StaleTaskStatusException: Status changed since it was read.
        """
        task = await self._task_repo.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        if task.manager_id != manager_id:
            raise AuthorizationException(resource="task", action="update_status")

        try:
            outcome = self._workflow.request_transition(
                task.status, task.timestamps, target_status
            )
        except InvalidTransitionException as e:
            logger.info(
                "Rejected transition task=%s from=%s to=%s",
                task_id,
                e.details.get("from"),
                e.details.get("to"),
            )
            raise

        updated = await self._task_repo.apply_transition(task.id, outcome)
        if updated is None:
            logger.warning(
                "Stale transition task=%s expected_status=%s", task_id, task.status.value
            )
            raise StaleTaskStatusException(task.id, task.status.value)
        logger.info(
            "Task status changed id=%s %s -> %s stamped=%s",
            task.id,
            outcome.previous_status.value,
            outcome.status.value,
            ",".join(outcome.stamped) or "-",
        )
        return updated
