"""Creation admission: one active agreement/review task per (client account, manager)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taskdesk.domain.enums import TaskType
from taskdesk.domain.exceptions import ValidationException
from taskdesk.domain.task_workflow import InitialTaskFields, TaskWorkflow

if TYPE_CHECKING:
    from taskdesk.application.interfaces.repositories import ITaskRepository

logger = logging.getLogger(__name__)


class TaskAdmissionService:
    """Counts active duplicates through the store and lets the workflow decide.

    The check and the insert are separate statements; the task table's
    partial unique index rejects an insert that loses the race.
    """

    def __init__(self, task_repo: ITaskRepository, workflow: TaskWorkflow) -> None:
        self._task_repo = task_repo
        self._workflow = workflow

    async def admit_creation(
        self,
        task_type: TaskType | str,
        client_account_id: str,
        manager_id: str,
    ) -> InitialTaskFields:
        """Return initial task fields or raise DuplicateActiveTaskException."""
        try:
            kind = TaskType(task_type)
        except ValueError:
            raise ValidationException(
                f"Unknown task type: {task_type!r}", field="task_type"
            ) from None
        active_duplicates = 0
        if self._workflow.requires_unique_active(kind):
            active_duplicates = await self._task_repo.count_active_duplicates(
                task_type=kind,
                client_account_id=client_account_id,
                manager_id=manager_id,
            )
            if active_duplicates:
                logger.info(
                    "Creation blocked type=%s manager=%s client_account=%s active=%d",
                    kind.value,
                    manager_id,
                    client_account_id,
                    active_duplicates,
                )
        return self._workflow.admit_creation(
            kind,
            client_account_id,
            manager_id,
            active_duplicates=active_duplicates,
        )
