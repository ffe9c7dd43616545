"""DTOs for tasks (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from taskdesk.domain.enums import TaskStatus, TaskType
from taskdesk.domain.task_workflow import TaskTimestamps


@dataclass(frozen=True)
class TaskResult:
    """Task read-model, optionally joined with client account and manager names."""

    id: str
    task_type: TaskType
    client_account_id: str
    manager_id: str
    status: TaskStatus
    description: str | None
    created_at: datetime
    created_by: str | None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    closed_at: datetime | None = None
    client_account_name: str | None = None
    manager_name: str | None = None

    @property
    def timestamps(self) -> TaskTimestamps:
        """Lifecycle timestamps as consumed by the workflow engine."""
        return TaskTimestamps(
            started_at=self.started_at,
            completed_at=self.completed_at,
            closed_at=self.closed_at,
        )


@dataclass(frozen=True)
class TaskFilter:
    """Equality filters for task listing. None means no filter on that field."""

    manager_id: str | None = None
    client_account_id: str | None = None
    task_type: TaskType | None = None
    status: TaskStatus | None = None
