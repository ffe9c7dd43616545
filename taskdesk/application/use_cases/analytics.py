"""Analytics use case: task counts, completion time, breakdown by type and manager."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from taskdesk.application.dtos.analytics import ManagerTaskCount, TaskStats
from taskdesk.domain.enums import TaskStatus
from taskdesk.shared.utils.datetime import days_between

if TYPE_CHECKING:
    from taskdesk.application.interfaces.repositories import ITaskRepository


class GetTaskAnalyticsUseCase:
    """Aggregate all tasks for the admin analytics view."""

    def __init__(self, task_repo: "ITaskRepository") -> None:
        self.task_repo = task_repo

    async def get_task_stats(self) -> TaskStats:
        """Return counts, average days from creation to close, and groupings."""
        tasks = await self.task_repo.list_all()
        status_counts = Counter(t.status for t in tasks)

        closed_durations = [
            days_between(t.created_at, t.closed_at)
            for t in tasks
            if t.closed_at is not None
        ]
        average = (
            sum(closed_durations) / len(closed_durations) if closed_durations else 0.0
        )

        by_type = Counter(t.task_type.value for t in tasks)

        per_manager: dict[str, list[int]] = {}
        names: dict[str, str] = {}
        for t in tasks:
            counts = per_manager.setdefault(t.manager_id, [0, 0])
            counts[0] += 1
            if t.status is TaskStatus.CLOSED:
                counts[1] += 1
            names[t.manager_id] = t.manager_name or "Unknown"

        return TaskStats(
            total_tasks=len(tasks),
            closed_tasks=status_counts[TaskStatus.CLOSED],
            in_progress_tasks=status_counts[TaskStatus.IN_PROGRESS],
            new_tasks=status_counts[TaskStatus.NEW],
            average_completion_days=average,
            tasks_by_type=dict(by_type),
            tasks_by_manager=[
                ManagerTaskCount(
                    manager_id=manager_id,
                    manager_name=names[manager_id],
                    total=total,
                    closed=closed,
                )
                for manager_id, (total, closed) in per_manager.items()
            ],
        )
