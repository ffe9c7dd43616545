"""DTOs for task analytics."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ManagerTaskCount:
    """Per-manager task totals."""

    manager_id: str
    manager_name: str
    total: int
    closed: int


@dataclass
class TaskStats:
    """Aggregate task statistics for the admin dashboard."""

    total_tasks: int = 0
    closed_tasks: int = 0
    in_progress_tasks: int = 0
    new_tasks: int = 0
    average_completion_days: float = 0.0
    tasks_by_type: dict[str, int] = field(default_factory=dict)
    tasks_by_manager: list[ManagerTaskCount] = field(default_factory=list)
