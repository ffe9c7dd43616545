"""Task API schemas and the display vocabulary for statuses and task types."""

from datetime import datetime
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, computed_field

from taskdesk.domain.enums import TaskStatus, TaskType

STATUS_LABELS = MappingProxyType(
    {
        TaskStatus.NEW: "New",
        TaskStatus.IN_PROGRESS: "In Progress",
        TaskStatus.AGREEMENT_DONE: "Agreement Done",
        TaskStatus.WAITING_FOR_REVIEW: "Waiting for Review",
        TaskStatus.REVIEW_DONE: "Review Done",
        TaskStatus.CLOSED: "Closed",
    }
)

# Badge variant used by clients when rendering a status.
STATUS_CATEGORIES = MappingProxyType(
    {
        TaskStatus.NEW: "default",
        TaskStatus.IN_PROGRESS: "secondary",
        TaskStatus.AGREEMENT_DONE: "outline",
        TaskStatus.WAITING_FOR_REVIEW: "outline",
        TaskStatus.REVIEW_DONE: "outline",
        TaskStatus.CLOSED: "secondary",
    }
)

TASK_TYPE_LABELS = MappingProxyType(
    {
        TaskType.AGREEMENT: "Agreement",
        TaskType.REVIEW: "Review",
        TaskType.NEW_ACCOUNT: "New Account",
    }
)


class TaskCreateRequest(BaseModel):
    """Request body for POST /tasks (admin)."""

    task_type: TaskType
    client_account_id: str = Field(..., min_length=1)
    manager_id: str = Field(..., min_length=1)
    description: str | None = Field(default=None, max_length=4000)


class TaskStatusUpdateRequest(BaseModel):
    """Request body for POST /tasks/{id}/status.

    Status is a plain string so unknown values reach the workflow and are
    reported as an invalid transition with the permitted targets.
    """

    status: str = Field(..., min_length=1, max_length=64)


class StatusOption(BaseModel):
    """A status with its display label."""

    value: TaskStatus
    label: str

    @classmethod
    def of(cls, status: TaskStatus) -> "StatusOption":
        return cls(value=status, label=STATUS_LABELS[status])


class TaskResponse(BaseModel):
    """Task response, with display labels."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    task_type: TaskType
    client_account_id: str
    manager_id: str
    status: TaskStatus
    description: str | None
    created_at: datetime
    created_by: str | None
    started_at: datetime | None
    completed_at: datetime | None
    closed_at: datetime | None
    client_account_name: str | None = None
    manager_name: str | None = None

    @computed_field
    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]

    @computed_field
    @property
    def status_category(self) -> str:
        return STATUS_CATEGORIES[self.status]

    @computed_field
    @property
    def task_type_label(self) -> str:
        return TASK_TYPE_LABELS[self.task_type]


class TransitionOptionsResponse(BaseModel):
    """Permitted next statuses of a task (empty when closed)."""

    task_id: str
    status: TaskStatus
    allowed: list[StatusOption]


class WorkflowTransition(BaseModel):
    """One row of the transition table."""

    status: StatusOption
    allowed: list[StatusOption]
    stamps: str | None = Field(
        default=None, description="Timestamp field set on first entry into status"
    )


class WorkflowResponse(BaseModel):
    """The full transition table in workflow order."""

    initial_status: TaskStatus = TaskStatus.NEW
    terminal_statuses: list[TaskStatus]
    transitions: list[WorkflowTransition]
    unique_active_task_types: list[TaskType]
    task_types: dict[TaskType, str] = Field(
        default_factory=lambda: dict(TASK_TYPE_LABELS)
    )
