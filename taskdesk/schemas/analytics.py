"""Analytics API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ManagerTaskCountItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    manager_id: str
    manager_name: str
    total: int
    closed: int


class TaskStatsResponse(BaseModel):
    """Admin dashboard task statistics."""

    model_config = ConfigDict(from_attributes=True)

    total_tasks: int
    closed_tasks: int
    in_progress_tasks: int
    new_tasks: int
    average_completion_days: float = Field(
        ..., description="Mean days from creation to close over closed tasks"
    )
    tasks_by_type: dict[str, int] = Field(default_factory=dict)
    tasks_by_manager: list[ManagerTaskCountItem] = Field(default_factory=list)
