"""Analytics API (admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskdesk.api.v1.dependencies import get_task_analytics_use_case, require_capability
from taskdesk.application.dtos.user import UserResult
from taskdesk.application.use_cases.analytics import GetTaskAnalyticsUseCase
from taskdesk.domain.capabilities import Capability
from taskdesk.schemas.analytics import TaskStatsResponse

router = APIRouter()


@router.get("/tasks", response_model=TaskStatsResponse)
async def get_task_stats(
    _: Annotated[UserResult, Depends(require_capability(Capability.VIEW_ANALYTICS))],
    use_case: Annotated[GetTaskAnalyticsUseCase, Depends(get_task_analytics_use_case)],
):
    """Task counts, average completion days and breakdowns by type and manager."""
    stats = await use_case.get_task_stats()
    return TaskStatsResponse.model_validate(stats)
