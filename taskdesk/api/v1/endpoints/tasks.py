"""Task API: admin creation and listing, manager status changes, workflow table.

Status changes go through TaskService.update_status, which validates the
transition with the workflow engine and writes status and timestamps in one
conditional update.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from taskdesk.api.v1.dependencies import (
    get_current_manager,
    get_current_user,
    get_manager_repo,
    get_task_service,
    get_task_service_for_write,
    get_task_workflow,
    require_capability,
)
from taskdesk.application.dtos.manager import ManagerResult
from taskdesk.application.dtos.task import TaskFilter
from taskdesk.application.dtos.user import UserResult
from taskdesk.application.use_cases.tasks import TaskService
from taskdesk.core.limiter import limit_writes
from taskdesk.domain.capabilities import Capability, has_capability
from taskdesk.domain.enums import TaskStatus, TaskType
from taskdesk.domain.exceptions import AuthorizationException
from taskdesk.domain.task_workflow import (
    UNIQUE_ACTIVE_TASK_TYPES,
    TaskWorkflow,
    timestamp_field_for,
)
from taskdesk.infrastructure.persistence.repositories import ManagerRepository
from taskdesk.schemas.task import (
    StatusOption,
    TaskCreateRequest,
    TaskResponse,
    TaskStatusUpdateRequest,
    TransitionOptionsResponse,
    WorkflowResponse,
    WorkflowTransition,
)

router = APIRouter()


async def _task_scope(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    manager_repo: Annotated[ManagerRepository, Depends(get_manager_repo)],
) -> str | None:
    """Manager id the caller's task reads are limited to; None for full visibility."""
    if has_capability(current_user.role, Capability.VIEW_ALL_TASKS):
        return None
    if not has_capability(current_user.role, Capability.VIEW_OWN_TASKS):
        raise AuthorizationException(message="Permission denied: requires view_own_tasks")
    manager = await manager_repo.get_by_user_id(current_user.id)
    if manager is None:
        raise AuthorizationException(message="Manager profile not found")
    return manager.id


@router.get("/workflow", response_model=WorkflowResponse)
async def get_workflow(
    _: Annotated[UserResult, Depends(get_current_user)],
    workflow: Annotated[TaskWorkflow, Depends(get_task_workflow)],
):
    """Return the transition table in workflow order, with display labels."""
    transitions = [
        WorkflowTransition(
            status=StatusOption.of(status),
            allowed=[
                StatusOption.of(t) for t in TaskStatus if workflow.can_transition(status, t)
            ],
            stamps=timestamp_field_for(status),
        )
        for status in TaskStatus
    ]
    return WorkflowResponse(
        terminal_statuses=[s for s in TaskStatus if not workflow.allowed_targets(s)],
        transitions=transitions,
        unique_active_task_types=[t for t in TaskType if t in UNIQUE_ACTIVE_TASK_TYPES],
    )


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    current_user: Annotated[UserResult, Depends(require_capability(Capability.CREATE_TASKS))],
    task_service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Create a task in status `new` (admin)."""
    task = await task_service.create_task(
        task_type=body.task_type,
        client_account_id=body.client_account_id,
        manager_id=body.manager_id,
        description=body.description,
        created_by=current_user.id,
    )
    return TaskResponse.model_validate(task)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    _: Annotated[UserResult, Depends(require_capability(Capability.VIEW_ALL_TASKS))],
    task_service: Annotated[TaskService, Depends(get_task_service)],
    status: TaskStatus | None = None,
    task_type: TaskType | None = None,
    manager_id: str | None = None,
    client_account_id: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List all tasks, newest first (admin)."""
    tasks = await task_service.list_tasks(
        TaskFilter(
            manager_id=manager_id,
            client_account_id=client_account_id,
            task_type=task_type,
            status=status,
        ),
        skip=skip,
        limit=limit,
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/mine", response_model=list[TaskResponse])
async def list_my_tasks(
    _: Annotated[UserResult, Depends(require_capability(Capability.VIEW_OWN_TASKS))],
    manager: Annotated[ManagerResult, Depends(get_current_manager)],
    task_service: Annotated[TaskService, Depends(get_task_service)],
    status: TaskStatus | None = None,
    task_type: TaskType | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List tasks assigned to the calling manager, newest first."""
    tasks = await task_service.list_tasks(
        TaskFilter(manager_id=manager.id, task_type=task_type, status=status),
        skip=skip,
        limit=limit,
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    scope: Annotated[str | None, Depends(_task_scope)],
    task_service: Annotated[TaskService, Depends(get_task_service)],
):
    """Return a task. Managers only see tasks assigned to them."""
    task = await task_service.get_task(task_id, manager_id=scope)
    return TaskResponse.model_validate(task)


@router.get("/{task_id}/transitions", response_model=TransitionOptionsResponse)
async def get_task_transitions(
    task_id: str,
    scope: Annotated[str | None, Depends(_task_scope)],
    task_service: Annotated[TaskService, Depends(get_task_service)],
):
    """Return the statuses the task may move to next (empty once closed)."""
    task, targets = await task_service.allowed_targets(task_id, manager_id=scope)
    return TransitionOptionsResponse(
        task_id=task.id,
        status=task.status,
        allowed=[StatusOption.of(s) for s in targets],
    )


@router.post("/{task_id}/status", response_model=TaskResponse)
@limit_writes
async def update_task_status(
    request: Request,
    task_id: str,
    body: TaskStatusUpdateRequest,
    _: Annotated[
        UserResult, Depends(require_capability(Capability.UPDATE_OWN_TASK_STATUS))
    ],
    manager: Annotated[ManagerResult, Depends(get_current_manager)],
    task_service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Move the task to the requested status (assigned manager only)."""
    task = await task_service.update_status(task_id, body.status, manager_id=manager.id)
    return TaskResponse.model_validate(task)
