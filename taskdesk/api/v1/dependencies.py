"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories and application
services. Routes depend only on these factories, never on infrastructure
directly; tests replace them through app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.manager import ManagerResult
from taskdesk.application.dtos.user import UserResult
from taskdesk.application.services.task_admission import TaskAdmissionService
from taskdesk.application.use_cases.analytics import GetTaskAnalyticsUseCase
from taskdesk.application.use_cases.client_accounts import ClientAccountService
from taskdesk.application.use_cases.managers import ManagerService
from taskdesk.application.use_cases.tasks import TaskService
from taskdesk.domain.capabilities import Capability, has_capability
from taskdesk.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
)
from taskdesk.domain.task_workflow import DEFAULT_TRANSITION_TABLE, TaskWorkflow
from taskdesk.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
)
from taskdesk.infrastructure.persistence.repositories import (
    ClientAccountRepository,
    ManagerRepository,
    TaskRepository,
    UserRepository,
)
from taskdesk.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)

# Built once; the table is immutable so the instance is shared by all requests.
_task_workflow = TaskWorkflow(DEFAULT_TRANSITION_TABLE)


def get_task_workflow() -> TaskWorkflow:
    """Task workflow engine (composition root)."""
    return _task_workflow


# ---- Repositories ----


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    return UserRepository(db)


async def get_manager_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ManagerRepository:
    return ManagerRepository(db)


# ---- Services ----


def _build_task_service(db: AsyncSession, workflow: TaskWorkflow) -> TaskService:
    task_repo = TaskRepository(db)
    return TaskService(
        task_repo=task_repo,
        manager_repo=ManagerRepository(db),
        client_account_repo=ClientAccountRepository(db),
        workflow=workflow,
        admission=TaskAdmissionService(task_repo, workflow),
    )


async def get_task_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    workflow: Annotated[TaskWorkflow, Depends(get_task_workflow)],
) -> TaskService:
    """TaskService for reads."""
    return _build_task_service(db, workflow)


async def get_task_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    workflow: Annotated[TaskWorkflow, Depends(get_task_workflow)],
) -> TaskService:
    """TaskService for creation and status changes; commits when the route returns."""
    return _build_task_service(db, workflow)


async def get_manager_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ManagerService:
    return ManagerService(ManagerRepository(db), UserRepository(db))


async def get_manager_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ManagerService:
    return ManagerService(ManagerRepository(db), UserRepository(db))


async def get_client_account_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClientAccountService:
    return ClientAccountService(ClientAccountRepository(db))


async def get_client_account_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ClientAccountService:
    return ClientAccountService(ClientAccountRepository(db))


async def get_task_analytics_use_case(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> GetTaskAnalyticsUseCase:
    return GetTaskAnalyticsUseCase(TaskRepository(db))


# ---- Identity ----


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult:
    """Return the active user named by the bearer token; raise 401 otherwise."""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        raise AuthenticationException("Invalid or expired token") from None
    user = await user_repo.get_by_id(payload["sub"])
    if user is None or not user.is_active:
        raise AuthenticationException("Invalid or expired token")
    return user


def require_capability(capability: Capability):
    """Dependency factory: require JWT auth and a role that grants capability."""

    async def _require(
        current_user: Annotated[UserResult, Depends(get_current_user)],
    ) -> UserResult:
        if not has_capability(current_user.role, capability):
            raise AuthorizationException(
                message=f"Permission denied: requires {capability.value}"
            )
        return current_user

    return _require


async def get_current_manager(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    manager_repo: Annotated[ManagerRepository, Depends(get_manager_repo)],
) -> ManagerResult:
    """Return the caller's manager profile; 403 when the user has none."""
    manager = await manager_repo.get_by_user_id(current_user.id)
    if manager is None:
        raise AuthorizationException(message="Manager profile not found")
    return manager
