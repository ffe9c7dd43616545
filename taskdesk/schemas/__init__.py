"""Pydantic request/response schemas for the API."""

from taskdesk.schemas.analytics import TaskStatsResponse
from taskdesk.schemas.auth import LoginRequest, MeResponse, TokenResponse
from taskdesk.schemas.client_account import (
    ClientAccountCreateRequest,
    ClientAccountResponse,
    ClientAccountUpdateRequest,
)
from taskdesk.schemas.health import HealthResponse, ReadinessResponse
from taskdesk.schemas.manager import (
    ManagerCreateRequest,
    ManagerResponse,
    ManagerUpdateRequest,
)
from taskdesk.schemas.task import (
    TaskCreateRequest,
    TaskResponse,
    TaskStatusUpdateRequest,
    TransitionOptionsResponse,
    WorkflowResponse,
)

__all__ = [
    "ClientAccountCreateRequest",
    "ClientAccountResponse",
    "ClientAccountUpdateRequest",
    "HealthResponse",
    "LoginRequest",
    "ManagerCreateRequest",
    "ManagerResponse",
    "ManagerUpdateRequest",
    "MeResponse",
    "ReadinessResponse",
    "TaskCreateRequest",
    "TaskResponse",
    "TaskStatsResponse",
    "TaskStatusUpdateRequest",
    "TokenResponse",
    "TransitionOptionsResponse",
    "WorkflowResponse",
]
