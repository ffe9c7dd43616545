"""Manager profiles API (admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from taskdesk.api.v1.dependencies import (
    get_client_account_service,
    get_manager_service,
    get_manager_service_for_write,
    require_capability,
)
from taskdesk.application.dtos.user import UserResult
from taskdesk.application.use_cases.client_accounts import ClientAccountService
from taskdesk.application.use_cases.managers import ManagerService
from taskdesk.core.limiter import limit_writes
from taskdesk.domain.capabilities import Capability
from taskdesk.domain.enums import RecordStatus
from taskdesk.schemas.client_account import ClientAccountResponse
from taskdesk.schemas.manager import (
    ManagerCreateRequest,
    ManagerResponse,
    ManagerUpdateRequest,
)

router = APIRouter()

AdminUser = Annotated[UserResult, Depends(require_capability(Capability.MANAGE_MANAGERS))]


@router.get("", response_model=list[ManagerResponse])
async def list_managers(
    _: AdminUser,
    manager_service: Annotated[ManagerService, Depends(get_manager_service)],
    status: RecordStatus | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List manager profiles, newest first."""
    managers = await manager_service.list_managers(status, skip=skip, limit=limit)
    return [ManagerResponse.model_validate(m) for m in managers]


@router.post("", response_model=ManagerResponse, status_code=201)
@limit_writes
async def create_manager(
    request: Request,
    body: ManagerCreateRequest,
    current_user: AdminUser,
    manager_service: Annotated[ManagerService, Depends(get_manager_service_for_write)],
):
    """Create a manager profile for an existing manager-role user."""
    manager = await manager_service.create_manager(
        body.user_id,
        phone=body.phone,
        status=body.status,
        created_by=current_user.id,
    )
    return ManagerResponse.model_validate(manager)


@router.get("/{manager_id}", response_model=ManagerResponse)
async def get_manager(
    manager_id: str,
    _: AdminUser,
    manager_service: Annotated[ManagerService, Depends(get_manager_service)],
):
    manager = await manager_service.get_manager(manager_id)
    return ManagerResponse.model_validate(manager)


@router.patch("/{manager_id}", response_model=ManagerResponse)
@limit_writes
async def update_manager(
    request: Request,
    manager_id: str,
    body: ManagerUpdateRequest,
    _: AdminUser,
    manager_service: Annotated[ManagerService, Depends(get_manager_service_for_write)],
):
    """Update phone and/or status."""
    manager = await manager_service.update_manager(
        manager_id, phone=body.phone, status=body.status
    )
    return ManagerResponse.model_validate(manager)


@router.delete("/{manager_id}", status_code=204)
@limit_writes
async def delete_manager(
    request: Request,
    manager_id: str,
    _: AdminUser,
    manager_service: Annotated[ManagerService, Depends(get_manager_service_for_write)],
):
    """Delete a manager with their client accounts and tasks."""
    await manager_service.delete_manager(manager_id)
    return Response(status_code=204)


@router.get("/{manager_id}/client-accounts", response_model=list[ClientAccountResponse])
async def list_manager_client_accounts(
    manager_id: str,
    _: Annotated[UserResult, Depends(require_capability(Capability.CREATE_TASKS))],
    manager_service: Annotated[ManagerService, Depends(get_manager_service)],
    account_service: Annotated[ClientAccountService, Depends(get_client_account_service)],
    status: RecordStatus | None = RecordStatus.ACTIVE,
):
    """Accounts of a manager for the task-creation picker (active only by default)."""
    await manager_service.get_manager(manager_id)
    accounts = await account_service.list_accounts(manager_id, status)
    return [ClientAccountResponse.model_validate(a) for a in accounts]
