"""Client accounts API: a manager maintains their own accounts."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from taskdesk.api.v1.dependencies import (
    get_client_account_service,
    get_client_account_service_for_write,
    get_current_manager,
    require_capability,
)
from taskdesk.application.dtos.manager import ManagerResult
from taskdesk.application.dtos.user import UserResult
from taskdesk.application.use_cases.client_accounts import ClientAccountService
from taskdesk.core.limiter import limit_writes
from taskdesk.domain.capabilities import Capability
from taskdesk.domain.enums import RecordStatus
from taskdesk.schemas.client_account import (
    ClientAccountCreateRequest,
    ClientAccountResponse,
    ClientAccountUpdateRequest,
)

router = APIRouter()

ManagerUser = Annotated[
    UserResult, Depends(require_capability(Capability.MANAGE_OWN_CLIENT_ACCOUNTS))
]
CurrentManager = Annotated[ManagerResult, Depends(get_current_manager)]


@router.get("", response_model=list[ClientAccountResponse])
async def list_client_accounts(
    _: ManagerUser,
    manager: CurrentManager,
    account_service: Annotated[ClientAccountService, Depends(get_client_account_service)],
    status: RecordStatus | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List the caller's client accounts, newest first."""
    accounts = await account_service.list_accounts(
        manager.id, status, skip=skip, limit=limit
    )
    return [ClientAccountResponse.model_validate(a) for a in accounts]


@router.post("", response_model=ClientAccountResponse, status_code=201)
@limit_writes
async def create_client_account(
    request: Request,
    body: ClientAccountCreateRequest,
    _: ManagerUser,
    manager: CurrentManager,
    account_service: Annotated[
        ClientAccountService, Depends(get_client_account_service_for_write)
    ],
):
    account = await account_service.create_account(
        manager.id,
        body.account_name,
        contact_person=body.contact_person,
        email=body.email,
        phone=body.phone,
        status=body.status,
    )
    return ClientAccountResponse.model_validate(account)


@router.get("/{account_id}", response_model=ClientAccountResponse)
async def get_client_account(
    account_id: str,
    _: ManagerUser,
    manager: CurrentManager,
    account_service: Annotated[ClientAccountService, Depends(get_client_account_service)],
):
    account = await account_service.get_account(account_id, manager_id=manager.id)
    return ClientAccountResponse.model_validate(account)


@router.patch("/{account_id}", response_model=ClientAccountResponse)
@limit_writes
async def update_client_account(
    request: Request,
    account_id: str,
    body: ClientAccountUpdateRequest,
    _: ManagerUser,
    manager: CurrentManager,
    account_service: Annotated[
        ClientAccountService, Depends(get_client_account_service_for_write)
    ],
):
    account = await account_service.update_account(
        account_id,
        manager_id=manager.id,
        **body.model_dump(exclude_unset=True),
    )
    return ClientAccountResponse.model_validate(account)


@router.delete("/{account_id}", status_code=204)
@limit_writes
async def delete_client_account(
    request: Request,
    account_id: str,
    _: ManagerUser,
    manager: CurrentManager,
    account_service: Annotated[
        ClientAccountService, Depends(get_client_account_service_for_write)
    ],
):
    """Delete an account and its tasks."""
    await account_service.delete_account(account_id, manager_id=manager.id)
    return Response(status_code=204)
