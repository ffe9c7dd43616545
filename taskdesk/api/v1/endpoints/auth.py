"""Auth API: login and current principal."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from taskdesk.api.v1.dependencies import (
    get_current_user,
    get_manager_repo,
    get_user_repo,
)
from taskdesk.application.dtos.user import UserResult
from taskdesk.core.limiter import limit_auth
from taskdesk.domain.capabilities import capabilities_for, dashboard_for
from taskdesk.domain.enums import UserRole
from taskdesk.domain.exceptions import AuthenticationException
from taskdesk.infrastructure.persistence.repositories import (
    ManagerRepository,
    UserRepository,
)
from taskdesk.infrastructure.security.jwt import create_access_token
from taskdesk.schemas.auth import LoginRequest, MeResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """Authenticate with email and password; return a bearer token."""
    user = await user_repo.authenticate(email=body.email, password=body.password)
    if user is None:
        logger.info("Failed login for %s", body.email)
        raise AuthenticationException("Invalid credentials")
    token = create_access_token(user.id, role=user.role.value)
    return TokenResponse(access_token=token)


@router.get("/me", response_model=MeResponse)
async def get_me(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    manager_repo: Annotated[ManagerRepository, Depends(get_manager_repo)],
):
    """Return the caller, its capabilities and the dashboard it should land on."""
    manager_id = None
    if current_user.role is UserRole.MANAGER:
        manager = await manager_repo.get_by_user_id(current_user.id)
        manager_id = manager.id if manager else None
    return MeResponse(
        id=current_user.id,
        email=current_user.email,
        full_name=current_user.full_name,
        role=current_user.role,
        capabilities=sorted(capabilities_for(current_user.role), key=lambda c: c.value),
        dashboard=dashboard_for(current_user.role),
        manager_id=manager_id,
    )
