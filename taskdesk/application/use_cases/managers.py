"""Manager profile use cases (admin)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taskdesk.application.dtos.manager import ManagerResult
from taskdesk.domain.enums import RecordStatus, UserRole
from taskdesk.domain.exceptions import ResourceNotFoundException, ValidationException

if TYPE_CHECKING:
    from taskdesk.application.interfaces.repositories import (
        IManagerRepository,
        IUserRepository,
    )

logger = logging.getLogger(__name__)


class ManagerService:
    """List, create, update and delete technical manager profiles."""

    def __init__(
        self, manager_repo: IManagerRepository, user_repo: IUserRepository
    ) -> None:
        self._manager_repo = manager_repo
        self._user_repo = user_repo

    async def list_managers(
        self,
        status: RecordStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ManagerResult]:
        return await self._manager_repo.list_managers(status, skip=skip, limit=limit)

    async def get_manager(self, manager_id: str) -> ManagerResult:
        manager = await self._manager_repo.get_by_id(manager_id)
        if manager is None:
            raise ResourceNotFoundException("manager", manager_id)
        return manager

    async def create_manager(
        self,
        user_id: str,
        *,
        phone: str | None = None,
        status: RecordStatus = RecordStatus.ACTIVE,
        created_by: str | None = None,
    ) -> ManagerResult:
        """Create a manager profile for an existing user with the manager role."""
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        if user.role is not UserRole.MANAGER:
            raise ValidationException(
                "Manager profiles can only be created for users with the manager role",
                field="user_id",
            )
        manager = await self._manager_repo.create_manager(
            user_id, phone=phone, status=status, created_by=created_by
        )
        logger.info("Manager profile created id=%s user=%s", manager.id, user_id)
        return manager

    async def update_manager(
        self,
        manager_id: str,
        *,
        phone: str | None = None,
        status: RecordStatus | None = None,
    ) -> ManagerResult:
        manager = await self._manager_repo.update_manager(
            manager_id, phone=phone, status=status
        )
        if manager is None:
            raise ResourceNotFoundException("manager", manager_id)
        return manager

    async def delete_manager(self, manager_id: str) -> None:
        """Delete manager; the store cascades to their client accounts and tasks."""
        if not await self._manager_repo.delete_manager(manager_id):
            raise ResourceNotFoundException("manager", manager_id)
        logger.info("Manager deleted id=%s", manager_id)
