"""Manager profile repository. Profiles are always read together with their user."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskdesk.application.dtos.manager import ManagerResult
from taskdesk.domain.enums import RecordStatus
from taskdesk.domain.exceptions import DuplicateRecordException
from taskdesk.infrastructure.persistence.models.manager import Manager
from taskdesk.infrastructure.persistence.repositories.base import BaseRepository
from taskdesk.shared.utils.datetime import ensure_utc


def _to_result(m: Manager) -> ManagerResult:
    """Map Manager ORM (with user loaded) to ManagerResult DTO."""
    return ManagerResult(
        id=m.id,
        user_id=m.user_id,
        phone=m.phone,
        status=RecordStatus(m.status),
        created_at=ensure_utc(m.created_at),
        created_by=m.created_by,
        full_name=m.user.full_name,
        email=m.user.email,
    )


class ManagerRepository(BaseRepository[Manager]):
    """Manager repository. Implements IManagerRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Manager)

    def _select(self):
        return select(Manager).options(selectinload(Manager.user))

    async def _load(self, manager_id: str) -> Manager | None:
        result = await self.db.execute(
            self._select()
            .where(Manager.id == manager_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, manager_id: str) -> ManagerResult | None:
        manager = await self._load(manager_id)
        return _to_result(manager) if manager else None

    async def get_by_user_id(self, user_id: str) -> ManagerResult | None:
        result = await self.db.execute(
            self._select().where(Manager.user_id == user_id)
        )
        manager = result.scalar_one_or_none()
        return _to_result(manager) if manager else None

    async def list_managers(
        self,
        status: RecordStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ManagerResult]:
        q = self._select()
        if status is not None:
            q = q.where(Manager.status == RecordStatus(status).value)
        q = q.order_by(Manager.created_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return [_to_result(m) for m in result.scalars().all()]

    async def create_manager(
        self,
        user_id: str,
        *,
        phone: str | None,
        status: RecordStatus,
        created_by: str | None,
    ) -> ManagerResult:
        manager = Manager(
            user_id=user_id,
            phone=phone,
            status=RecordStatus(status).value,
            created_by=created_by,
        )
        try:
            async with self.db.begin_nested():
                created = await self.create(manager)
        except IntegrityError:
            raise DuplicateRecordException(
                "This user already has a manager profile", "manager"
            ) from None
        loaded = await self._load(created.id)
        assert loaded is not None
        return _to_result(loaded)

    async def update_manager(
        self,
        manager_id: str,
        *,
        phone: str | None = None,
        status: RecordStatus | None = None,
    ) -> ManagerResult | None:
        manager = await self._load(manager_id)
        if manager is None:
            return None
        if phone is not None:
            manager.phone = phone
        if status is not None:
            manager.status = RecordStatus(status).value
        await self.save(manager)
        reloaded = await self._load(manager_id)
        return _to_result(reloaded) if reloaded else None

    async def delete_manager(self, manager_id: str) -> bool:
        manager = await super().get_by_id(manager_id)
        if manager is None:
            return False
        await self.delete(manager)
        return True
