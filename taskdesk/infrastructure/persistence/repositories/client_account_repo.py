"""Client account repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.client_account import ClientAccountResult
from taskdesk.domain.enums import RecordStatus
from taskdesk.infrastructure.persistence.models.client_account import ClientAccount
from taskdesk.infrastructure.persistence.repositories.base import BaseRepository
from taskdesk.shared.utils.datetime import ensure_utc

_UPDATABLE_FIELDS = frozenset(
    {"account_name", "contact_person", "email", "phone", "status"}
)


def _to_result(a: ClientAccount) -> ClientAccountResult:
    """Map ClientAccount ORM to ClientAccountResult DTO."""
    return ClientAccountResult(
        id=a.id,
        account_name=a.account_name,
        contact_person=a.contact_person,
        email=a.email,
        phone=a.phone,
        manager_id=a.manager_id,
        status=RecordStatus(a.status),
        created_at=ensure_utc(a.created_at),
    )


class ClientAccountRepository(BaseRepository[ClientAccount]):
    """Client account repository. Implements IClientAccountRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ClientAccount)

    async def get_by_id(self, account_id: str) -> ClientAccountResult | None:
        account = await super().get_by_id(account_id)
        return _to_result(account) if account else None

    async def list_by_manager(
        self,
        manager_id: str,
        status: RecordStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ClientAccountResult]:
        q = select(ClientAccount).where(ClientAccount.manager_id == manager_id)
        if status is not None:
            q = q.where(ClientAccount.status == RecordStatus(status).value)
        q = q.order_by(ClientAccount.created_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return [_to_result(a) for a in result.scalars().all()]

    async def create_account(
        self,
        manager_id: str,
        account_name: str,
        *,
        contact_person: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        status: RecordStatus = RecordStatus.ACTIVE,
    ) -> ClientAccountResult:
        account = ClientAccount(
            manager_id=manager_id,
            account_name=account_name,
            contact_person=contact_person,
            email=email,
            phone=phone,
            status=RecordStatus(status).value,
        )
        created = await self.create(account)
        return _to_result(created)

    async def update_account(
        self, account_id: str, **changes: object
    ) -> ClientAccountResult | None:
        account = await super().get_by_id(account_id)
        if account is None:
            return None
        for name, value in changes.items():
            if name not in _UPDATABLE_FIELDS:
                continue
            if name == "status" and value is not None:
                value = RecordStatus(value).value
            setattr(account, name, value)
        updated = await self.save(account)
        return _to_result(updated)

    async def delete_account(self, account_id: str) -> bool:
        account = await super().get_by_id(account_id)
        if account is None:
            return False
        await self.delete(account)
        return True
