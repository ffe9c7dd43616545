"""Client account use cases (managers maintain their own accounts)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskdesk.application.dtos.client_account import ClientAccountResult
from taskdesk.domain.enums import RecordStatus
from taskdesk.domain.exceptions import ResourceNotFoundException, ValidationException

if TYPE_CHECKING:
    from taskdesk.application.interfaces.repositories import IClientAccountRepository

_EDITABLE_FIELDS = frozenset(
    {"account_name", "contact_person", "email", "phone", "status"}
)
_REQUIRED_FIELDS = frozenset({"account_name", "status"})


class ClientAccountService:
    """CRUD on client accounts scoped to the owning manager."""

    def __init__(self, client_account_repo: IClientAccountRepository) -> None:
        self._repo = client_account_repo

    async def list_accounts(
        self,
        manager_id: str,
        status: RecordStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[ClientAccountResult]:
        return await self._repo.list_by_manager(
            manager_id, status, skip=skip, limit=limit
        )

    async def get_account(self, account_id: str, *, manager_id: str) -> ClientAccountResult:
        account = await self._repo.get_by_id(account_id)
        if account is None or account.manager_id != manager_id:
            raise ResourceNotFoundException("client_account", account_id)
        return account

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
        name = account_name.strip()
        if not name:
            raise ValidationException("Account name is required", field="account_name")
        return await self._repo.create_account(
            manager_id,
            name,
            contact_person=contact_person,
            email=email,
            phone=phone,
            status=status,
        )

    async def update_account(
        self, account_id: str, *, manager_id: str, **changes: object
    ) -> ClientAccountResult:
        """Apply only the fields present in changes.

        None clears contact_person, email or phone; account_name and status
        cannot be cleared.
        """
        await self.get_account(account_id, manager_id=manager_id)
        unknown = sorted(changes.keys() - _EDITABLE_FIELDS)
        if unknown:
            raise ValidationException(
                f"Unknown client account field: {unknown[0]}", field=unknown[0]
            )
        for field in _REQUIRED_FIELDS & changes.keys():
            if changes[field] is None:
                raise ValidationException(f"{field} cannot be empty", field=field)
        if "account_name" in changes:
            account_name = str(changes["account_name"]).strip()
            if not account_name:
                raise ValidationException("Account name is required", field="account_name")
            changes["account_name"] = account_name
        if "status" in changes:
            changes["status"] = RecordStatus(changes["status"])
        updated = await self._repo.update_account(account_id, **changes)
        if updated is None:
            raise ResourceNotFoundException("client_account", account_id)
        return updated

    async def delete_account(self, account_id: str, *, manager_id: str) -> None:
        await self.get_account(account_id, manager_id=manager_id)
        if not await self._repo.delete_account(account_id):
            raise ResourceNotFoundException("client_account", account_id)
