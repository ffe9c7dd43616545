"""ManagerService and ClientAccountService with in-memory repositories."""

import pytest

from taskdesk.application.use_cases.client_accounts import ClientAccountService
from taskdesk.application.use_cases.managers import ManagerService
from taskdesk.domain.enums import RecordStatus, TaskType
from taskdesk.domain.exceptions import (
    DuplicateRecordException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import (
    FakeClientAccountRepository,
    FakeManagerRepository,
    FakeUserRepository,
    InMemoryStore,
)


@pytest.fixture
def manager_service(store: InMemoryStore) -> ManagerService:
    return ManagerService(FakeManagerRepository(store), FakeUserRepository(store))


@pytest.fixture
def account_service(store: InMemoryStore) -> ClientAccountService:
    return ClientAccountService(FakeClientAccountRepository(store))


async def test_create_manager_profile(manager_service: ManagerService, seed) -> None:
    manager = await manager_service.create_manager(
        seed.orphan_manager_user.id, phone="+44 20 0000", created_by=seed.admin.id
    )
    assert manager.user_id == seed.orphan_manager_user.id
    assert manager.is_active
    assert manager.created_by == seed.admin.id


async def test_create_manager_requires_manager_role(manager_service: ManagerService, seed) -> None:
    with pytest.raises(ValidationException):
        await manager_service.create_manager(seed.admin.id)


async def test_create_manager_unknown_user(manager_service: ManagerService, seed) -> None:
    with pytest.raises(ResourceNotFoundException):
        await manager_service.create_manager("ghost")


async def test_create_manager_twice(manager_service: ManagerService, seed) -> None:
    with pytest.raises(DuplicateRecordException):
        await manager_service.create_manager(seed.manager_user.id)


async def test_update_manager_phone_and_status(manager_service: ManagerService, seed) -> None:
    updated = await manager_service.update_manager(
        seed.manager.id, phone="+1 555 0199", status=RecordStatus.INACTIVE
    )
    assert updated.phone == "+1 555 0199"
    assert updated.status is RecordStatus.INACTIVE
    with pytest.raises(ResourceNotFoundException):
        await manager_service.update_manager("missing", phone="1")


async def test_list_managers_by_status(manager_service: ManagerService, seed) -> None:
    await manager_service.update_manager(seed.other_manager.id, status=RecordStatus.INACTIVE)
    active = await manager_service.list_managers(RecordStatus.ACTIVE)
    assert [m.id for m in active] == [seed.manager.id]
    assert len(await manager_service.list_managers()) == 2


async def test_delete_manager_cascades(
    manager_service: ManagerService, seed, store: InMemoryStore, task_service
) -> None:
    await task_service.create_task(
        task_type=TaskType.NEW_ACCOUNT,
        client_account_id=seed.account.id,
        manager_id=seed.manager.id,
    )
    await manager_service.delete_manager(seed.manager.id)
    assert seed.manager.id not in store.managers
    assert all(a.manager_id != seed.manager.id for a in store.accounts.values())
    assert all(t.manager_id != seed.manager.id for t in store.tasks.values())
    with pytest.raises(ResourceNotFoundException):
        await manager_service.delete_manager(seed.manager.id)


async def test_account_crud_scoped_to_owner(account_service: ClientAccountService, seed) -> None:
    created = await account_service.create_account(
        seed.manager.id, "  Initech  ", contact_person="Bill", email="bill@initech.test"
    )
    assert created.account_name == "Initech"

    listed = await account_service.list_accounts(seed.manager.id)
    assert listed[0].id == created.id

    updated = await account_service.update_account(
        created.id, manager_id=seed.manager.id, status=RecordStatus.INACTIVE
    )
    assert updated.status is RecordStatus.INACTIVE
    assert updated.contact_person == "Bill"

    with pytest.raises(ResourceNotFoundException):
        await account_service.get_account(created.id, manager_id=seed.other_manager.id)
    with pytest.raises(ResourceNotFoundException):
        await account_service.delete_account(created.id, manager_id=seed.other_manager.id)

    await account_service.delete_account(created.id, manager_id=seed.manager.id)
    with pytest.raises(ResourceNotFoundException):
        await account_service.get_account(created.id, manager_id=seed.manager.id)


async def test_account_name_required(account_service: ClientAccountService, seed) -> None:
    with pytest.raises(ValidationException):
        await account_service.create_account(seed.manager.id, "   ")
    with pytest.raises(ValidationException):
        await account_service.update_account(
            seed.account.id, manager_id=seed.manager.id, account_name=" "
        )


async def test_list_accounts_active_only(account_service: ClientAccountService, seed) -> None:
    active = await account_service.list_accounts(seed.manager.id, RecordStatus.ACTIVE)
    assert [a.id for a in active] == [seed.account.id]



async def test_update_account_clears_optional_fields(
    account_service: ClientAccountService, seed
) -> None:
    created = await account_service.create_account(
        seed.manager.id,
        "Initech",
        contact_person="Bill",
        email="bill@initech.test",
        phone="+1 555 0111",
    )
    updated = await account_service.update_account(
        created.id, manager_id=seed.manager.id, contact_person=None, email=None
    )
    assert updated.contact_person is None
    assert updated.email is None
    assert updated.phone == "+1 555 0111"
    assert updated.account_name == "Initech"


async def test_update_account_keeps_required_fields(
    account_service: ClientAccountService, seed
) -> None:
    for field in ("account_name", "status"):
        with pytest.raises(ValidationException) as exc_info:
            await account_service.update_account(
                seed.account.id, manager_id=seed.manager.id, **{field: None}
            )
        assert exc_info.value.details == {"field": field}
    unchanged = await account_service.get_account(seed.account.id, manager_id=seed.manager.id)
    assert unchanged.account_name == "Acme Corp"
    assert unchanged.status is RecordStatus.ACTIVE
