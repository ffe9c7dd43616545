"""Pytest configuration and fixtures for taskdesk.

API tests run against taskdesk.main:app with repositories and services
replaced by the in-memory fakes in tests/fakes.py, so no database is needed.
"""

import os

# Settings validate on first use; provide a key before the app is imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

from dataclasses import dataclass  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from taskdesk.api.v1 import dependencies as deps  # noqa: E402
from taskdesk.application.dtos.client_account import ClientAccountResult  # noqa: E402
from taskdesk.application.dtos.manager import ManagerResult  # noqa: E402
from taskdesk.application.dtos.user import UserResult  # noqa: E402
from taskdesk.application.services.task_admission import TaskAdmissionService  # noqa: E402
from taskdesk.application.use_cases.analytics import GetTaskAnalyticsUseCase  # noqa: E402
from taskdesk.application.use_cases.client_accounts import ClientAccountService  # noqa: E402
from taskdesk.application.use_cases.managers import ManagerService  # noqa: E402
from taskdesk.application.use_cases.tasks import TaskService  # noqa: E402
from taskdesk.core.limiter import limiter  # noqa: E402
from taskdesk.domain.enums import RecordStatus, UserRole  # noqa: E402
from taskdesk.domain.exceptions import StoreUnavailableException  # noqa: E402
from taskdesk.domain.task_workflow import TaskWorkflow  # noqa: E402
from taskdesk.infrastructure.persistence import database  # noqa: E402
from taskdesk.infrastructure.security.jwt import create_access_token  # noqa: E402
from taskdesk.main import app  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeClientAccountRepository,
    FakeManagerRepository,
    FakeTaskRepository,
    FakeUserRepository,
    InMemoryStore,
)


@dataclass
class Seed:
    """Users, manager profiles and client accounts present in every API test."""

    admin: UserResult
    manager_user: UserResult
    manager: ManagerResult
    other_manager_user: UserResult
    other_manager: ManagerResult
    account: ClientAccountResult
    other_account: ClientAccountResult
    inactive_account: ClientAccountResult
    orphan_manager_user: UserResult


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def seed(store: InMemoryStore) -> Seed:
    admin = store.add_user("admin@example.com", UserRole.ADMIN, full_name="Ada Admin")
    manager_user = store.add_user("mia@example.com", UserRole.MANAGER, full_name="Mia Manager")
    manager = store.add_manager(manager_user, phone="+1 555 0100")
    other_user = store.add_user("omar@example.com", UserRole.MANAGER, full_name="Omar Other")
    other_manager = store.add_manager(other_user)
    orphan = store.add_user("nobody@example.com", UserRole.MANAGER)
    return Seed(
        admin=admin,
        manager_user=manager_user,
        manager=manager,
        other_manager_user=other_user,
        other_manager=other_manager,
        account=store.add_account(manager, "Acme Corp"),
        other_account=store.add_account(other_manager, "Globex"),
        inactive_account=store.add_account(
            manager, "Dormant Ltd", status=RecordStatus.INACTIVE
        ),
        orphan_manager_user=orphan,
    )


@pytest.fixture
def workflow() -> TaskWorkflow:
    return TaskWorkflow()


@pytest.fixture
def task_repo(store: InMemoryStore) -> FakeTaskRepository:
    return FakeTaskRepository(store)


@pytest.fixture
def task_service(
    store: InMemoryStore, task_repo: FakeTaskRepository, workflow: TaskWorkflow
) -> TaskService:
    return TaskService(
        task_repo=task_repo,
        manager_repo=FakeManagerRepository(store),
        client_account_repo=FakeClientAccountRepository(store),
        workflow=workflow,
        admission=TaskAdmissionService(task_repo, workflow),
    )


@pytest.fixture
def api_app(store: InMemoryStore, seed: Seed, task_service: TaskService, task_repo: FakeTaskRepository):
    """taskdesk app with every store-backed dependency replaced by fakes."""
    manager_service = ManagerService(FakeManagerRepository(store), FakeUserRepository(store))
    account_service = ClientAccountService(FakeClientAccountRepository(store))
    overrides = {
        deps.get_user_repo: lambda: FakeUserRepository(store),
        deps.get_manager_repo: lambda: FakeManagerRepository(store),
        deps.get_task_service: lambda: task_service,
        deps.get_task_service_for_write: lambda: task_service,
        deps.get_manager_service: lambda: manager_service,
        deps.get_manager_service_for_write: lambda: manager_service,
        deps.get_client_account_service: lambda: account_service,
        deps.get_client_account_service_for_write: lambda: account_service,
        deps.get_task_analytics_use_case: lambda: GetTaskAnalyticsUseCase(task_repo),
    }
    app.dependency_overrides.update(overrides)
    limiter_enabled = limiter.enabled
    limiter.enabled = False
    yield app
    limiter.enabled = limiter_enabled
    app.dependency_overrides.clear()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), without overrides."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session():
    """Postgres session for repository tests. Rolled back after each test.

    Skips when DATABASE_URL is not set. Mark such tests with
    @pytest.mark.requires_db; run without a database via: pytest -m "not requires_db".
    """
    try:
        session_factory = database.require_session_factory()
    except StoreUnavailableException:
        pytest.skip("Postgres not configured: set DATABASE_URL, then run: alembic upgrade head")
    async with session_factory() as session:
        yield session
        await session.rollback()
    # Pooled connections belong to this test's event loop.
    await database.engine.dispose()


@pytest.fixture
async def api_client(api_app) -> AsyncClient:
    """Async HTTP client against the app backed by the in-memory store."""
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def bearer(user: UserResult) -> dict[str, str]:
    """Authorization header for user."""
    return {"Authorization": f"Bearer {create_access_token(user.id, role=user.role.value)}"}


@pytest.fixture
def admin_headers(seed: Seed) -> dict[str, str]:
    return bearer(seed.admin)


@pytest.fixture
def manager_headers(seed: Seed) -> dict[str, str]:
    return bearer(seed.manager_user)


@pytest.fixture
def other_manager_headers(seed: Seed) -> dict[str, str]:
    return bearer(seed.other_manager_user)


@pytest.fixture
def headers_for():
    """Return a function building the Authorization header for a user."""
    return bearer
