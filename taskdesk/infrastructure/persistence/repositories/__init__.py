"""Repository implementations backed by SQLAlchemy async sessions."""

from taskdesk.infrastructure.persistence.repositories.client_account_repo import (
    ClientAccountRepository,
)
from taskdesk.infrastructure.persistence.repositories.manager_repo import (
    ManagerRepository,
)
from taskdesk.infrastructure.persistence.repositories.task_repo import TaskRepository
from taskdesk.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "ClientAccountRepository",
    "ManagerRepository",
    "TaskRepository",
    "UserRepository",
]
