"""Persistence models: ORM entities and mixins."""

from taskdesk.infrastructure.persistence.models.client_account import ClientAccount
from taskdesk.infrastructure.persistence.models.manager import Manager
from taskdesk.infrastructure.persistence.models.mixins import (
    BaseModelMixin,
    CuidMixin,
    TimestampMixin,
)
from taskdesk.infrastructure.persistence.models.task import Task
from taskdesk.infrastructure.persistence.models.user import User

__all__ = [
    "User",
    "Manager",
    "ClientAccount",
    "Task",
    "CuidMixin",
    "TimestampMixin",
    "BaseModelMixin",
]
