"""Task ORM model. Lifecycle governed by taskdesk.domain.task_workflow."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskdesk.infrastructure.persistence.database import Base
from taskdesk.infrastructure.persistence.models.client_account import ClientAccount
from taskdesk.infrastructure.persistence.models.manager import Manager
from taskdesk.infrastructure.persistence.models.mixins import BaseModelMixin

# Name checked by TaskRepository when translating IntegrityError.
ACTIVE_TRIPLE_INDEX = "uq_task_active_triple"
ACTIVE_TRIPLE_PREDICATE = (
    "status <> 'closed' AND task_type IN ('agreement', 'review')"
)


class Task(BaseModelMixin, Base):
    """Task assigned to a manager for one of their client accounts. Table: task."""

    __tablename__ = "task"

    task_type: Mapped[str] = mapped_column(String(32), nullable=False)
    client_account_id: Mapped[str] = mapped_column(
        String, ForeignKey("client_account.id", ondelete="CASCADE"), nullable=False
    )
    manager_id: Mapped[str] = mapped_column(
        String, ForeignKey("manager.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="new", server_default="new"
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    closed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    client_account: Mapped[ClientAccount] = relationship(ClientAccount, lazy="raise")
    manager: Mapped[Manager] = relationship(Manager, lazy="raise")

    __table_args__ = (
        Index("ix_task_manager_status", "manager_id", "status"),
        Index("ix_task_created_at", "created_at"),
        Index(
            ACTIVE_TRIPLE_INDEX,
            "client_account_id",
            "manager_id",
            "task_type",
            unique=True,
            postgresql_where=text(ACTIVE_TRIPLE_PREDICATE),
        ),
    )
