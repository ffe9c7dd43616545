"""ClientAccount ORM model: a client maintained by one manager."""

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from taskdesk.infrastructure.persistence.database import Base
from taskdesk.infrastructure.persistence.models.mixins import BaseModelMixin


class ClientAccount(BaseModelMixin, Base):
    """Client account. Table: client_account. Deleted with its manager."""

    __tablename__ = "client_account"

    account_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    manager_id: Mapped[str] = mapped_column(
        String, ForeignKey("manager.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default="active", server_default="active"
    )

    __table_args__ = (Index("ix_client_account_manager", "manager_id", "status"),)
