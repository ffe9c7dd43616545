"""Manager ORM model: technical manager profile attached to a user."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskdesk.infrastructure.persistence.database import Base
from taskdesk.infrastructure.persistence.models.mixins import BaseModelMixin
from taskdesk.infrastructure.persistence.models.user import User


class Manager(BaseModelMixin, Base):
    """Manager profile. Table: manager. One profile per user."""

    __tablename__ = "manager"

    user_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default="active", server_default="active"
    )
    created_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    user: Mapped[User] = relationship(User, foreign_keys=[user_id], lazy="raise")
