"""initial_taskdesk_schema

Revision ID: 4f1c2a7d9b3e
Revises:
Create Date: 2026-10-18 09:12:44.518203

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f1c2a7d9b3e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False
        ),
        *_timestamps(),
        sa.CheckConstraint("role IN ('admin', 'manager')", name="ck_app_user_role"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "manager",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column(
            "status", sa.String(length=16), server_default="active", nullable=False
        ),
        sa.Column("created_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('active', 'inactive')", name="ck_manager_status"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["app_user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "client_account",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("account_name", sa.String(length=255), nullable=False),
        sa.Column("contact_person", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("manager_id", sa.String(), nullable=False),
        sa.Column(
            "status", sa.String(length=16), server_default="active", nullable=False
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('active', 'inactive')", name="ck_client_account_status"
        ),
        sa.ForeignKeyConstraint(["manager_id"], ["manager.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_client_account_manager",
        "client_account",
        ["manager_id", "status"],
        unique=False,
    )

    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("task_type", sa.String(length=32), nullable=False),
        sa.Column("client_account_id", sa.String(), nullable=False),
        sa.Column("manager_id", sa.String(), nullable=False),
        sa.Column("status", sa.String(length=32), server_default="new", nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "task_type IN ('agreement', 'review', 'new_account')",
            name="ck_task_type",
        ),
        sa.CheckConstraint(
            "status IN ('new', 'in_progress', 'agreement_done', "
            "'waiting_for_review', 'review_done', 'closed')",
            name="ck_task_status",
        ),
        sa.ForeignKeyConstraint(
            ["client_account_id"], ["client_account.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["manager_id"], ["manager.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["app_user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_task_manager_status", "task", ["manager_id", "status"], unique=False
    )
    op.create_index("ix_task_created_at", "task", ["created_at"], unique=False)
    # At most one open agreement/review task per (client account, manager, type).
    op.create_index(
        "uq_task_active_triple",
        "task",
        ["client_account_id", "manager_id", "task_type"],
        unique=True,
        postgresql_where=sa.text(
            "status <> 'closed' AND task_type IN ('agreement', 'review')"
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("uq_task_active_triple", table_name="task")
    op.drop_index("ix_task_created_at", table_name="task")
    op.drop_index("ix_task_manager_status", table_name="task")
    op.drop_table("task")
    op.drop_index("ix_client_account_manager", table_name="client_account")
    op.drop_table("client_account")
    op.drop_table("manager")
    op.drop_table("app_user")
