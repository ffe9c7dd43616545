"""Task repository: admission lookups, insertion and conditional status updates."""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskdesk.application.dtos.task import TaskFilter, TaskResult
from taskdesk.domain.enums import TaskStatus, TaskType
from taskdesk.domain.exceptions import DuplicateActiveTaskException
from taskdesk.domain.task_workflow import (
    ACTIVE_STATUSES,
    InitialTaskFields,
    TransitionOutcome,
)
from taskdesk.infrastructure.persistence.models.manager import Manager
from taskdesk.infrastructure.persistence.models.task import ACTIVE_TRIPLE_INDEX, Task
from taskdesk.shared.utils.datetime import ensure_utc

_ACTIVE_STATUS_VALUES = sorted(s.value for s in ACTIVE_STATUSES)


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM (with client account and manager loaded) to TaskResult DTO."""
    manager_name = None
    if t.manager is not None and t.manager.user is not None:
        manager_name = t.manager.user.full_name or t.manager.user.email
    return TaskResult(
        id=t.id,
        task_type=TaskType(t.task_type),
        client_account_id=t.client_account_id,
        manager_id=t.manager_id,
        status=TaskStatus(t.status),
        description=t.description,
        created_at=ensure_utc(t.created_at),
        created_by=t.created_by,
        started_at=ensure_utc(t.started_at),
        completed_at=ensure_utc(t.completed_at),
        closed_at=ensure_utc(t.closed_at),
        client_account_name=(
            t.client_account.account_name if t.client_account is not None else None
        ),
        manager_name=manager_name,
    )


class TaskRepository:
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _select(self):
        return select(Task).options(
            selectinload(Task.client_account),
            selectinload(Task.manager).selectinload(Manager.user),
        )

    async def count_active_duplicates(
        self,
        task_type: TaskType,
        client_account_id: str,
        manager_id: str,
    ) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Task)
            .where(
                Task.client_account_id == client_account_id,
                Task.manager_id == manager_id,
                Task.task_type == TaskType(task_type).value,
                Task.status.in_(_ACTIVE_STATUS_VALUES),
            )
        )
        return int(result.scalar_one())

    async def create_task(
        self,
        fields: InitialTaskFields,
        *,
        description: str | None = None,
        created_by: str | None = None,
    ) -> TaskResult:
        """Insert an admitted task.

        The partial unique index on active agreement/review tasks rejects a
        concurrent duplicate that passed the pre-insert count; that rejection
        is reported as DuplicateActiveTaskException.
        """
        task = Task(
            task_type=fields.task_type.value,
            client_account_id=fields.client_account_id,
            manager_id=fields.manager_id,
            status=fields.status.value,
            description=description,
            created_by=created_by,
            started_at=fields.timestamps.started_at,
            completed_at=fields.timestamps.completed_at,
            closed_at=fields.timestamps.closed_at,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(task)
                await self.db.flush()
        except IntegrityError as e:
            if ACTIVE_TRIPLE_INDEX in str(e.orig):
                raise DuplicateActiveTaskException(
                    task_type=fields.task_type.value,
                    client_account_id=fields.client_account_id,
                    manager_id=fields.manager_id,
                ) from None
            raise
        created = await self.get_by_id(task.id)
        assert created is not None
        return created

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        result = await self.db.execute(
            self._select()
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        task = result.scalar_one_or_none()
        return _to_result(task) if task else None

    async def list_tasks(
        self, filters: TaskFilter, skip: int = 0, limit: int = 100
    ) -> list[TaskResult]:
        q = self._select()
        if filters.manager_id is not None:
            q = q.where(Task.manager_id == filters.manager_id)
        if filters.client_account_id is not None:
            q = q.where(Task.client_account_id == filters.client_account_id)
        if filters.task_type is not None:
            q = q.where(Task.task_type == TaskType(filters.task_type).value)
        if filters.status is not None:
            q = q.where(Task.status == TaskStatus(filters.status).value)
        q = q.order_by(Task.created_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return [_to_result(t) for t in result.scalars().all()]

    async def list_all(self) -> list[TaskResult]:
        result = await self.db.execute(self._select().order_by(Task.created_at.desc()))
        return [_to_result(t) for t in result.scalars().all()]

    async def apply_transition(
        self, task_id: str, outcome: TransitionOutcome
    ) -> TaskResult | None:
        """Write status and stamped timestamps in one UPDATE guarded by the previous status."""
        result = await self.db.execute(
            update(Task)
            .where(
                Task.id == task_id,
                Task.status == outcome.previous_status.value,
            )
            .values(**outcome.changes())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self.get_by_id(task_id)
