"""Task workflow engine: status state machine, lifecycle timestamps, creation admission.

The engine is pure: it holds no state between calls and performs no I/O.
The transition table is built once and injected into TaskWorkflow so tests
can substitute alternate workflows. Store lookups needed for admission are
done by the caller (see application.services.task_admission) and passed in.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Any

from taskdesk.domain.enums import TaskStatus, TaskType
from taskdesk.domain.exceptions import (
    DuplicateActiveTaskException,
    InvalidTransitionException,
    ValidationException,
)
from taskdesk.shared.utils.datetime import utc_now

TransitionTable = Mapping[TaskStatus, frozenset[TaskStatus]]


def build_transition_table(
    edges: Mapping[TaskStatus, Iterable[TaskStatus]],
) -> TransitionTable:
    """Return an immutable transition table covering every TaskStatus.

    Statuses absent from edges get an empty target set (terminal).
    Self-edges are dropped: a transition must change state.
    """
    table = {
        status: frozenset(
            TaskStatus(t) for t in edges.get(status, ()) if TaskStatus(t) is not status
        )
        for status in TaskStatus
    }
    return MappingProxyType(table)


DEFAULT_TRANSITION_TABLE: TransitionTable = build_transition_table(
    {
        TaskStatus.NEW: [TaskStatus.IN_PROGRESS],
        TaskStatus.IN_PROGRESS: [
            TaskStatus.AGREEMENT_DONE,
            TaskStatus.WAITING_FOR_REVIEW,
        ],
        TaskStatus.AGREEMENT_DONE: [TaskStatus.WAITING_FOR_REVIEW],
        TaskStatus.WAITING_FOR_REVIEW: [TaskStatus.REVIEW_DONE],
        TaskStatus.REVIEW_DONE: [TaskStatus.CLOSED],
        TaskStatus.CLOSED: [],
    }
)

ACTIVE_STATUSES: frozenset[TaskStatus] = frozenset(
    s for s in TaskStatus if s is not TaskStatus.CLOSED
)

# Task types limited to one active task per (client_account, manager, type).
UNIQUE_ACTIVE_TASK_TYPES: frozenset[TaskType] = frozenset(
    {TaskType.AGREEMENT, TaskType.REVIEW}
)

# Target status -> write-once timestamp field it stamps.
_TIMESTAMP_FIELD_FOR_STATUS: Mapping[TaskStatus, str] = MappingProxyType(
    {
        TaskStatus.IN_PROGRESS: "started_at",
        TaskStatus.AGREEMENT_DONE: "completed_at",
        TaskStatus.REVIEW_DONE: "completed_at",
        TaskStatus.CLOSED: "closed_at",
    }
)


@dataclass(frozen=True)
class TaskTimestamps:
    """Lifecycle timestamps of a task. Each is set at most once."""

    started_at: datetime | None = None
    completed_at: datetime | None = None
    closed_at: datetime | None = None


@dataclass(frozen=True)
class TransitionOutcome:
    """Accepted transition: new status plus the timestamp patch, applied together."""

    previous_status: TaskStatus
    status: TaskStatus
    timestamps: TaskTimestamps
    stamped: tuple[str, ...] = ()

    def changes(self) -> dict[str, Any]:
        """Return the field patch to persist (status and newly stamped timestamps only)."""
        patch: dict[str, Any] = {"status": self.status.value}
        for name in self.stamped:
            patch[name] = getattr(self.timestamps, name)
        return patch


@dataclass(frozen=True)
class InitialTaskFields:
    """Fields of an admitted task before insertion."""

    task_type: TaskType
    client_account_id: str
    manager_id: str
    status: TaskStatus = TaskStatus.NEW
    timestamps: TaskTimestamps = field(default_factory=TaskTimestamps)


def _coerce_status(value: TaskStatus | str) -> TaskStatus | None:
    """Return value as TaskStatus, or None if it is not a known status."""
    try:
        return TaskStatus(value)
    except ValueError:
        return None


def timestamp_field_for(status: TaskStatus) -> str | None:
    """Return the timestamp field first entry into status stamps, if any."""
    return _TIMESTAMP_FIELD_FOR_STATUS.get(status)


def derive_timestamps(
    target: TaskStatus,
    timestamps: TaskTimestamps,
    now: datetime,
) -> tuple[TaskTimestamps, tuple[str, ...]]:
    """Stamp the timestamp tied to target if it is still null.

    Returns the updated timestamps and the names of fields newly set.
    A field that is already set is never overwritten.
    """
    name = _TIMESTAMP_FIELD_FOR_STATUS.get(target)
    if name is None or getattr(timestamps, name) is not None:
        return timestamps, ()
    return replace(timestamps, **{name: now}), (name,)


class TaskWorkflow:
    """Decides task status transitions and creation admission from an injected table."""

    def __init__(
        self, transition_table: TransitionTable = DEFAULT_TRANSITION_TABLE
    ) -> None:
        self._table = transition_table

    @property
    def transition_table(self) -> TransitionTable:
        """Inspectable table of permitted next statuses (e.g. to disable invalid choices in a UI)."""
        return self._table

    def allowed_targets(self, status: TaskStatus | str) -> frozenset[TaskStatus]:
        """Return statuses reachable in one step from status (empty if unknown or terminal)."""
        current = _coerce_status(status)
        if current is None:
            return frozenset()
        return self._table.get(current, frozenset())

    def can_transition(
        self, current_status: TaskStatus | str, target_status: TaskStatus | str
    ) -> bool:
        """Return whether target_status is a permitted next state of current_status."""
        target = _coerce_status(target_status)
        if target is None:
            return False
        return target in self.allowed_targets(current_status)

    def request_transition(
        self,
        current_status: TaskStatus | str,
        timestamps: TaskTimestamps,
        target_status: TaskStatus | str,
        *,
        now: datetime | None = None,
    ) -> TransitionOutcome:
        """Validate one transition and derive its timestamp patch.

        Only the immediate current status is consulted; statuses reachable by
        chaining are rejected. Requesting the current status is rejected.

        Args:
            current_status: Status the task is in now.
            timestamps: Current lifecycle timestamps of the task.
            target_status: Requested next status.
            now: Time to stamp; defaults to the current UTC time.

        Returns:
            TransitionOutcome with new status, full timestamps and stamped field names.

        Raises:
            ValidationException: If current_status is not a known status.
            InvalidTransitionException: If target_status is not permitted from current_status.
        """
        current = _coerce_status(current_status)
        if current is None:
            raise ValidationException(
                f"Unknown task status: {current_status!r}", field="status"
            )
        target = _coerce_status(target_status)
        allowed = self._table.get(current, frozenset())
        if target is None or target not in allowed:
            raise InvalidTransitionException(
                from_status=current.value,
                to_status=getattr(target_status, "value", str(target_status)),
                allowed=sorted(s.value for s in allowed),
            )
        updated, stamped = derive_timestamps(target, timestamps, now or utc_now())
        return TransitionOutcome(
            previous_status=current,
            status=target,
            timestamps=updated,
            stamped=stamped,
        )

    @staticmethod
    def requires_unique_active(task_type: TaskType | str) -> bool:
        """Return whether task_type is limited to one active task per client/manager pair."""
        return TaskType(task_type) in UNIQUE_ACTIVE_TASK_TYPES

    def admit_creation(
        self,
        task_type: TaskType | str,
        client_account_id: str,
        manager_id: str,
        *,
        active_duplicates: int = 0,
    ) -> InitialTaskFields:
        """Decide whether a task may be created.

        Args:
            task_type: Requested task type.
            client_account_id: Client account the task is for.
            manager_id: Manager the task is assigned to.
            active_duplicates: Number of existing active tasks with the same
                (client_account_id, manager_id, task_type), as counted by the store.

        Returns:
            InitialTaskFields in status `new` with all timestamps null.

        Raises:
            ValidationException: If task_type is unknown.
            DuplicateActiveTaskException: If the type is constrained and a duplicate is active.
        """
        try:
            kind = TaskType(task_type)
        except ValueError:
            raise ValidationException(
                f"Unknown task type: {task_type!r}", field="task_type"
            ) from None
        if self.requires_unique_active(kind) and active_duplicates > 0:
            raise DuplicateActiveTaskException(
                task_type=kind.value,
                client_account_id=client_account_id,
                manager_id=manager_id,
            )
        return InitialTaskFields(
            task_type=kind,
            client_account_id=client_account_id,
            manager_id=manager_id,
        )
