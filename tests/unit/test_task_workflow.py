"""TaskWorkflow: transition table, write-once timestamps, creation admission."""

from datetime import datetime, timedelta, timezone

import pytest

from taskdesk.domain.enums import TaskStatus, TaskType
from taskdesk.domain.exceptions import (
    DuplicateActiveTaskException,
    InvalidTransitionException,
    ValidationException,
)
from taskdesk.domain.task_workflow import (
    ACTIVE_STATUSES,
    DEFAULT_TRANSITION_TABLE,
    TaskTimestamps,
    TaskWorkflow,
    build_transition_table,
    derive_timestamps,
    timestamp_field_for,
)

T0 = datetime(2025, 4, 1, 8, 0, 0, tzinfo=timezone.utc)

ALL_PAIRS = [(s, t) for s in TaskStatus for t in TaskStatus]
FORBIDDEN_PAIRS = [(s, t) for s, t in ALL_PAIRS if t not in DEFAULT_TRANSITION_TABLE[s]]


@pytest.fixture
def workflow() -> TaskWorkflow:
    return TaskWorkflow()


def test_default_table_matches_workflow() -> None:
    assert DEFAULT_TRANSITION_TABLE == {
        TaskStatus.NEW: {TaskStatus.IN_PROGRESS},
        TaskStatus.IN_PROGRESS: {TaskStatus.AGREEMENT_DONE, TaskStatus.WAITING_FOR_REVIEW},
        TaskStatus.AGREEMENT_DONE: {TaskStatus.WAITING_FOR_REVIEW},
        TaskStatus.WAITING_FOR_REVIEW: {TaskStatus.REVIEW_DONE},
        TaskStatus.REVIEW_DONE: {TaskStatus.CLOSED},
        TaskStatus.CLOSED: frozenset(),
    }


def test_transition_table_is_read_only(workflow: TaskWorkflow) -> None:
    with pytest.raises(TypeError):
        workflow.transition_table[TaskStatus.CLOSED] = frozenset({TaskStatus.NEW})  # type: ignore[index]


@pytest.mark.parametrize(("current", "target"), FORBIDDEN_PAIRS)
def test_forbidden_transition_is_rejected(
    workflow: TaskWorkflow, current: TaskStatus, target: TaskStatus
) -> None:
    """Any target outside the table, including the current status, raises InvalidTransition."""
    timestamps = TaskTimestamps(started_at=T0)
    with pytest.raises(InvalidTransitionException) as exc_info:
        workflow.request_transition(current, timestamps, target, now=T0 + timedelta(hours=1))
    assert exc_info.value.details["from"] == current.value
    assert exc_info.value.details["to"] == target.value
    assert exc_info.value.details["allowed"] == sorted(
        s.value for s in DEFAULT_TRANSITION_TABLE[current]
    )
    # Input untouched.
    assert timestamps == TaskTimestamps(started_at=T0)


@pytest.mark.parametrize("status", list(TaskStatus))
def test_self_transition_is_never_valid(workflow: TaskWorkflow, status: TaskStatus) -> None:
    assert not workflow.can_transition(status, status)
    with pytest.raises(InvalidTransitionException):
        workflow.request_transition(status, TaskTimestamps(), status)


def test_closed_is_terminal(workflow: TaskWorkflow) -> None:
    assert workflow.allowed_targets(TaskStatus.CLOSED) == frozenset()
    for target in TaskStatus:
        with pytest.raises(InvalidTransitionException):
            workflow.request_transition("closed", TaskTimestamps(), target)


def test_unknown_target_is_invalid_transition(workflow: TaskWorkflow) -> None:
    with pytest.raises(InvalidTransitionException) as exc_info:
        workflow.request_transition(TaskStatus.NEW, TaskTimestamps(), "archived")
    assert exc_info.value.details["to"] == "archived"
    assert exc_info.value.details["allowed"] == ["in_progress"]


def test_unknown_current_status_is_validation_error(workflow: TaskWorkflow) -> None:
    with pytest.raises(ValidationException):
        workflow.request_transition("draft", TaskTimestamps(), TaskStatus.IN_PROGRESS)
    assert workflow.allowed_targets("draft") == frozenset()


def test_skipping_states_is_rejected(workflow: TaskWorkflow) -> None:
    """new -> agreement_done is reachable by chaining but not in one step."""
    assert not workflow.can_transition(TaskStatus.NEW, TaskStatus.AGREEMENT_DONE)
    with pytest.raises(InvalidTransitionException):
        workflow.request_transition(TaskStatus.NEW, TaskTimestamps(), TaskStatus.CLOSED)


def test_accepted_transition_returns_status_and_patch(workflow: TaskWorkflow) -> None:
    outcome = workflow.request_transition(
        TaskStatus.NEW, TaskTimestamps(), "in_progress", now=T0
    )
    assert outcome.previous_status is TaskStatus.NEW
    assert outcome.status is TaskStatus.IN_PROGRESS
    assert outcome.timestamps == TaskTimestamps(started_at=T0)
    assert outcome.stamped == ("started_at",)
    assert outcome.changes() == {"status": "in_progress", "started_at": T0}


def test_transition_without_timestamp_patches_status_only(workflow: TaskWorkflow) -> None:
    current = TaskTimestamps(started_at=T0)
    outcome = workflow.request_transition(
        TaskStatus.IN_PROGRESS, current, TaskStatus.WAITING_FOR_REVIEW, now=T0 + timedelta(days=1)
    )
    assert outcome.timestamps == current
    assert outcome.stamped == ()
    assert outcome.changes() == {"status": "waiting_for_review"}


def test_completed_at_is_write_once_across_agreement_excursion(workflow: TaskWorkflow) -> None:
    """completed_at set by agreement_done survives the later review_done."""
    t1, t2, t3, t4 = (T0 + timedelta(days=d) for d in range(1, 5))
    ts = TaskTimestamps()
    status = TaskStatus.NEW
    for target, now in [
        (TaskStatus.IN_PROGRESS, t1),
        (TaskStatus.AGREEMENT_DONE, t2),
        (TaskStatus.WAITING_FOR_REVIEW, t3),
        (TaskStatus.REVIEW_DONE, t4),
    ]:
        outcome = workflow.request_transition(status, ts, target, now=now)
        status, ts = outcome.status, outcome.timestamps
    assert ts.started_at == t1
    assert ts.completed_at == t2
    assert outcome.stamped == ()
    assert "completed_at" not in outcome.changes()


def test_derive_timestamps_never_overwrites() -> None:
    existing = TaskTimestamps(started_at=T0, completed_at=T0, closed_at=T0)
    later = T0 + timedelta(days=3)
    for status in TaskStatus:
        updated, stamped = derive_timestamps(status, existing, later)
        assert updated == existing
        assert stamped == ()


@pytest.mark.parametrize(
    ("status", "field"),
    [
        (TaskStatus.NEW, None),
        (TaskStatus.IN_PROGRESS, "started_at"),
        (TaskStatus.AGREEMENT_DONE, "completed_at"),
        (TaskStatus.WAITING_FOR_REVIEW, None),
        (TaskStatus.REVIEW_DONE, "completed_at"),
        (TaskStatus.CLOSED, "closed_at"),
    ],
)
def test_timestamp_field_for_status(status: TaskStatus, field: str | None) -> None:
    assert timestamp_field_for(status) == field


def test_end_to_end_review_lifecycle(workflow: TaskWorkflow) -> None:
    fields = workflow.admit_creation(TaskType.REVIEW, "C1", "M1")
    assert fields.status is TaskStatus.NEW
    assert fields.timestamps == TaskTimestamps()

    t1, t2, t3, t4 = (T0 + timedelta(hours=h) for h in (1, 2, 3, 4))

    o = workflow.request_transition(fields.status, fields.timestamps, TaskStatus.IN_PROGRESS, now=t1)
    assert o.timestamps == TaskTimestamps(started_at=t1)

    o = workflow.request_transition(o.status, o.timestamps, TaskStatus.WAITING_FOR_REVIEW, now=t2)
    assert o.status is TaskStatus.WAITING_FOR_REVIEW
    assert o.timestamps == TaskTimestamps(started_at=t1)

    o = workflow.request_transition(o.status, o.timestamps, TaskStatus.REVIEW_DONE, now=t3)
    assert o.timestamps == TaskTimestamps(started_at=t1, completed_at=t3)

    o = workflow.request_transition(o.status, o.timestamps, TaskStatus.CLOSED, now=t4)
    assert o.timestamps == TaskTimestamps(started_at=t1, completed_at=t3, closed_at=t4)

    for target in TaskStatus:
        with pytest.raises(InvalidTransitionException):
            workflow.request_transition(o.status, o.timestamps, target, now=t4)


def test_now_defaults_to_current_utc(workflow: TaskWorkflow) -> None:
    before = datetime.now(timezone.utc)
    outcome = workflow.request_transition(TaskStatus.NEW, TaskTimestamps(), TaskStatus.IN_PROGRESS)
    assert outcome.timestamps.started_at is not None
    assert outcome.timestamps.started_at >= before
    assert outcome.timestamps.started_at.tzinfo is not None


# ---- Admission ----


@pytest.mark.parametrize("task_type", [TaskType.AGREEMENT, TaskType.REVIEW])
def test_admission_rejects_constrained_type_with_active_duplicate(
    workflow: TaskWorkflow, task_type: TaskType
) -> None:
    with pytest.raises(DuplicateActiveTaskException) as exc_info:
        workflow.admit_creation(task_type, "C1", "M1", active_duplicates=1)
    assert exc_info.value.details["conflicting_type"] == task_type.value
    assert f"A {task_type.value} task already exists" in exc_info.value.message


def test_admission_accepts_constrained_type_without_duplicates(workflow: TaskWorkflow) -> None:
    fields = workflow.admit_creation("agreement", "C1", "M1", active_duplicates=0)
    assert fields.task_type is TaskType.AGREEMENT
    assert (fields.client_account_id, fields.manager_id) == ("C1", "M1")


def test_new_account_is_never_blocked(workflow: TaskWorkflow) -> None:
    assert not workflow.requires_unique_active(TaskType.NEW_ACCOUNT)
    fields = workflow.admit_creation(TaskType.NEW_ACCOUNT, "C1", "M1", active_duplicates=5)
    assert fields.status is TaskStatus.NEW


def test_admission_unknown_type_is_validation_error(workflow: TaskWorkflow) -> None:
    with pytest.raises(ValidationException) as exc_info:
        workflow.admit_creation("onboarding", "C1", "M1")
    assert exc_info.value.details == {"field": "task_type"}


def test_active_statuses_exclude_only_closed() -> None:
    assert ACTIVE_STATUSES == frozenset(TaskStatus) - {TaskStatus.CLOSED}


# ---- Injected tables ----


def test_alternate_table_can_be_injected() -> None:
    fast_track = build_transition_table(
        {TaskStatus.NEW: [TaskStatus.CLOSED, TaskStatus.NEW]}
    )
    workflow = TaskWorkflow(fast_track)
    # Self-edge dropped, missing statuses are terminal.
    assert workflow.allowed_targets(TaskStatus.NEW) == {TaskStatus.CLOSED}
    assert workflow.allowed_targets(TaskStatus.IN_PROGRESS) == frozenset()
    outcome = workflow.request_transition(TaskStatus.NEW, TaskTimestamps(), TaskStatus.CLOSED, now=T0)
    assert outcome.changes() == {"status": "closed", "closed_at": T0}
    # The default workflow is unaffected.
    assert not TaskWorkflow().can_transition(TaskStatus.NEW, TaskStatus.CLOSED)
