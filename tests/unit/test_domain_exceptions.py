"""Tests for domain exceptions (error_code, message, details) and their HTTP status."""

import pytest

from taskdesk.core.exception_handlers import status_for_error_code
from taskdesk.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DuplicateActiveTaskException,
    DuplicateRecordException,
    InvalidTransitionException,
    ResourceNotFoundException,
    StaleTaskStatusException,
    StoreUnavailableException,
    TaskdeskException,
    ValidationException,
)


def test_taskdesk_exception_default_error_code() -> None:
    """Base TaskdeskException uses class name as error_code when not provided."""
    exc = TaskdeskException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "TaskdeskException"
    assert exc.details == {}
    assert exc.to_dict() == {
        "error": "TaskdeskException",
        "message": "Something failed",
        "details": {},
    }


def test_validation_exception_field() -> None:
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}
    assert ValidationException("Bad").details == {}


def test_authorization_exception_resource_and_action() -> None:
    exc = AuthorizationException(resource="task", action="update_status")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: update_status on task"
    assert exc.details == {"resource": "task", "action": "update_status"}
    assert AuthorizationException(message="Manager profile not found").message == (
        "Manager profile not found"
    )


def test_invalid_transition_details() -> None:
    exc = InvalidTransitionException("new", "closed", ["in_progress"])
    assert exc.error_code == "INVALID_TRANSITION"
    assert exc.message == "Cannot change task status from 'new' to 'closed'"
    assert exc.details == {"from": "new", "to": "closed", "allowed": ["in_progress"]}


def test_duplicate_active_task_message_names_type() -> None:
    exc = DuplicateActiveTaskException("review", "C1", "M1")
    assert exc.message == (
        "A review task already exists for this client account and manager "
        "combination. Please close the existing task first."
    )
    assert exc.details["conflicting_type"] == "review"


def test_store_unavailable_reason() -> None:
    exc = StoreUnavailableException(reason="database_not_configured")
    assert exc.error_code == "STORE_UNAVAILABLE"
    assert exc.details == {"reason": "database_not_configured"}


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ValidationException("x"), 400),
        (AuthenticationException(), 401),
        (AuthorizationException(), 403),
        (ResourceNotFoundException("task", "t1"), 404),
        (InvalidTransitionException("new", "closed"), 409),
        (DuplicateActiveTaskException("agreement", "C1", "M1"), 409),
        (StaleTaskStatusException("t1", "new"), 409),
        (DuplicateRecordException("dup", "manager"), 409),
        (StoreUnavailableException(), 503),
        (TaskdeskException("other"), 400),
    ],
)
def test_error_code_http_status(exc: TaskdeskException, status: int) -> None:
    assert status_for_error_code(exc.error_code) == status
