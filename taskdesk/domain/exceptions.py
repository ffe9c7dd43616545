"""Domain exceptions for Taskdesk.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class TaskdeskException(Exception):
    """Base exception for all Taskdesk application errors.

    All custom exceptions inherit from this class so callers can tell a
    rejected operation apart from an unexpected failure. Presentation layer
    maps these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskdeskException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(TaskdeskException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TaskdeskException):
    """Raised when the principal lacks the capability or ownership for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'task', 'client_account').
            action: Optional action that was attempted (e.g. 'update_status').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(TaskdeskException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'manager').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidTransitionException(TaskdeskException):
    """Raised when the requested status is not a permitted next state of the current one.

    Requesting the current status again is rejected the same way.
    """

    def __init__(
        self,
        from_status: str,
        to_status: str,
        allowed: list[str] | None = None,
    ) -> None:
        """Initialize with the rejected edge and the permitted targets.

        Args:
            from_status: Current task status.
            to_status: Requested target status (raw value, may be unknown).
            allowed: Statuses reachable from from_status, for re-prompting.
        """
        super().__init__(
            f"Cannot change task status from '{from_status}' to '{to_status}'",
            "INVALID_TRANSITION",
            {"from": from_status, "to": to_status, "allowed": allowed or []},
        )


class DuplicateActiveTaskException(TaskdeskException):
    """Raised when an active task of the same type already exists for the client/manager pair."""

    def __init__(
        self,
        task_type: str,
        client_account_id: str,
        manager_id: str,
    ) -> None:
        """Initialize with the conflicting triple.

        Args:
            task_type: Conflicting task type (agreement or review).
            client_account_id: Client account of the attempted task.
            manager_id: Manager of the attempted task.
        """
        super().__init__(
            f"A {task_type} task already exists for this client account and manager "
            "combination. Please close the existing task first.",
            "DUPLICATE_ACTIVE_TASK",
            {
                "conflicting_type": task_type,
                "client_account_id": client_account_id,
                "manager_id": manager_id,
            },
        )


class StaleTaskStatusException(TaskdeskException):
    """Raised when a task's status changed between read and conditional update."""

    def __init__(self, task_id: str, expected_status: str) -> None:
        super().__init__(
            "Task status was changed by another request; reload and retry.",
            "STALE_TASK_STATUS",
            {"task_id": task_id, "expected_status": expected_status},
        )


class DuplicateRecordException(TaskdeskException):
    """Raised when a unique constraint rejects a manager profile or user."""

    def __init__(self, message: str, resource_type: str) -> None:
        super().__init__(message, "DUPLICATE_RECORD", {"resource_type": resource_type})


class StoreUnavailableException(TaskdeskException):
    """Raised when the record store is not configured or cannot serve the operation."""

    def __init__(
        self,
        message: str = "The record store is unavailable.",
        reason: str | None = None,
    ) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__(message, "STORE_UNAVAILABLE", details)
