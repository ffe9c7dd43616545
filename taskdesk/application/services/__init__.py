"""Application services."""

from taskdesk.application.services.task_admission import TaskAdmissionService

__all__ = ["TaskAdmissionService"]
