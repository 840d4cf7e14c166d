# src/remedy_desk/core/errors.py

"""
Domain errors.

Every error carries a human-readable message, a machine-readable code and a
details dict, so connectors can render or log them without knowing the type.
"""

from __future__ import annotations

from typing import Any


class RemedyDeskError(Exception):
    """Base class for all task-lifecycle errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class TaskNotFoundError(RemedyDeskError):
    """Raised when a task id is not present in the registry."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found", "NOT_FOUND", {"task_id": task_id})


class NotAutoProcessableError(RemedyDeskError):
    """Raised when automated processing is requested for a manual-only task."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(
            f"Task {task_id} is not eligible for automated processing",
            "NOT_AUTO_PROCESSABLE",
            {"task_id": task_id},
        )


class SessionAlreadyActiveError(RemedyDeskError):
    """Raised when a workflow is opened while another one is still active."""

    def __init__(self, active: Any) -> None:
        self.active = active
        task_id = getattr(getattr(active, "task", None), "id", None)
        super().__init__(
            f"A workflow session is already active (task {task_id})",
            "SESSION_ALREADY_ACTIVE",
            {"task_id": task_id, "kind": getattr(active, "kind", None)},
        )


class NoActiveSessionError(RemedyDeskError):
    """Raised when cancel/confirm/complete finds no matching session."""

    def __init__(self, expected: str | None = None) -> None:
        self.expected = expected
        what = f"{expected} session" if expected else "session"
        super().__init__(f"No active {what}", "NO_ACTIVE_SESSION", {"expected": expected})


class EmptyRegistryError(RemedyDeskError):
    """Raised when overall progress is requested for zero tasks."""

    def __init__(self) -> None:
        super().__init__("Cannot aggregate progress over an empty task set", "EMPTY_REGISTRY")


class InvalidStatusError(RemedyDeskError):
    """Raised when aggregation meets a status outside the closed set."""

    def __init__(self, task_id: int, status: Any) -> None:
        self.task_id = task_id
        self.status = status
        super().__init__(
            f"Task {task_id} has invalid status {status!r}",
            "INVALID_STATUS",
            {"task_id": task_id, "status": str(status)},
        )
