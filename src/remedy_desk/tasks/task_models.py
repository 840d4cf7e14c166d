# src/remedy_desk/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Only the result merge layer moves a task between these values.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def is_valid(cls, raw: object) -> bool:
        try:
            cls(raw)
        except ValueError:
            return False
        return True


class TaskCategory(StrEnum):
    PHONE = "phone"
    ADDRESS = "address"
    CONTRACT = "contract"
    CERTIFICATE = "certificate"
    CALL = "call"


class TaskPriority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Pseudo-category used by filters and the category index.
ALL_CATEGORIES = "all"

# Fields a merge is allowed to write; everything else is fixed at creation.
MUTABLE_FIELDS = frozenset({"status", "progress", "assignee", "ai_result", "confirmation_data"})


@dataclass(frozen=True, slots=True)
class Task:
    """
    A unit of remediation work.

    Instances are immutable: the registry swaps in a new instance on every
    update, so a reader holding a Task never sees a half-applied mutation.
    """

    id: int
    title: str
    description: str
    category: TaskCategory
    priority: TaskPriority
    status: TaskStatus
    progress: int
    assignee: str
    deadline: date
    auto_processable: bool

    # read-only views; the registry freezes payloads on write
    ai_result: Mapping[str, Any] | None = None
    confirmation_data: Mapping[str, Any] | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


@dataclass(frozen=True, slots=True)
class CategorySummary:
    key: str
    label: str
    count: int


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    overall_progress: int
    completed_count: int
    in_progress_count: int
    pending_count: int
    total: int


@dataclass(frozen=True, slots=True)
class ResultSummary:
    """Uniform view over differently-shaped automated result payloads."""

    resolved_count: Any
    accuracy_pct: Any
    processing_time: Any
