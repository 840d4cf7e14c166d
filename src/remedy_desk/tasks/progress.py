# src/remedy_desk/tasks/progress.py

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from ..core.errors import EmptyRegistryError, InvalidStatusError
from .task_models import ProgressSnapshot, Task, TaskStatus
from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    # Progress values are non-negative, so floor(x + 0.5) is plain half-up rounding.
    return int(math.floor(value + 0.5))


def overall_progress(tasks: Sequence[Task]) -> int:
    """
    Mean task progress rounded to the nearest integer.

    Raises EmptyRegistryError for an empty sequence.
    """
    if not tasks:
        raise EmptyRegistryError()
    return _round_half_up(sum(t.progress for t in tasks) / len(tasks))


def status_counts(tasks: Iterable[Task]) -> dict[TaskStatus, int]:
    """
    Number of tasks per status.

    A status outside TaskStatus is a data-integrity fault and raises InvalidStatusError.
    """
    counts = {s: 0 for s in TaskStatus}
    for t in tasks:
        if not TaskStatus.is_valid(t.status):
            logger.error("Invalid status task_id=%s status=%r", t.id, t.status)
            raise InvalidStatusError(t.id, t.status)
        counts[TaskStatus(t.status)] += 1
    return counts


class ProgressAggregator:
    def __init__(self, registry: TaskRegistry) -> None:
        self._registry = registry

    def overall_progress(self) -> int:
        return overall_progress(self._registry.get_all())

    def snapshot(self) -> ProgressSnapshot:
        """Overall progress and per-status counts from one consistent scan."""
        with self._registry.snapshot() as tasks:
            overall = overall_progress(tasks)
            counts = status_counts(tasks)
        return ProgressSnapshot(
            overall_progress=overall,
            completed_count=counts[TaskStatus.COMPLETED],
            in_progress_count=counts[TaskStatus.IN_PROGRESS],
            pending_count=counts[TaskStatus.PENDING],
            total=len(tasks),
        )
