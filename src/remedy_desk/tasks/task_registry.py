# src/remedy_desk/tasks/task_registry.py

from __future__ import annotations

import contextlib
import dataclasses
import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from ..core.errors import TaskNotFoundError
from .task_models import ALL_CATEGORIES, MUTABLE_FIELDS, Task, TaskStatus

logger = logging.getLogger(__name__)

PAYLOAD_FIELDS = ("ai_result", "confirmation_data")


def freeze_payload(value: Any) -> Any:
    """Read-only copy of a result payload: nested mappings become mappingproxy, sequences become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze_payload(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_payload(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(value)
    return value


class TaskRegistry:
    """
    In-memory authoritative task collection.

    Ordering:
    - tasks keep the order they were registered in (dict insertion order)

    Payloads:
    - ai_result / confirmation_data are stored as frozen copies, so readers cannot edit them in place

    Thread-safety:
    - one re-entrant lock guards every update and every read scan
    - Task objects are frozen; update() swaps in a new instance under the lock
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._lock = threading.RLock()
        self._tasks: dict[int, Task] = {}
        for task in tasks:
            if task.id in self._tasks:
                raise ValueError(f"duplicate task id: {task.id}")
            self._tasks[task.id] = self._freeze_task(task)
        logger.info("TaskRegistry ready total=%s", len(self._tasks))

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    @contextlib.contextmanager
    def snapshot(self) -> Iterator[list[Task]]:
        """
        Hold the lock for a multi-step read (aggregate scans).

        Yields the current task list; updates from other threads wait until the block exits.
        """
        with self._lock:
            yield list(self._tasks.values())

    # ---- low-level helpers ----

    @staticmethod
    def _check_mutation(mutation: Mapping[str, Any]) -> dict[str, Any]:
        fields = dict(mutation)

        bad = sorted(set(fields) - MUTABLE_FIELDS)
        if bad:
            raise ValueError(f"fields are not mutable: {', '.join(bad)}")

        if "status" in fields:
            fields["status"] = TaskStatus(fields["status"])

        if "progress" in fields:
            progress = fields["progress"]
            if isinstance(progress, bool) or not isinstance(progress, int):
                raise ValueError(f"progress must be an integer, got {progress!r}")
            if not 0 <= progress <= 100:
                raise ValueError(f"progress must be within 0..100, got {progress}")

        for name in PAYLOAD_FIELDS:
            if fields.get(name) is not None:
                fields[name] = freeze_payload(fields[name])

        return fields

    @staticmethod
    def _freeze_task(task: Task) -> Task:
        frozen = {
            name: freeze_payload(getattr(task, name))
            for name in PAYLOAD_FIELDS
            if getattr(task, name) is not None
        }
        return dataclasses.replace(task, **frozen) if frozen else task

    # ---- public API ----

    def get_all(self) -> list[Task]:
        with self._lock:
            return list(self._tasks.values())

    def get_by_id(self, task_id: int) -> Task:
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def filter_by_category(self, key: str) -> list[Task]:
        """
        "all" returns every task; any other key is an exact match on category.
        Order follows registration order in both cases.
        """
        with self._lock:
            tasks = list(self._tasks.values())
        if key == ALL_CATEGORIES:
            return tasks
        return [t for t in tasks if t.category == key]

    def update(self, task_id: int, mutation: Mapping[str, Any]) -> Task:
        """
        Apply a partial field mutation atomically and return the new Task.

        Only status/progress/assignee/ai_result/confirmation_data may change.
        """
        fields = self._check_mutation(mutation)

        with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                raise TaskNotFoundError(task_id)
            updated = dataclasses.replace(current, **fields)
            self._tasks[task_id] = updated

        logger.debug("Task updated id=%s fields=%s", task_id, sorted(fields))
        return updated
