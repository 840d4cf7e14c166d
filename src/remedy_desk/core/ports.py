# src/remedy_desk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the automated agent and the assignment backend swappable and makes testing easier.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

ResultPayload = Mapping[str, Any]
# Loosely-typed result record: {"auto_resolved": 1200, "accuracy": 97, ...} or {"status": "resolved", ...}.


class AutomatedAgent(Protocol):
    """
    Agent-side port: processes one task and returns its result payload.

    It receives only the task id and category; the payload shape depends on the category.
    """

    async def process(self, task_id: int, category: str) -> dict[str, Any]: ...


class ManualResolver(Protocol):
    """Human-driven detail workflow: gets the full task, returns a result with at least "status"."""

    def resolve(self, task: Task) -> ResultPayload: ...


class ReassignmentHook(Protocol):
    """Trigger for redistributing work between operators and agents."""

    def request_reassignment(self, tasks: Sequence[Task]) -> None: ...


class NoopReassignment:
    """Reassignment is not implemented; the trigger is only logged."""

    def request_reassignment(self, tasks: Sequence[Task]) -> None:
        logger.info("Reassignment requested for %d tasks (no-op)", len(tasks))
