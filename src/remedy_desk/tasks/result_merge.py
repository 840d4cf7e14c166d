# src/remedy_desk/tasks/result_merge.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .task_models import Task, TaskStatus
from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)

RESOLVED = "resolved"
DEFAULT_AGENT_LABEL = "AI Agent"


class ResultMergeEngine:
    """
    The only writer of task lifecycle fields.

    Manual confirmation:
    - always stores the payload in confirmation_data
    - status "resolved" -> completed / 100%; anything else keeps status and progress

    Automated processing:
    - always completes the task (no partial automated path)
    - assignee becomes the agent label, payload goes to ai_result
    """

    def __init__(self, registry: TaskRegistry, *, agent_label: str = DEFAULT_AGENT_LABEL) -> None:
        self._registry = registry
        self.agent_label = agent_label

    def merge_confirmation(self, task_id: int, result: Mapping[str, Any]) -> Task:
        payload = dict(result or {})
        mutation: dict[str, Any] = {"confirmation_data": payload}

        resolved = payload.get("status") == RESOLVED
        if resolved:
            mutation["status"] = TaskStatus.COMPLETED
            mutation["progress"] = 100

        task = self._registry.update(task_id, mutation)
        logger.info(
            "Manual result merged task_id=%s result_status=%s -> status=%s progress=%s",
            task_id,
            payload.get("status"),
            task.status.value,
            task.progress,
        )
        return task

    def merge_automated(self, task_id: int, result: Mapping[str, Any]) -> Task:
        task = self._registry.update(
            task_id,
            {
                "status": TaskStatus.COMPLETED,
                "progress": 100,
                "assignee": self.agent_label,
                "ai_result": dict(result or {}),
            },
        )
        logger.info("Automated result merged task_id=%s assignee=%s", task_id, self.agent_label)
        return task
