# src/remedy_desk/tasks/task_actions.py

from __future__ import annotations

from enum import StrEnum

from .result_summary import extract_summary
from .task_models import Task, TaskPriority, TaskStatus

STATUS_LABELS: dict[str, str] = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.COMPLETED: "Completed",
}

PRIORITY_LABELS: dict[str, str] = {
    TaskPriority.HIGH: "High",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.LOW: "Low",
}


class TaskAction(StrEnum):
    MANUAL = "manual"
    AUTOMATED = "automated"
    VIEW = "view"


def status_label(status: object) -> str:
    # Unknown values render like pending.
    return STATUS_LABELS.get(str(status), STATUS_LABELS[TaskStatus.PENDING])


def priority_label(priority: object) -> str:
    return PRIORITY_LABELS.get(str(priority), PRIORITY_LABELS[TaskPriority.MEDIUM])


def is_ai_processed(task: Task) -> bool:
    return task.ai_result is not None


def available_actions(task: Task) -> list[TaskAction]:
    """
    Workflows offered for a task in the list view.

    Open tasks: manual handling, plus automated processing when the task allows it.
    Completed tasks: view only (reopens a manual session for re-confirmation).
    """
    if task.is_completed:
        return [TaskAction.VIEW]
    actions = [TaskAction.MANUAL]
    if task.auto_processable:
        actions.append(TaskAction.AUTOMATED)
    return actions


def format_task_line(task: Task) -> str:
    flags = []
    if task.auto_processable:
        flags.append("auto")
    if is_ai_processed(task):
        flags.append("ai-done")
    flag_str = f" [{', '.join(flags)}]" if flags else ""

    line = (
        f"#{task.id} {task.title}{flag_str}\n"
        f"    {status_label(task.status)} | {priority_label(task.priority)} priority | "
        f"{task.progress}% | {task.assignee} | due {task.deadline.isoformat()}\n"
        f"    actions: {', '.join(a.value for a in available_actions(task))}"
    )

    if task.ai_result is not None:
        s = extract_summary(task.ai_result)
        line += (
            f"\n    ai result: resolved={s.resolved_count} accuracy={s.accuracy_pct}% "
            f"time={s.processing_time}"
        )
    return line
