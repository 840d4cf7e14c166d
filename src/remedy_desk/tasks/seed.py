# src/remedy_desk/tasks/seed.py

from __future__ import annotations

from datetime import date

from .task_models import Task, TaskCategory, TaskPriority, TaskStatus
from .task_registry import TaskRegistry


def default_seed_tasks() -> list[Task]:
    """Fixed starting task set; returns fresh instances on every call."""
    return [
        Task(
            id=1,
            title="Phone number anomaly check",
            description="Detect and fix 1,247 anomalous phone numbers",
            category=TaskCategory.PHONE,
            priority=TaskPriority.HIGH,
            status=TaskStatus.IN_PROGRESS,
            progress=75,
            assignee="Grid Operator 001",
            deadline=date(2024, 1, 15),
            auto_processable=True,
        ),
        Task(
            id=2,
            title="Address completion",
            description="Complete 2,156 incomplete address records",
            category=TaskCategory.ADDRESS,
            priority=TaskPriority.MEDIUM,
            status=TaskStatus.COMPLETED,
            progress=100,
            assignee="AI Agent",
            deadline=date(2024, 1, 14),
            auto_processable=True,
        ),
        Task(
            id=3,
            title="Contract consistency check",
            description="Verify consistency of 867 contract records",
            category=TaskCategory.CONTRACT,
            priority=TaskPriority.HIGH,
            status=TaskStatus.PENDING,
            progress=0,
            assignee="Grid Operator 005",
            deadline=date(2024, 1, 16),
            auto_processable=False,
        ),
        Task(
            id=4,
            title="Certificate expiry check",
            description="Check validity of 134 certificates",
            category=TaskCategory.CERTIFICATE,
            priority=TaskPriority.LOW,
            status=TaskStatus.IN_PROGRESS,
            progress=60,
            assignee="AI Agent",
            deadline=date(2024, 1, 17),
            auto_processable=True,
        ),
        Task(
            id=5,
            title="Outbound call verification",
            description="Verify 3,421 phone numbers by outbound call",
            category=TaskCategory.CALL,
            priority=TaskPriority.MEDIUM,
            status=TaskStatus.IN_PROGRESS,
            progress=45,
            assignee="AI Outbound Call System",
            deadline=date(2024, 1, 15),
            auto_processable=True,
        ),
    ]


def seed_registry() -> TaskRegistry:
    return TaskRegistry(default_seed_tasks())
