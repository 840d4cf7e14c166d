# src/remedy_desk/tasks/categories.py

from __future__ import annotations

from collections.abc import Iterable

from .task_models import ALL_CATEGORIES, CategorySummary, Task, TaskCategory
from .task_registry import TaskRegistry

CATEGORY_LABELS: dict[str, str] = {
    ALL_CATEGORIES: "All",
    TaskCategory.PHONE: "Phone",
    TaskCategory.ADDRESS: "Address",
    TaskCategory.CONTRACT: "Contract",
    TaskCategory.CERTIFICATE: "Certificate",
    TaskCategory.CALL: "Outbound call",
}


def build_category_index(tasks: Iterable[Task]) -> list[CategorySummary]:
    """
    Summaries for "all" followed by every known category, in enum order.

    "all" counts every task; unknown categories get no row of their own.
    """
    items = list(tasks)
    out = [CategorySummary(key=ALL_CATEGORIES, label=CATEGORY_LABELS[ALL_CATEGORIES], count=len(items))]
    for category in TaskCategory:
        count = sum(1 for t in items if t.category == category)
        out.append(CategorySummary(key=category.value, label=CATEGORY_LABELS[category], count=count))
    return out


class CategoryIndex:
    """Live view of category counts over a registry."""

    def __init__(self, registry: TaskRegistry) -> None:
        self._registry = registry

    def summaries(self) -> list[CategorySummary]:
        with self._registry.snapshot() as tasks:
            return build_category_index(tasks)

    def count(self, key: str) -> int:
        for s in self.summaries():
            if s.key == key:
                return s.count
        return 0
