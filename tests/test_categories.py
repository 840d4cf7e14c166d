# tests/test_categories.py

from __future__ import annotations

from remedy_desk.tasks.categories import CATEGORY_LABELS, CategoryIndex, build_category_index
from remedy_desk.tasks.task_registry import TaskRegistry


def test_category_index_counts_seed(registry: TaskRegistry) -> None:
    summaries = CategoryIndex(registry).summaries()
    assert [(s.key, s.count) for s in summaries] == [
        ("all", 5),
        ("phone", 1),
        ("address", 1),
        ("contract", 1),
        ("certificate", 1),
        ("call", 1),
    ]
    assert all(s.label == CATEGORY_LABELS[s.key] for s in summaries)


def test_category_index_empty() -> None:
    summaries = build_category_index([])
    assert all(s.count == 0 for s in summaries)
    assert summaries[0].key == "all"


def test_category_count_lookup(registry: TaskRegistry) -> None:
    index = CategoryIndex(registry)
    assert index.count("all") == 5
    assert index.count("contract") == 1
    assert index.count("nope") == 0
