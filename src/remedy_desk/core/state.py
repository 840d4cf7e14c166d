# src/remedy_desk/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.categories import CategoryIndex
from ..tasks.progress import ProgressAggregator
from ..tasks.result_merge import ResultMergeEngine
from ..tasks.task_registry import TaskRegistry
from .ports import AutomatedAgent, ReassignmentHook
from .session import WorkflowSessionController


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    registry: TaskRegistry
    merge_engine: ResultMergeEngine
    sessions: WorkflowSessionController
    categories: CategoryIndex
    progress: ProgressAggregator

    agent: AutomatedAgent
    reassignment: ReassignmentHook
