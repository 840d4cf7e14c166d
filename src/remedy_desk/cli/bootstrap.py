# src/remedy_desk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires concrete implementations into AppState (registry/merge/sessions/agent).
"""

from __future__ import annotations

import logging

from ..agents.offline import OfflineAutomatedAgent
from ..config import get_settings
from ..core.ports import NoopReassignment
from ..core.session import WorkflowSessionController
from ..core.state import AppState
from ..tasks.categories import CategoryIndex
from ..tasks.progress import ProgressAggregator
from ..tasks.result_merge import DEFAULT_AGENT_LABEL, ResultMergeEngine
from ..tasks.seed import default_seed_tasks
from ..tasks.task_registry import TaskRegistry

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, registry: TaskRegistry | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    data_dir = getattr(settings, "data_dir", None)
    if data_dir is not None:
        data_dir.mkdir(parents=True, exist_ok=True)

    if registry is None:
        seed = default_seed_tasks() if getattr(settings, "seed_enabled", True) else []
        registry = TaskRegistry(seed)

    merge_engine = ResultMergeEngine(
        registry,
        agent_label=str(getattr(settings, "agent_label", DEFAULT_AGENT_LABEL)),
    )

    state = AppState(
        settings=settings,
        registry=registry,
        merge_engine=merge_engine,
        sessions=WorkflowSessionController(registry, merge_engine),
        categories=CategoryIndex(registry),
        progress=ProgressAggregator(registry),
        agent=OfflineAutomatedAgent(delay_seconds=float(getattr(settings, "agent_delay_seconds", 0.0))),
        reassignment=NoopReassignment(),
    )
    logger.debug("AppState created tasks=%d", len(registry))
    return state
