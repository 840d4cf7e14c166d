# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from remedy_desk.cli.bootstrap import create_initial_state
from remedy_desk.core.state import AppState
from remedy_desk.tasks.result_merge import ResultMergeEngine
from remedy_desk.tasks.seed import seed_registry
from remedy_desk.tasks.task_registry import TaskRegistry

from .fakes import AGENT_LABEL, FakeAgent, RecordingReassignment


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="remedy-desk-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        log_file=tmp_path / "data" / "remedy_desk.log",
        seed_enabled=True,
        agent_label=AGENT_LABEL,
        agent_delay_seconds=0.0,
    )


@pytest.fixture()
def registry() -> TaskRegistry:
    return seed_registry()


@pytest.fixture()
def merge_engine(registry: TaskRegistry) -> ResultMergeEngine:
    return ResultMergeEngine(registry, agent_label=AGENT_LABEL)


@pytest.fixture()
def state(settings: SimpleNamespace, registry: TaskRegistry) -> AppState:
    """
    AppState wired with deterministic fakes.

    NOTE: the registry, merge engine and session controller are the real ones,
    their behavior is what we want to test; only the agent and the reassignment hook are faked.
    """
    st = create_initial_state(settings=settings, registry=registry)
    st.agent = FakeAgent({"auto_resolved": 1200, "accuracy": 97})
    st.reassignment = RecordingReassignment()
    return st
