# tests/test_session.py

from __future__ import annotations

import asyncio
import threading

import pytest

from remedy_desk.core.errors import (
    NoActiveSessionError,
    NotAutoProcessableError,
    SessionAlreadyActiveError,
    TaskNotFoundError,
)
from remedy_desk.core.session import AutomatedSession, Idle, ManualSession, WorkflowSessionController
from remedy_desk.tasks.result_merge import ResultMergeEngine
from remedy_desk.tasks.task_models import TaskStatus
from remedy_desk.tasks.task_registry import TaskRegistry

from .fakes import AGENT_LABEL, FakeAgent, FakeResolver


@pytest.fixture()
def controller(registry: TaskRegistry, merge_engine: ResultMergeEngine) -> WorkflowSessionController:
    return WorkflowSessionController(registry, merge_engine)


def test_starts_idle(controller: WorkflowSessionController) -> None:
    assert controller.is_idle
    assert isinstance(controller.active, Idle)


def test_open_manual_allowed_for_completed_task(controller: WorkflowSessionController) -> None:
    session = controller.open_manual(2)
    assert isinstance(session, ManualSession)
    assert session.task.status is TaskStatus.COMPLETED
    assert controller.active == session


def test_manual_confirm_merges_and_returns_to_idle(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    controller.open_manual(3)
    task = controller.confirm({"status": "resolved"})

    assert controller.is_idle
    assert task.status is TaskStatus.COMPLETED
    assert registry.get_by_id(3).progress == 100


def test_manual_cancel_leaves_task_untouched(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    before = registry.get_by_id(1)
    controller.open_manual(1)
    discarded = controller.cancel()

    assert isinstance(discarded, ManualSession)
    assert controller.is_idle
    assert registry.get_by_id(1) == before


def test_open_automated_exposes_id_and_category(controller: WorkflowSessionController) -> None:
    session = controller.open_automated(5)
    assert isinstance(session, AutomatedSession)
    assert session.task_id == 5
    assert session.category == "call"


def test_open_automated_rejects_manual_only_task(controller: WorkflowSessionController) -> None:
    with pytest.raises(NotAutoProcessableError) as exc:
        controller.open_automated(3)
    assert exc.value.task_id == 3
    assert controller.is_idle


def test_automated_complete_merges(controller: WorkflowSessionController, registry: TaskRegistry) -> None:
    controller.open_automated(4)
    task = controller.complete({"auto_verified": 134, "accuracy": 99})

    assert controller.is_idle
    assert task.status is TaskStatus.COMPLETED
    assert task.assignee == AGENT_LABEL
    assert registry.get_by_id(4).ai_result == {"auto_verified": 134, "accuracy": 99}


def test_automated_cancel_leaves_task_untouched(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    before = registry.get_by_id(4)
    controller.open_automated(4)
    controller.cancel()
    assert controller.is_idle
    assert registry.get_by_id(4) == before


@pytest.mark.parametrize("second_open", ["manual", "automated"])
def test_second_open_fails_and_keeps_existing_session(
    controller: WorkflowSessionController, second_open: str
) -> None:
    existing = controller.open_manual(1)

    with pytest.raises(SessionAlreadyActiveError):
        if second_open == "manual":
            controller.open_manual(2)
        else:
            controller.open_automated(4)

    assert controller.active == existing


def test_open_unknown_task_stays_idle(controller: WorkflowSessionController) -> None:
    with pytest.raises(TaskNotFoundError):
        controller.open_manual(99)
    with pytest.raises(TaskNotFoundError):
        controller.open_automated(99)
    assert controller.is_idle


def test_cancel_confirm_complete_without_session(controller: WorkflowSessionController) -> None:
    with pytest.raises(NoActiveSessionError):
        controller.cancel()
    with pytest.raises(NoActiveSessionError):
        controller.confirm({"status": "resolved"})
    with pytest.raises(NoActiveSessionError):
        controller.complete({})


def test_confirm_on_automated_session_is_rejected(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    session = controller.open_automated(1)
    with pytest.raises(NoActiveSessionError):
        controller.confirm({"status": "resolved"})
    assert controller.active == session
    assert registry.get_by_id(1).confirmation_data is None


def test_run_manual_hands_full_task_to_resolver(controller: WorkflowSessionController) -> None:
    resolver = FakeResolver({"status": "resolved", "note": "fixed"})
    task = controller.run_manual(1, resolver)

    assert resolver.seen[0].id == 1
    assert resolver.seen[0].title
    assert task.status is TaskStatus.COMPLETED
    assert task.confirmation_data == {"status": "resolved", "note": "fixed"}
    assert controller.is_idle


def test_run_manual_resolver_failure_cancels(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    class Boom:
        def resolve(self, task):
            raise RuntimeError("operator closed the form")

    before = registry.get_by_id(1)
    with pytest.raises(RuntimeError):
        controller.run_manual(1, Boom())
    assert controller.is_idle
    assert registry.get_by_id(1) == before


@pytest.mark.asyncio
async def test_run_automated_awaits_agent_and_completes(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    agent = FakeAgent({"auto_completed": 50, "completion_rate": 88, "processing_time": "2m"})
    task = await controller.run_automated(2, agent)

    assert agent.calls == [(2, "address")]
    assert task.status is TaskStatus.COMPLETED
    assert task.progress == 100
    assert registry.get_by_id(2).ai_result == agent.payload
    assert controller.is_idle


@pytest.mark.asyncio
async def test_run_automated_rejects_manual_only_task(controller: WorkflowSessionController) -> None:
    agent = FakeAgent()
    with pytest.raises(NotAutoProcessableError):
        await controller.run_automated(3, agent)
    assert agent.calls == []
    assert controller.is_idle


@pytest.mark.asyncio
async def test_run_automated_agent_failure_cancels_session(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    before = registry.get_by_id(1)
    agent = FakeAgent(error=RuntimeError("agent down"))

    with pytest.raises(RuntimeError):
        await controller.run_automated(1, agent)

    assert controller.is_idle
    assert registry.get_by_id(1) == before


@pytest.mark.asyncio
async def test_run_automated_cancellation_has_no_effect(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    before = registry.get_by_id(5)
    agent = FakeAgent(block=True)

    runner = asyncio.create_task(controller.run_automated(5, agent))
    await asyncio.wait_for(agent.started.wait(), timeout=1.0)
    assert isinstance(controller.active, AutomatedSession)

    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert controller.is_idle
    assert registry.get_by_id(5) == before


@pytest.mark.asyncio
async def test_run_automated_drops_result_after_external_cancel(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    before = registry.get_by_id(5)
    gate = asyncio.Event()
    agent = FakeAgent({"auto_resolved": 10, "accuracy": 90}, gate=gate)

    runner = asyncio.create_task(controller.run_automated(5, agent))
    await asyncio.wait_for(agent.started.wait(), timeout=1.0)
    controller.cancel()
    gate.set()

    assert await runner is None
    assert controller.is_idle
    assert registry.get_by_id(5) == before


@pytest.mark.asyncio
async def test_late_agent_result_does_not_touch_newer_session(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    before_old = registry.get_by_id(1)
    before_new = registry.get_by_id(4)
    gate = asyncio.Event()
    agent = FakeAgent({"auto_resolved": 10, "accuracy": 90}, gate=gate)

    runner = asyncio.create_task(controller.run_automated(1, agent))
    await asyncio.wait_for(agent.started.wait(), timeout=1.0)
    controller.cancel()
    newer = controller.open_automated(4)
    gate.set()

    assert await runner is None
    assert controller.active is newer
    assert registry.get_by_id(1) == before_old
    assert registry.get_by_id(4) == before_new


@pytest.mark.asyncio
async def test_failing_agent_does_not_cancel_newer_session(
    controller: WorkflowSessionController,
) -> None:
    gate = asyncio.Event()
    agent = FakeAgent(error=RuntimeError("agent down"), gate=gate)

    runner = asyncio.create_task(controller.run_automated(1, agent))
    await asyncio.wait_for(agent.started.wait(), timeout=1.0)
    controller.cancel()
    newer = controller.open_manual(2)
    gate.set()

    with pytest.raises(RuntimeError):
        await runner
    assert controller.active is newer


def test_run_manual_drops_result_when_session_replaced(
    controller: WorkflowSessionController, registry: TaskRegistry
) -> None:
    before = registry.get_by_id(1)
    holder: dict[str, ManualSession] = {}

    class ReplacingResolver:
        def resolve(self, task):
            controller.cancel()
            holder["newer"] = controller.open_manual(3)
            return {"status": "resolved"}

    assert controller.run_manual(1, ReplacingResolver()) is None
    assert controller.active is holder["newer"]
    assert registry.get_by_id(1) == before


def test_concurrent_opens_admit_exactly_one(controller: WorkflowSessionController) -> None:
    workers = 8
    barrier = threading.Barrier(workers)
    opened: list[ManualSession] = []
    rejected: list[SessionAlreadyActiveError] = []
    guard = threading.Lock()

    def attempt(task_id: int) -> None:
        barrier.wait()
        try:
            session = controller.open_manual(task_id)
        except SessionAlreadyActiveError as e:
            with guard:
                rejected.append(e)
        else:
            with guard:
                opened.append(session)

    threads = [threading.Thread(target=attempt, args=(i % 5 + 1,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5.0)

    assert len(opened) == 1
    assert len(rejected) == workers - 1
    assert controller.active is opened[0]
