# src/remedy_desk/core/session.py

"""
Workflow session controller.

At most one resolution workflow is active system-wide:

    Idle --open_manual(task)-->    ManualSession(task)    --confirm(result)/cancel--> Idle
    Idle --open_automated(task)--> AutomatedSession(task) --complete(result)/cancel--> Idle

Key invariants:
- the active slot is checked-and-set under one lock, so two callers can never both open a session,
- cancel never touches task state; only confirm/complete reach the merge engine,
- the slot is released even when the merge fails (the error still propagates).
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Literal

from ..tasks.result_merge import ResultMergeEngine
from ..tasks.task_models import Task
from ..tasks.task_registry import TaskRegistry
from .errors import NoActiveSessionError, NotAutoProcessableError, SessionAlreadyActiveError
from .ports import AutomatedAgent, ManualResolver, ResultPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Idle:
    kind: Literal["idle"] = "idle"


@dataclass(frozen=True, slots=True)
class ManualSession:
    task: Task
    kind: Literal["manual"] = "manual"


@dataclass(frozen=True, slots=True)
class AutomatedSession:
    task: Task
    kind: Literal["automated"] = "automated"

    @property
    def task_id(self) -> int:
        return self.task.id

    @property
    def category(self) -> str:
        return self.task.category.value


Session = Idle | ManualSession | AutomatedSession

IDLE = Idle()


class WorkflowSessionController:
    def __init__(self, registry: TaskRegistry, merge_engine: ResultMergeEngine) -> None:
        self._registry = registry
        self._merge = merge_engine
        self._lock = threading.Lock()
        self._active: Session = IDLE

    @property
    def active(self) -> Session:
        return self._active

    @property
    def is_idle(self) -> bool:
        return isinstance(self._active, Idle)

    # ---- opening ----

    def open_manual(self, task_id: int) -> ManualSession:
        """Any task may be opened manually, completed ones included (view / re-confirm)."""
        with self._lock:
            self._ensure_idle()
            task = self._registry.get_by_id(task_id)
            session = ManualSession(task=task)
            self._active = session
        logger.info("Manual session opened task_id=%s", task_id)
        return session

    def open_automated(self, task_id: int) -> AutomatedSession:
        with self._lock:
            self._ensure_idle()
            task = self._registry.get_by_id(task_id)
            if not task.auto_processable:
                logger.warning("Automated session rejected task_id=%s (not auto-processable)", task_id)
                raise NotAutoProcessableError(task_id)
            session = AutomatedSession(task=task)
            self._active = session
        logger.info("Automated session opened task_id=%s category=%s", task_id, session.category)
        return session

    def _ensure_idle(self) -> None:
        if not isinstance(self._active, Idle):
            logger.warning("Session open rejected: %s session active", self._active.kind)
            raise SessionAlreadyActiveError(self._active)

    # ---- closing ----

    def cancel(self) -> Session:
        """Drop the active session without touching the task. Returns the discarded session."""
        with self._lock:
            if isinstance(self._active, Idle):
                raise NoActiveSessionError()
            discarded = self._active
            self._active = IDLE
        logger.info("%s session cancelled task_id=%s", discarded.kind.capitalize(), discarded.task.id)
        return discarded

    def confirm(self, result: ResultPayload) -> Task:
        session = self._release(ManualSession)
        return self._merge.merge_confirmation(session.task.id, result)

    def complete(self, result: ResultPayload) -> Task:
        session = self._release(AutomatedSession)
        return self._merge.merge_automated(session.task.id, result)

    def _release(self, expected: type[ManualSession] | type[AutomatedSession]):
        kind = "manual" if expected is ManualSession else "automated"
        with self._lock:
            if not isinstance(self._active, expected):
                raise NoActiveSessionError(kind)
            session = self._active
            self._active = IDLE
        logger.info("%s session finished task_id=%s", kind.capitalize(), session.task.id)
        return session

    def _release_own(self, session: ManualSession | AutomatedSession) -> bool:
        """
        Release the slot only if it still holds this exact session object.

        False means the session was cancelled (and maybe replaced) from outside.
        """
        with self._lock:
            if self._active is not session:
                return False
            self._active = IDLE
        logger.info("%s session finished task_id=%s", session.kind.capitalize(), session.task.id)
        return True

    # ---- collaborator drivers ----

    def run_manual(self, task_id: int, resolver: ManualResolver) -> Task | None:
        """
        Open a manual session, hand the full task to the resolver, merge what it returns.

        Returns None when the session was cancelled while the resolver was working.
        """
        session = self.open_manual(task_id)
        try:
            result = resolver.resolve(session.task)
        except BaseException:
            self._release_own(session)
            raise
        if not self._release_own(session):
            logger.warning("Dropping manual result task_id=%s: session no longer active", task_id)
            return None
        return self._merge.merge_confirmation(session.task.id, result)

    async def run_automated(self, task_id: int, agent: AutomatedAgent) -> Task | None:
        """
        Open an automated session and await the external agent.

        If the wait is cancelled or the agent fails, this run's session is dropped
        (no task mutation) and the exception propagates. If the session was
        cancelled from outside meanwhile, the late result is dropped and None is returned.
        """
        session = self.open_automated(task_id)
        try:
            result = await agent.process(session.task_id, session.category)
        except asyncio.CancelledError:
            logger.info("Automated processing cancelled task_id=%s", task_id)
            self._release_own(session)
            raise
        except Exception:
            logger.exception("Automated processing failed task_id=%s", task_id)
            self._release_own(session)
            raise
        if not self._release_own(session):
            logger.warning("Dropping automated result task_id=%s: session no longer active", task_id)
            return None
        return self._merge.merge_automated(session.task.id, result)
