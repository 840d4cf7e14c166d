# src/remedy_desk/cli/commands.py

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import Any, cast

from ..core.errors import RemedyDeskError
from ..core.session import AutomatedSession, ManualSession
from ..core.state import AppState
from ..tasks.categories import CATEGORY_LABELS
from ..tasks.result_summary import extract_summary
from ..tasks.task_actions import format_task_line, status_label
from ..tasks.task_models import ALL_CATEGORIES, Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Domain errors are rendered as the reply text; anything else propagates.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except RemedyDeskError as e:
            logger.info("/%s rejected: %s (%s)", name, e.message, e.error_code)
            return f"Error: {e.message}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_task_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def _format_tasks(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks."
    return "\n".join(format_task_line(t) for t in tasks)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_tasks(state: AppState, args: list[str]) -> str:
    """
    /tasks            -> every task
    /tasks <category> -> tasks of one category (phone, address, contract, certificate, call)
    """
    key = args[0].lower() if args else ALL_CATEGORIES
    if key not in CATEGORY_LABELS:
        return f"Unknown category: {key}. Known: {', '.join(CATEGORY_LABELS)}."
    return _format_tasks(state.registry.filter_by_category(key))


def cmd_cats(state: AppState, args: list[str]) -> str:
    lines = ["Categories:"]
    for s in state.categories.summaries():
        lines.append(f"  {s.key:<12} {s.label:<14} {s.count}")
    return "\n".join(lines)


def cmd_progress(state: AppState, args: list[str]) -> str:
    snap = state.progress.snapshot()
    return (
        "Progress:\n"
        f"  Overall: {snap.overall_progress}%\n"
        f"  Completed: {snap.completed_count}\n"
        f"  In progress: {snap.in_progress_count}\n"
        f"  Pending: {snap.pending_count}"
    )


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /show <id>"
    task = state.registry.get_by_id(task_id)
    lines = [format_task_line(task), f"    {task.description}"]
    if task.confirmation_data is not None:
        lines.append(f"    confirmation: {dict(task.confirmation_data)}")
    return "\n".join(lines)


def cmd_open(state: AppState, args: list[str]) -> str:
    """Open a manual session; finish it with /confirm or /cancel."""
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /open <id>"
    session = state.sessions.open_manual(task_id)
    task = session.task
    return (
        f"Manual session opened for #{task.id} {task.title} ({status_label(task.status)}, {task.progress}%).\n"
        "Use /confirm <status> [note...] (status 'resolved' completes the task) or /cancel."
    )


def cmd_confirm(state: AppState, args: list[str]) -> str:
    """
    /confirm resolved [note...]   -> complete the task
    /confirm <other> [note...]    -> record the outcome, keep status/progress
    """
    if not args:
        return "Usage: /confirm <status> [note...]"
    result: dict[str, Any] = {"status": args[0].lower()}
    if len(args) > 1:
        result["note"] = " ".join(args[1:])
    task = state.sessions.confirm(result)
    return f"Task #{task.id} -> {status_label(task.status)} ({task.progress}%)."


def cmd_auto(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """Run the automated agent for a task and merge its result."""
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /auto <id>"

    if emit:
        with contextlib.suppress(Exception):
            emit(f"[AGENT] Processing task #{task_id}...")

    task = asyncio.run(state.sessions.run_automated(task_id, state.agent))
    if task is None:
        return f"Automated processing of task #{task_id} was cancelled; result discarded."
    s = extract_summary(task.ai_result)
    return (
        f"Task #{task.id} completed by {task.assignee}: "
        f"resolved={s.resolved_count} accuracy={s.accuracy_pct}% time={s.processing_time}"
    )


def cmd_cancel(state: AppState, args: list[str]) -> str:
    discarded = state.sessions.cancel()
    return f"{discarded.kind.capitalize()} session for task #{discarded.task.id} cancelled."


def cmd_session(state: AppState, args: list[str]) -> str:
    active = state.sessions.active
    if isinstance(active, (ManualSession, AutomatedSession)):
        return f"Active {active.kind} session: task #{active.task.id} {active.task.title}"
    return "No active session."


def cmd_reassign(state: AppState, args: list[str]) -> str:
    state.reassignment.request_reassignment(state.registry.get_all())
    return "Reassignment requested."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("tasks", cmd_tasks, help_text="List tasks: /tasks [category].", aliases=["ls"])
registry.register("cats", cmd_cats, help_text="Show categories with task counts.")
registry.register("progress", cmd_progress, help_text="Show overall progress and status counts.")
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("open", cmd_open, help_text="Start manual handling: /open <id>.")
registry.register("confirm", cmd_confirm, help_text="Finish manual handling: /confirm <status> [note].")
registry.register("auto", cmd_auto, help_text="Run automated processing: /auto <id>.")
registry.register("cancel", cmd_cancel, help_text="Cancel the active session.")
registry.register("session", cmd_session, help_text="Show the active session.")
registry.register("reassign", cmd_reassign, help_text="Request task reassignment.")
