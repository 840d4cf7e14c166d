# src/remedy_desk/logging_setup.py

"""
Logging for the operator console.

The console shows the workflow story (sessions opened/closed, merges applied)
and problems; the log file keeps everything, registry updates included.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Protocol

# Loggers whose INFO lines describe session and merge transitions.
WORKFLOW_LOGGERS = frozenset(
    {
        "remedy_desk.core.session",
        "remedy_desk.tasks.result_merge",
        "remedy_desk.cli.main",
    }
)

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class LoggingSettings(Protocol):
    log_level: str
    log_file: Path


def parse_level(name: str, default: int = logging.INFO) -> int:
    """Map a level name from the environment ("debug", "WARNING") to its number."""
    return logging.getLevelNamesMapping().get(str(name).strip().upper(), default)


class WorkflowConsoleFilter(logging.Filter):
    """
    Console rules:
    - workflow loggers (session controller, merge engine, entrypoint): as configured
    - other remedy_desk loggers: WARNING+
    - everything else, captured warnings included: ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name in WORKFLOW_LOGGERS:
            return True
        if name.startswith("remedy_desk."):
            return record.levelno >= logging.WARNING
        return record.levelno >= logging.ERROR


def setup_logging(settings: LoggingSettings) -> Path:
    """
    Install a filtered stderr handler at `settings.log_level` and a DEBUG file
    handler writing to `settings.log_file`. Returns the log file path.

    Replaces handlers already on the root logger, so calling it twice is safe.
    """
    log_file = Path(settings.log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(settings.log_level))
    console.setFormatter(fmt)
    console.addFilter(WorkflowConsoleFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
