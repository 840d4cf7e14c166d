# src/remedy_desk/tasks/result_summary.py

"""
Normalization of automated result payloads.

Producers use different field names per category:
- phone:             auto_resolved + accuracy
- address:           auto_completed + completion_rate
- certificate, call: auto_verified + accuracy

Every view reads them through extract_summary() so the fallback order stays identical.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .task_models import ResultSummary

RESOLVED_COUNT_KEYS = ("auto_resolved", "auto_completed", "auto_verified")
ACCURACY_KEYS = ("accuracy", "completion_rate")
UNKNOWN_PROCESSING_TIME = "unknown"


def _first_present(payload: Mapping[str, Any], keys: tuple[str, ...], default: Any) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return default


def extract_summary(result: Mapping[str, Any] | None) -> ResultSummary:
    """
    Priority-ordered lookup:
    - resolved_count: auto_resolved, auto_completed, auto_verified, else 0
    - accuracy_pct: accuracy, completion_rate, else 0
    - processing_time: processing_time, else "unknown"

    Missing or non-mapping payloads yield the defaults (never an error).
    """
    payload: Mapping[str, Any] = result if isinstance(result, Mapping) else {}
    return ResultSummary(
        resolved_count=_first_present(payload, RESOLVED_COUNT_KEYS, 0),
        accuracy_pct=_first_present(payload, ACCURACY_KEYS, 0),
        processing_time=_first_present(payload, ("processing_time",), UNKNOWN_PROCESSING_TIME),
    )
