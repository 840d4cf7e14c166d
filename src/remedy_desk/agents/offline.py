# src/remedy_desk/agents/offline.py

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..tasks.task_models import TaskCategory

logger = logging.getLogger(__name__)


class OfflineAutomatedAgent:
    """
    Offline deterministic agent used for demos when no external processing backend is wired.

    Behavior:
    - waits delay_seconds to model asynchronous processing
    - returns a fixed payload in the shape each category's producer uses
    """

    _PAYLOADS: dict[str, dict[str, Any]] = {
        TaskCategory.PHONE: {"auto_resolved": 1198, "accuracy": 96, "processing_time": "3m 12s"},
        TaskCategory.ADDRESS: {"auto_completed": 2089, "completion_rate": 97, "processing_time": "4m 05s"},
        TaskCategory.CERTIFICATE: {"auto_verified": 134, "accuracy": 99, "processing_time": "48s"},
        TaskCategory.CALL: {"auto_verified": 3310, "accuracy": 94},
    }

    def __init__(self, delay_seconds: float = 0.0) -> None:
        self.delay_seconds = max(0.0, float(delay_seconds))

    async def process(self, task_id: int, category: str) -> dict[str, Any]:
        logger.debug("Offline agent processing task_id=%s category=%s", task_id, category)
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        # Unknown categories still produce a payload; extract_summary fills in defaults.
        return dict(self._PAYLOADS.get(category, {}))
