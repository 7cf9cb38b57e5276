"""Wall-clock budget for one search."""

from __future__ import annotations

import time
from typing import Optional


class TimeManager:
    """Stopwatch with an optional deadline. Without a budget it never expires."""

    def __init__(self, budget_ms: Optional[float] = None):
        self.started = time.perf_counter()
        self.deadline = None if budget_ms is None else self.started + budget_ms / 1000.0

    def expired(self) -> bool:
        return self.deadline is not None and time.perf_counter() >= self.deadline

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000.0
