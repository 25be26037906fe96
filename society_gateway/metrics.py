"""
Lightweight runtime metrics for health/observability.

Uses in-process counters so it works without extra dependencies.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Deque, Dict

from society_gateway.domain.enums import Outcome


class _RuntimeMetrics:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._forwarded: Dict[str, int] = {o.value: 0 for o in Outcome}
        self._error_timestamps: Deque[float] = deque()

    def record_forward(self, outcome: Outcome) -> None:
        with self._lock:
            self._forwarded[outcome.value] += 1

    def record_error(self, ts: float | None = None) -> None:
        now = ts if ts is not None else time.time()
        with self._lock:
            self._error_timestamps.append(now)
            self._prune_locked(now)

    def snapshot(self) -> Dict[str, object]:
        now = time.time()
        with self._lock:
            self._prune_locked(now)
            return {
                "forwarded": dict(self._forwarded),
                "errors_last_hour": len(self._error_timestamps),
            }

    def reset_for_tests(self) -> None:
        with self._lock:
            self._forwarded = {o.value: 0 for o in Outcome}
            self._error_timestamps.clear()

    def _prune_locked(self, now: float) -> None:
        cutoff = now - 3600.0
        while self._error_timestamps and self._error_timestamps[0] < cutoff:
            self._error_timestamps.popleft()


_METRICS = _RuntimeMetrics()


def record_forward(outcome: Outcome) -> None:
    _METRICS.record_forward(outcome)


def record_error(ts: float | None = None) -> None:
    _METRICS.record_error(ts)


def metrics_snapshot() -> Dict[str, object]:
    return _METRICS.snapshot()


def reset_metrics_for_tests() -> None:
    _METRICS.reset_for_tests()
