from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable

from app.application.ports.rate_limit_store import RateLimitStorePort


class MemoryRateLimitStore(RateLimitStorePort):
    """
    Sliding-window request log per key, held in process memory.

    Not shared across processes and reset on restart. Expired keys are swept
    opportunistically, at most once per `sweep_interval_seconds`.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval_seconds: float = 60.0,
    ) -> None:
        self._requests: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._sweep_interval = sweep_interval_seconds
        self._last_sweep = clock()
        self._longest_window = 0.0

    def hit(self, key: str, max_requests: int, window_seconds: float, now_ts: float | None = None) -> bool:
        now = self._clock() if now_ts is None else now_ts
        with self._lock:
            self._longest_window = max(self._longest_window, window_seconds)
            self._maybe_sweep(now)

            timestamps = self._requests.get(key)
            if timestamps is None:
                timestamps = deque()
                self._requests[key] = timestamps
            _prune(timestamps, now, window_seconds)

            if len(timestamps) >= max_requests:
                return False
            timestamps.append(now)
            return True

    def count(self, key: str, window_seconds: float, now_ts: float | None = None) -> int:
        now = self._clock() if now_ts is None else now_ts
        with self._lock:
            timestamps = self._requests.get(key)
            if not timestamps:
                return 0
            return sum(1 for ts in timestamps if now - ts < window_seconds)

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._requests)

    def _maybe_sweep(self, now: float) -> None:
        # Caller holds the lock.
        if now - self._last_sweep < self._sweep_interval:
            return
        self._last_sweep = now
        expired = [
            key
            for key, timestamps in self._requests.items()
            if not timestamps or now - timestamps[-1] >= self._longest_window
        ]
        for key in expired:
            del self._requests[key]


def _prune(timestamps: deque[float], now: float, window_seconds: float) -> None:
    while timestamps and now - timestamps[0] >= window_seconds:
        timestamps.popleft()
