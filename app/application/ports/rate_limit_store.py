from __future__ import annotations

from abc import ABC, abstractmethod


class RateLimitStorePort(ABC):
    @abstractmethod
    def hit(self, key: str, max_requests: int, window_seconds: float, now_ts: float | None = None) -> bool:
        """
        Record a request for `key` if it fits in the window.
        Returns True if allowed, False if the key already used its budget.
        The check and the record are atomic per key.
        """
        raise NotImplementedError

    @abstractmethod
    def count(self, key: str, window_seconds: float, now_ts: float | None = None) -> int:
        """Number of requests recorded for `key` inside the current window."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Forget every tracked key."""
        raise NotImplementedError
