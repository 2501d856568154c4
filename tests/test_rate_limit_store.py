"""
Tests for the in-memory sliding-window rate limiter.
"""

from __future__ import annotations

import threading

from app.infrastructure.store.memory_rate_limit_store import MemoryRateLimitStore


def test_blocks_after_max_requests():
    """Test that the fourth request inside the window is refused."""
    store = MemoryRateLimitStore()

    results = [store.hit("booking:1.2.3.4", 3, 60, now_ts=100 + i) for i in range(4)]

    assert results == [True, True, True, False]


def test_window_slides():
    """Test that requests older than the window stop counting."""
    store = MemoryRateLimitStore()
    for ts in (0, 10, 20):
        assert store.hit("k", 3, 60, now_ts=ts)

    assert store.hit("k", 3, 60, now_ts=59) is False
    assert store.hit("k", 3, 60, now_ts=60) is True
    assert store.count("k", 60, now_ts=60) == 3


def test_keys_are_independent():
    store = MemoryRateLimitStore()
    for i in range(3):
        store.hit("booking:1.1.1.1", 3, 60, now_ts=i)

    assert store.hit("booking:1.1.1.1", 3, 60, now_ts=5) is False
    assert store.hit("enquiry:1.1.1.1", 3, 60, now_ts=5) is True
    assert store.hit("booking:2.2.2.2", 3, 60, now_ts=5) is True


def test_expired_keys_are_swept():
    """Test that idle keys are removed on a later check once the sweep interval passes."""
    now = [0.0]
    store = MemoryRateLimitStore(clock=lambda: now[0], sweep_interval_seconds=30)
    store.hit("old", 3, 60)
    assert len(store) == 1

    now[0] = 120.0
    store.hit("new", 3, 60)

    assert len(store) == 1
    assert store.count("old", 60) == 0


def test_reset_clears_all_keys():
    store = MemoryRateLimitStore()
    store.hit("a", 1, 60, now_ts=0)
    store.reset()
    assert store.hit("a", 1, 60, now_ts=1) is True


def test_concurrent_hits_never_exceed_limit():
    """Test that the lock keeps the admitted count exact under threads."""
    store = MemoryRateLimitStore()
    admitted = []

    def worker():
        for _ in range(20):
            if store.hit("shared", 10, 60, now_ts=1.0):
                admitted.append(1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(admitted) == 10
