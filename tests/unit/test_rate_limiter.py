"""Tests for the per-client rate limiter"""
import threading
import time

import pytest

from core.rate_limiter import RateLimiter


def test_allows_up_to_quota():
    limiter = RateLimiter(quota=3, window_seconds=60)

    assert [limiter.try_acquire("10.0.0.1") for _ in range(4)] == [True, True, True, False]


def test_clients_are_independent():
    limiter = RateLimiter(quota=1, window_seconds=60)

    assert limiter.try_acquire("10.0.0.1")
    assert not limiter.try_acquire("10.0.0.1")
    assert limiter.try_acquire("10.0.0.2")


def test_window_resets_after_duration():
    limiter = RateLimiter(quota=2, window_seconds=1)

    assert limiter.try_acquire("10.0.0.1")
    assert limiter.try_acquire("10.0.0.1")
    assert not limiter.try_acquire("10.0.0.1")

    time.sleep(1.2)

    assert limiter.try_acquire("10.0.0.1")


def test_check_reports_remaining():
    limiter = RateLimiter(quota=2, window_seconds=60)

    allowed, info = limiter.check("10.0.0.1")
    assert allowed
    assert info["limit"] == 2
    assert info["remaining"] == 1
    assert 0 <= info["reset_in"] <= 60

    limiter.check("10.0.0.1")
    allowed, info = limiter.check("10.0.0.1")
    assert not allowed
    assert info["remaining"] == 0


def test_window_snapshot_does_not_count():
    limiter = RateLimiter(quota=5, window_seconds=60)
    limiter.try_acquire("10.0.0.1")
    limiter.try_acquire("10.0.0.1")

    window = limiter.window("10.0.0.1")
    assert window.count == 2
    assert limiter.window("10.0.0.1").count == 2
    assert window.reset_at - window.window_start == pytest.approx(60)


def test_reset_clears_counters():
    limiter = RateLimiter(quota=1, window_seconds=60)
    limiter.try_acquire("10.0.0.1")
    assert not limiter.try_acquire("10.0.0.1")

    limiter.reset()

    assert limiter.try_acquire("10.0.0.1")


def test_concurrent_acquire_never_exceeds_quota():
    limiter = RateLimiter(quota=50, window_seconds=60)
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(20):
            allowed = limiter.try_acquire("10.0.0.1")
            with lock:
                results.append(allowed)

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 200
    assert results.count(True) == 50
