# core/rate_limiter.py
"""
Per-client request rate limiting

Counters are kept in a ``limits`` storage backend (the same engine
Flask-Limiter runs on). A fixed window is opened on a client's first
request and expires on its own after ``window_seconds``.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from limits import RateLimitItemPerSecond
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter

logger = logging.getLogger(__name__)

NAMESPACE = 'requests'


@dataclass
class RateWindow:
    """Snapshot of one client's current window"""
    count: int
    window_start: float
    reset_at: float


class RateLimiter:
    """
    Fixed-window request quota keyed by client identity

    ``try_acquire`` is the only operation that mutates counters; the
    increment and the quota comparison happen in one storage ``hit``.
    """

    def __init__(self, quota: int = 100, window_seconds: int = 15 * 60,
                 storage_uri: str = 'memory://'):
        self.quota = quota
        self.window_seconds = window_seconds
        self.item = RateLimitItemPerSecond(quota, window_seconds)
        self.storage = storage_from_string(storage_uri)
        self.strategy = FixedWindowRateLimiter(self.storage)

        logger.info(f"Rate limiter initialized: {quota} requests per {window_seconds}s ({storage_uri})")

    @classmethod
    def from_config(cls, config) -> 'RateLimiter':
        return cls(
            quota=config['RATELIMIT_QUOTA'],
            window_seconds=config['RATELIMIT_WINDOW_SECONDS'],
            storage_uri=config['RATELIMIT_STORAGE_URI'],
        )

    def try_acquire(self, client_key: str) -> bool:
        """Count one request for ``client_key``; False once the quota is spent"""
        return self.strategy.hit(self.item, NAMESPACE, client_key)

    def check(self, client_key: str) -> Tuple[bool, Dict[str, Any]]:
        """
        Count one request and report the resulting window state

        Args:
            client_key: Client identity (normally the remote address)

        Returns:
            Tuple of (allowed, limit_info)
        """
        allowed = self.try_acquire(client_key)
        reset_time, remaining = self.strategy.get_window_stats(self.item, NAMESPACE, client_key)

        return allowed, {
            'limit': self.quota,
            'remaining': max(0, remaining),
            'reset_in': max(0, int(reset_time - time.time())),
            'window': self.window_seconds,
        }

    def window(self, client_key: str) -> RateWindow:
        """Read the client's window without counting a request"""
        reset_time, remaining = self.strategy.get_window_stats(self.item, NAMESPACE, client_key)
        return RateWindow(
            count=self.quota - remaining,
            window_start=reset_time - self.window_seconds,
            reset_at=reset_time,
        )

    def reset(self) -> None:
        """Drop every client's counters"""
        self.storage.reset()
        logger.info("Rate limiter counters reset")
