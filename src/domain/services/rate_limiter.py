"""Fixed-window rate limiter keyed by client identity.

Each key gets one window at a time. The window opens on the key's first
request, counts every allowed request, and resets wholesale once it is
``window_seconds`` old. It is not a rolling log: a saturated key stays
rejected until its own window expires, then starts over at one.
"""

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from domain.repositories.rate_limit_store import IRateLimitStore, RateLimitEntry

RATE_LIMIT_MAX_REQUESTS = 100
RATE_LIMIT_WINDOW_SECONDS = 24 * 60 * 60


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    """Outcome of a rate limit check.

    ``remaining`` is set when the request is allowed, ``retry_after`` (whole
    seconds) when it is rejected. A rejection is a normal result, not an error.
    """

    allowed: bool
    remaining: int | None = None
    retry_after: int | None = None


class RateLimiter:
    """Decide whether a client key may perform another request."""

    def __init__(
        self,
        store: IRateLimitStore,
        *,
        limit: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._store = store
        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        # The store is shared by every request; the read-modify-write of a
        # bucket must not interleave.
        self._lock = threading.Lock()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def bucket_count(self) -> int:
        """Buckets currently held by the store, expired ones included."""
        return len(self._store)

    def check_rate_limit(self, key: str) -> RateLimitDecision:
        """Count a request for ``key`` and report whether it may proceed."""
        with self._lock:
            now = self._clock()
            entry = self._store.get(key)

            if entry is None or now - entry.window_start >= self._window_seconds:
                self._store.set(key, RateLimitEntry(count=1, window_start=now))
                return RateLimitDecision(allowed=True, remaining=self._limit - 1)

            if entry.count < self._limit:
                count = entry.count + 1
                self._store.set(key, RateLimitEntry(count=count, window_start=entry.window_start))
                return RateLimitDecision(allowed=True, remaining=self._limit - count)

            retry_after = math.ceil(entry.window_start + self._window_seconds - now)
            return RateLimitDecision(allowed=False, retry_after=retry_after)

    def cleanup_expired_entries(self) -> int:
        """Physically drop buckets older than the window.

        This only frees memory: an expired bucket that has not been purged yet
        is already treated as absent by :meth:`check_rate_limit`.

        Returns:
            Number of buckets removed.
        """
        with self._lock:
            now = self._clock()
            expired = [
                key
                for key, entry in self._store.items()
                if now - entry.window_start > self._window_seconds
            ]
            for key in expired:
                self._store.delete(key)
            return len(expired)
