"""Cache port for analytics snapshots and its in-process adapter.

The port keeps the storage backend out of the analytics service; swap
``MemoryCache`` for any other ``AnalyticsCache`` without touching callers.
"""

import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class AnalyticsCache(ABC):
    """Key/value store with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Stored value, or ``None`` on a miss or after expiry."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""


class MemoryCache(AnalyticsCache):
    """Thread-safe in-memory cache.

    Entries are replaced whole, so a reader sees either the previous value or
    the new one. Concurrent misses may both recompute; the last write wins.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
