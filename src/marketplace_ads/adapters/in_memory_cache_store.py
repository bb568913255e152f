from __future__ import annotations

import copy
import threading
import time
from typing import Any, Callable

from marketplace_ads.ports.cache_store import CacheStore


class InMemoryCacheStore(CacheStore):
    """
    Process-local cache store with monotonic-clock expiry.

    Used in tests and when no ``REDIS_URL`` is configured. Values are deep
    copied on the way in and out so callers never share mutable state.

    Thread-safe: one instance is shared by every request thread, so all
    access to the entries goes through a lock.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, tuple[Any, float]] = {}
        self._clock = clock
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
        return copy.deepcopy(value)

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        entry = (copy.deepcopy(value), self._clock() + ttl_seconds)
        with self._lock:
            self._entries[key] = entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def list_keys(self, prefix: str) -> list[str]:
        with self._lock:
            self._evict_expired()
            return [key for key in list(self._entries) if key.startswith(prefix)]

    def _evict_expired(self) -> None:
        # Caller holds the lock
        now = self._clock()
        expired = [
            key for key, (_, expires_at) in list(self._entries.items()) if now >= expires_at
        ]
        for key in expired:
            del self._entries[key]
