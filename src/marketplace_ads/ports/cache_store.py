from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CacheStore(ABC):
    """
    Port for a key/value cache with per-entry expiry.

    Values are JSON-compatible (dicts, lists, strings, numbers, booleans, None).
    Adapters raise InfrastructureError when the backend is unreachable; callers
    decide whether to swallow it.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Cached value, or None on a miss or after expiry."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...

    @abstractmethod
    def list_keys(self, prefix: str) -> list[str]:
        """Every live key starting with ``prefix``."""
        ...
