"""Redis implementation of CacheStore."""

from __future__ import annotations

import json
import logging
from typing import Any

import redis

from marketplace_ads.domain.errors import InfrastructureError
from marketplace_ads.ports.cache_store import CacheStore

logger = logging.getLogger(__name__)


class RedisCacheStore(CacheStore):
    """
    Redis-backed cache store.

    - Values are stored as JSON strings with ``SET key value EX ttl``
    - ``list_keys`` walks the keyspace with SCAN (never KEYS)
    - Every ``redis.RedisError`` is re-raised as InfrastructureError
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float) -> RedisCacheStore:
        client = redis.Redis.from_url(
            url,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            decode_responses=True,
        )
        return cls(client)

    def get(self, key: str) -> Any | None:
        try:
            raw = self._client.get(key)
        except redis.RedisError as exc:
            raise InfrastructureError("Cache read failed", key=key) from exc

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable cache entry", extra={"key": key})
            return None

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            self._client.set(key, json.dumps(value), ex=ttl_seconds)
        except redis.RedisError as exc:
            raise InfrastructureError("Cache write failed", key=key) from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except redis.RedisError as exc:
            raise InfrastructureError("Cache delete failed", key=key) from exc

    def list_keys(self, prefix: str) -> list[str]:
        try:
            return list(self._client.scan_iter(match=f"{prefix}*", count=500))
        except redis.RedisError as exc:
            raise InfrastructureError("Cache scan failed", prefix=prefix) from exc
