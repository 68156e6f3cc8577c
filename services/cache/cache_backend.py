# services/cache/cache_backend.py
"""
Time-based caches injected into the scorer, the news service and the
prediction synthesizer.

Two backends share one tiny interface (get / set):
  - MemoryTTLCache: per-process dict, expiry checked on read
  - RedisTTLCache: shared across instances when REDIS_URL is configured

Values must be JSON-compatible so both backends behave the same.
"""
from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, Union

import redis as redis_sync

logger = logging.getLogger(__name__)

JsonValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]

# -------------------------
# Config
# -------------------------
DEFAULT_TTL_SEC = int(os.getenv("CACHE_TTL_SEC", "1800"))  # 30 min

# Prefix isolates app + env, e.g. "newsimpact:prod:"
REDIS_PREFIX = os.getenv("REDIS_PREFIX", "newsimpact:")
REDIS_URL = os.getenv("REDIS_URL")

_redis_client = None


class CacheBackend(Protocol):
    def get(self, key: str) -> Optional[JsonValue]: ...

    def set(self, key: str, value: JsonValue) -> None: ...


class MemoryTTLCache:
    """Process-local cache; an entry is served while younger than ttl_seconds."""

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SEC, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # key -> (stored_at, payload)
        self._store: Dict[str, Tuple[float, JsonValue]] = {}

    def get(self, key: str) -> Optional[JsonValue]:
        hit = self._store.get(key)
        if hit is None:
            return None
        stored_at, payload = hit
        if self._clock() - stored_at < self.ttl_seconds:
            return payload
        self._store.pop(key, None)
        return None

    def set(self, key: str, value: JsonValue) -> None:
        self._store[key] = (self._clock(), value)

    def __len__(self) -> int:
        return len(self._store)


class RedisTTLCache:
    """Shared cache. Redis errors degrade to a miss on read and a no-op on write."""

    def __init__(self, client: Any, ttl_seconds: int = DEFAULT_TTL_SEC, prefix: str = REDIS_PREFIX):
        self.ttl_seconds = ttl_seconds
        self._client = client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Optional[JsonValue]:
        try:
            raw = self._client.get(self._key(key))
            if raw is None:
                return None
            return json.loads(raw)
        except Exception:
            logger.warning("cache_redis_get_failed prefix=%s", self._prefix, exc_info=True)
            return None

    def set(self, key: str, value: JsonValue) -> None:
        try:
            self._client.setex(self._key(key), self.ttl_seconds, json.dumps(value, separators=(",", ":")))
        except Exception:
            logger.warning("cache_redis_set_failed prefix=%s", self._prefix, exc_info=True)


def get_redis_client():
    """Lazy init redis client (sync). Returns None if REDIS_URL is not configured."""
    global _redis_client
    if _redis_client is not None:
        return _redis_client
    if not REDIS_URL:
        return None

    _redis_client = redis_sync.from_url(
        REDIS_URL,
        decode_responses=True,
        socket_timeout=2,
        socket_connect_timeout=2,
    )
    return _redis_client


def build_cache(namespace: str, ttl_seconds: int = DEFAULT_TTL_SEC) -> CacheBackend:
    client = get_redis_client()
    if client is not None:
        return RedisTTLCache(client, ttl_seconds=ttl_seconds, prefix=f"{REDIS_PREFIX}{namespace}:")
    return MemoryTTLCache(ttl_seconds=ttl_seconds)
