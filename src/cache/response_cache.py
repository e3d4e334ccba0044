"""
Response Cache

Get / put-with-expiry cache for computed report sections.

The cache is an injected capability: the request handler receives a
ResponseCache and is its only caller. Every operation degrades gracefully:
a failed read is a miss, a failed write is logged and ignored.
"""

import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Dict, Optional, Tuple

from redis import Redis
from redis.exceptions import RedisError

from src.cache.config import CacheConfig, get_cache_config

logger = logging.getLogger(__name__)


def serialize_value(value: Any) -> bytes:
    """
    Serialize a Python value to bytes for caching.

    Uses JSON with default handler for non-serializable types.
    """
    def default_handler(obj):
        if hasattr(obj, 'isoformat'):
            return obj.isoformat()
        if hasattr(obj, 'to_dict'):
            return obj.to_dict()
        return str(obj)

    json_str = json.dumps(value, default=default_handler, ensure_ascii=False)
    return json_str.encode('utf-8')


def deserialize_value(data: bytes) -> Any:
    """
    Deserialize bytes back to Python value.
    """
    if not data:
        return None
    return json.loads(data.decode('utf-8'))


def report_section_key(namespace: str, workbook_id: str, section: str) -> str:
    """Cache key for one section of one workbook's report."""
    return f"{namespace}:report:{workbook_id}:{section}"


@dataclass
class CacheStats:
    """Cache operation statistics."""
    hits: int = 0
    misses: int = 0
    writes: int = 0
    errors: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "writes": self.writes,
            "errors": self.errors,
            "hit_rate_percent": round(self.hit_rate * 100, 1),
        }


class ResponseCache(ABC):
    """Key-value cache with expiry."""

    backend = "none"

    def __init__(self, namespace: str = "dashboard"):
        self.namespace = namespace
        self.stats = CacheStats()

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Cached value, or None on miss or any failure."""

    @abstractmethod
    def put(self, key: str, value: Any, ttl: timedelta) -> bool:
        """Store a value. Returns False (never raises) on failure."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a key."""

    def section_key(self, workbook_id: str, section: str) -> str:
        return report_section_key(self.namespace, workbook_id, section)


class NullResponseCache(ResponseCache):
    """Cache that stores nothing (caching disabled or no backend configured)."""

    def get(self, key):
        self.stats.misses += 1
        return None

    def put(self, key, value, ttl):
        return False

    def delete(self, key):
        return False


class InMemoryResponseCache(ResponseCache):
    """
    Process-local cache for tests and single-process development.

    Values are stored serialized so a hit returns a fresh copy, matching
    the behaviour of the Redis backend.
    """

    backend = "memory"

    def __init__(self, namespace: str = "dashboard", clock: Callable[[], float] = time.monotonic):
        super().__init__(namespace)
        self._clock = clock
        self._entries: Dict[str, Tuple[float, bytes]] = {}

    def get(self, key):
        entry = self._entries.get(key)
        if entry is None:
            self.stats.misses += 1
            return None

        expires_at, payload = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            self.stats.misses += 1
            return None

        try:
            value = deserialize_value(payload)
        except ValueError as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            del self._entries[key]
            self.stats.errors += 1
            self.stats.misses += 1
            return None

        self.stats.hits += 1
        return value

    def put(self, key, value, ttl):
        try:
            payload = serialize_value(value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Cache set error for {key}: {e}")
            self.stats.errors += 1
            return False

        now = self._clock()
        self._prune(now)
        self._entries[key] = (now + ttl.total_seconds(), payload)
        self.stats.writes += 1
        return True

    def _prune(self, now: float):
        for expired in [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]:
            del self._entries[expired]

    def delete(self, key):
        return self._entries.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._entries)


class RedisResponseCache(ResponseCache):
    """
    Redis-backed cache.

    Uses the synchronous client; request handlers are synchronous.
    """

    backend = "redis"

    def __init__(self, config: Optional[CacheConfig] = None, client: Optional[Redis] = None):
        self.config = config or get_cache_config()
        super().__init__(self.config.namespace)
        self._redis = client or Redis.from_url(
            self.config.redis_url,
            socket_timeout=self.config.redis_socket_timeout,
            socket_connect_timeout=self.config.redis_connect_timeout,
            decode_responses=False,  # We handle bytes directly
        )

    def get(self, key):
        try:
            data = self._redis.get(key)
        except RedisError as e:
            self.stats.errors += 1
            self.stats.misses += 1
            logger.warning(f"Redis unavailable, cache get failed for {key}: {e}")
            return None

        if data is None:
            self.stats.misses += 1
            return None

        try:
            value = deserialize_value(data)
        except ValueError as e:
            self.stats.errors += 1
            self.stats.misses += 1
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            return None

        self.stats.hits += 1
        return value

    def put(self, key, value, ttl):
        try:
            self._redis.setex(key, ttl, serialize_value(value))
        except (RedisError, TypeError, ValueError) as e:
            self.stats.errors += 1
            logger.warning(f"Cache set error for {key}: {e}")
            return False

        self.stats.writes += 1
        return True

    def delete(self, key):
        try:
            return self._redis.delete(key) > 0
        except RedisError as e:
            self.stats.errors += 1
            logger.warning(f"Cache delete error for {key}: {e}")
            return False


def create_response_cache(config: Optional[CacheConfig] = None) -> ResponseCache:
    """Build the cache backend the configuration asks for."""
    config = config or get_cache_config()

    if not config.enabled:
        logger.info("Response cache disabled")
        return NullResponseCache(config.namespace)

    if not config.redis_url:
        logger.info("REDIS_URL not set, response cache disabled")
        return NullResponseCache(config.namespace)

    return RedisResponseCache(config)
