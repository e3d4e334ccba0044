"""
Response Caching

Per-section cache for client reports:
- CacheConfig / CacheTTL: environment-driven settings
- ResponseCache: get / put-with-expiry interface
- RedisResponseCache, InMemoryResponseCache, NullResponseCache: backends

Usage:
    cache = create_response_cache()
    key = cache.section_key(workbook_id, "dashboard")
    data = cache.get(key)
    if data is None:
        data = compute()
        cache.put(key, data, get_cache_config().ttl)
"""

from src.cache.config import CacheConfig, CacheTTL, get_cache_config
from src.cache.response_cache import (
    ResponseCache,
    RedisResponseCache,
    InMemoryResponseCache,
    NullResponseCache,
    CacheStats,
    create_response_cache,
    report_section_key,
    serialize_value,
    deserialize_value,
)

__all__ = [
    # Config
    "CacheConfig",
    "CacheTTL",
    "get_cache_config",
    # Backends
    "ResponseCache",
    "RedisResponseCache",
    "InMemoryResponseCache",
    "NullResponseCache",
    "CacheStats",
    "create_response_cache",
    "report_section_key",
    "serialize_value",
    "deserialize_value",
]
