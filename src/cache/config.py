"""
Cache Configuration

Centralized configuration for the response cache.
Settings can be overridden via environment variables.
"""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional
from functools import lru_cache


@dataclass(frozen=True)
class CacheTTL:
    """
    Cache TTL configuration by data type.

    Report sections are derived from spreadsheets that analysts edit by hand,
    so entries live for minutes, not hours.
    """

    REPORT_SECTION: timedelta = timedelta(seconds=300)


@dataclass
class CacheConfig:
    """
    Main cache configuration.

    Environment variables:
    - CACHE_ENABLED: Enable/disable caching globally
    - CACHE_NAMESPACE: Key prefix
    - CACHE_TTL_SECONDS: Entry lifetime
    - REDIS_URL: Redis connection string (no Redis = caching disabled)
    """

    # Cache namespace (for key prefixes)
    namespace: str = field(default_factory=lambda: os.getenv(
        "CACHE_NAMESPACE",
        "dashboard"
    ))

    # Global cache toggle
    enabled: bool = field(default_factory=lambda: os.getenv(
        "CACHE_ENABLED",
        "true"
    ).lower() == "true")

    ttl_seconds: int = field(default_factory=lambda: int(os.getenv(
        "CACHE_TTL_SECONDS",
        str(int(CacheTTL.REPORT_SECTION.total_seconds()))
    )))

    redis_url: Optional[str] = field(default_factory=lambda: os.getenv("REDIS_URL"))
    redis_socket_timeout: float = 2.0
    redis_connect_timeout: float = 2.0

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self.ttl_seconds)


@lru_cache(maxsize=1)
def get_cache_config() -> CacheConfig:
    """Get singleton cache configuration."""
    return CacheConfig()
