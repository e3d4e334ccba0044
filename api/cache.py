"""
Cache Management API

Provides endpoints for cache monitoring and manual operations.

Endpoints:
- Statistics for dashboard insights
- Manual invalidation of one workbook's report sections
"""

import logging
import time
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.dependencies import get_response_cache
from src.cache.response_cache import ResponseCache
from src.report.builder import SECTIONS


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/cache", tags=["Cache Management"])


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class CacheStatsResponse(BaseModel):
    """Cache statistics response."""
    backend: str = Field(..., description="redis, memory or none")
    namespace: str
    hits: int
    misses: int
    writes: int
    errors: int
    hit_rate_percent: float


class InvalidationResponse(BaseModel):
    """Cache invalidation response."""
    success: bool
    keys_invalidated: int
    duration_ms: float
    sections: List[str] = []


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/stats", response_model=CacheStatsResponse)
def cache_stats(cache: ResponseCache = Depends(get_response_cache)):
    """Hit/miss counters of this process's cache client."""
    return CacheStatsResponse(
        backend=cache.backend,
        namespace=cache.namespace,
        **cache.stats.to_dict(),
    )


@router.post("/invalidate/{workbook_id}", response_model=InvalidationResponse)
def invalidate_workbook(workbook_id: str, cache: ResponseCache = Depends(get_response_cache)):
    """
    Drop every cached report section of a workbook.

    Useful right after analysts edit a sheet, instead of waiting for the TTL.
    """
    start = time.perf_counter()
    invalidated = [name for name in SECTIONS if cache.delete(cache.section_key(workbook_id, name))]
    duration_ms = (time.perf_counter() - start) * 1000

    logger.info(f"Invalidated {len(invalidated)} cached sections for workbook {workbook_id}")
    return InvalidationResponse(
        success=True,
        keys_invalidated=len(invalidated),
        duration_ms=round(duration_ms, 2),
        sections=invalidated,
    )
