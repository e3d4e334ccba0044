"""
Client Report API

GET /api/client-report?workbookId=...&sections=a,b&cacheBust=1

Errors are returned in-band as {error, stack} with HTTP 200.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import error_envelope, get_response_cache, get_row_store
from src.cache.response_cache import ResponseCache
from src.report.builder import ClientReportBuilder, parse_sections
from src.sheets.store import RowStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Client Report"])


@router.get("/client-report")
def get_client_report(
    workbook_id: Optional[str] = Query(default=None, alias="workbookId", description="Client workbook id"),
    sections: Optional[str] = Query(default=None, description="Comma-separated sections (default: all)"),
    cache_bust: Optional[str] = Query(default=None, alias="cacheBust", description="Any value bypasses the cache"),
    store: RowStore = Depends(get_row_store),
    cache: ResponseCache = Depends(get_response_cache),
) -> Dict[str, Any]:
    """
    Build the client report.

    Each section is served from cache when fresh unless cacheBust is set.
    """
    try:
        builder = ClientReportBuilder(store, cache)
        return builder.build(
            workbook_id,
            sections=parse_sections(sections),
            cache_bust=bool(cache_bust),
        )
    except Exception as e:
        logger.exception(f"Client report failed for workbook {workbook_id}: {e}")
        return error_envelope(e)
