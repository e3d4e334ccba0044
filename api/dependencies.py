"""
Endpoint Dependencies

Row store, response cache and settings are injected through FastAPI
dependencies so tests can swap them with app.dependency_overrides.
"""

import traceback
from functools import lru_cache
from typing import Any, Dict

from src.cache.response_cache import ResponseCache, create_response_cache
from src.sheets.google_sheets import GoogleSheetsRowStore
from src.sheets.store import RowStore
from src.utils.config import get_settings


@lru_cache
def get_row_store() -> RowStore:
    """Google Sheets row store (credentials are loaded on first workbook open)."""
    return GoogleSheetsRowStore(get_settings())


@lru_cache
def get_response_cache() -> ResponseCache:
    """Cache backend selected by CACHE_ENABLED / REDIS_URL."""
    return create_response_cache()


def error_envelope(exc: BaseException, **extra: Any) -> Dict[str, Any]:
    """In-band error payload: message plus formatted traceback."""
    payload: Dict[str, Any] = {
        "error": str(exc) or exc.__class__.__name__,
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }
    payload.update(extra)
    return payload
