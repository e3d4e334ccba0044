"""
Service Rollup API

GET /api/services?location=Miami, FL[&callback=fn]
GET /api/services?action=listCities

Responses can be wrapped as JSONP when a callback is given. Errors are
returned in-band with empty service lists so the page can still render.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from api.dependencies import error_envelope, get_row_store
from src.rollup.locations import DEFAULT_LOCATION
from src.rollup.service import ServiceRollupService
from src.sheets.store import RowStore
from src.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Service Rollup"])

# Dotted JavaScript identifier, e.g. "cb" or "app.handlers.render"
JSONP_CALLBACK = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")

LIST_CITIES = "listCities"


def render(payload: Dict[str, Any], callback: Optional[str] = None) -> Response:
    """JSON, or JSONP when a callback name is given."""
    if callback:
        body = f"{callback}({json.dumps(payload)})"
        return Response(content=body, media_type="application/javascript")
    return JSONResponse(content=payload)


@router.get("/services")
def get_services(
    location: Optional[str] = Query(default=None, description="Free-text location, e.g. 'Miami, FL'"),
    callback: Optional[str] = Query(default=None, description="JSONP callback name"),
    action: Optional[str] = Query(default=None, description="'listCities' to list available cities"),
    store: RowStore = Depends(get_row_store),
    settings: Settings = Depends(get_settings),
):
    """Top and new services for a location, or the list of available cities."""
    if callback and not JSONP_CALLBACK.match(callback):
        logger.warning(f"Rejected JSONP callback name: {callback!r}")
        return render({
            "error": "Invalid callback name",
            "stack": "",
            "topServices": [],
            "newServices": [],
        })

    try:
        service = ServiceRollupService(store, settings.SERVICES_WORKBOOK_ID)
        if action == LIST_CITIES:
            payload = {"cities": service.list_cities()}
        else:
            if action:
                logger.warning(f"Ignoring unknown action: {action}")
            payload = service.rollup(location or DEFAULT_LOCATION)
    except Exception as e:
        logger.exception(f"Service rollup failed for location {location!r}: {e}")
        payload = error_envelope(e, topServices=[], newServices=[])

    return render(payload, callback)
