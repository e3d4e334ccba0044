"""
Overview Sections

dashboard, websiteStats, gbpInsights and webhooks: the sections built from
one-row-per-clinic tables and small key/value tables.
"""

import logging
from typing import Any, Dict, List

from src.mapping.coerce import clean_string, has_numeric_value, pick_link, round2, safe_float, safe_int
from src.mapping.records import (
    ClientRecord,
    OnPageRecord,
    SentimentRecord,
    find_client,
    map_rows,
)
from src.report.archive import build_archive
from src.sheets.schema import read_rows
from src.sheets.store import Workbook
from src.sheets.tables import AI_SENTIMENT, CENSUS, CLIENT_INFO, CONFIG, GBP_INSIGHTS, ON_PAGE_INSIGHTS

logger = logging.getLogger(__name__)

GBP_METRICS = {
    "calls": ("calls", safe_int),
    "website_clicks": ("websiteClicks", safe_int),
    "direction_requests": ("directionRequests", safe_int),
    "profile_views": ("profileViews", safe_int),
    "search_views": ("searchViews", safe_int),
    "maps_views": ("mapsViews", safe_int),
}


def _average(values: List[float]) -> float:
    return round2(sum(values) / len(values)) if values else 0.0


def _dashboard_metrics(client, competitors: List[ClientRecord]) -> Dict[str, Any]:
    """Client headline numbers; zeros when there is no client row."""
    return {
        "reviewScore": client.review_score if client else 0.0,
        "reviewCount": client.review_count if client else 0,
        "siteSpeed": client.site_speed if client else 0.0,
        "keywordsNumberOne": client.keywords_number_one if client else 0,
        "backlinks": client.backlinks if client else 0,
        "competitorCount": len(competitors),
        "competitorAvgReviewScore": _average([c.review_score for c in competitors]),
        "competitorAvgReviewCount": _average([c.review_count for c in competitors]),
    }


def build_census(workbook: Workbook) -> List[Dict[str, Any]]:
    census = []
    for row in read_rows(workbook, CENSUS):
        metric = clean_string(row.get("metric"))
        if not metric:
            continue
        raw = row.get("value")
        census.append({
            "metric": metric,
            "value": safe_float(raw) if has_numeric_value(raw) else None,
            "display": clean_string(raw),
        })
    return census


def build_dashboard(workbook: Workbook) -> Dict[str, Any]:
    """dashboard section: client card, competitors, census and AI sentiment."""
    clinics = map_rows(read_rows(workbook, CLIENT_INFO, with_links=True), ClientRecord)
    client = find_client(clinics)
    competitors = [c for c in clinics if c is not client]

    if clinics and client is None:
        logger.warning(f"No client row in '{CLIENT_INFO.table}' of {workbook.workbook_id}")

    sentiment = map_rows(read_rows(workbook, AI_SENTIMENT), SentimentRecord)

    return {
        "client": client.to_dict() if client else None,
        "competitors": [c.to_dict() for c in competitors],
        "metrics": _dashboard_metrics(client, competitors),
        "census": build_census(workbook),
        "aiSentiment": [s.to_dict() for s in sentiment],
    }


def build_website_stats(workbook: Workbook) -> Dict[str, Any]:
    """websiteStats section: client health plus every site's technical SEO row."""
    records = map_rows(read_rows(workbook, ON_PAGE_INSIGHTS), OnPageRecord)
    client = find_client(records) or OnPageRecord.empty()

    return {
        "healthData": client.to_dict(),
        "technicalSeoData": [r.to_dict() for r in records],
    }


def build_gbp_insights(workbook: Workbook) -> Dict[str, Any]:
    """gbpInsights section: latest month plus newest-first history with deltas."""
    history = build_archive(read_rows(workbook, GBP_INSIGHTS), GBP_METRICS)
    entries = [e.to_dict() for e in history]
    return {
        "latest": entries[0] if entries else {},
        "history": entries,
    }


def build_webhooks(workbook: Workbook) -> Dict[str, str]:
    """webhooks section: Config settings that name a webhook and hold an http(s) URL."""
    webhooks: Dict[str, str] = {}
    for row in read_rows(workbook, CONFIG, with_links=True):
        setting = clean_string(row.get("setting"))
        if "webhook" not in setting.lower():
            continue
        url = pick_link(row.link("value"), row.get("value"))
        if url:
            webhooks[setting] = url
    return webhooks
