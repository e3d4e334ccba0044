"""
Backlink & Keyword Sections

Summary, per-site table and archive sections for backlinks and keywords.
The per-site tables come from five parallel sheets (client + four
competitors) and are keyed by a display name taken from the sheet's
website column.
"""

import logging
from typing import Any, Dict, List, Tuple

from src.mapping.coerce import clean_string, display_name_from_url, round2, safe_float, safe_int
from src.mapping.records import (
    BacklinkRecord,
    BacklinkSummary,
    KeywordRecord,
    KeywordSummary,
    map_rows,
)
from src.report.archive import build_archive
from src.sheets.schema import BoundRow, TableSchema, read_table, read_rows
from src.sheets.store import Workbook
from src.sheets.tables import (
    BACKLINKS_ARCHIVE,
    BACKLINKS_SUMMARY,
    KEYWORDS_ARCHIVE,
    KEYWORDS_SUMMARY,
    backlink_tables,
    keyword_tables,
)

logger = logging.getLogger(__name__)


def _float2(value: Any) -> float:
    return round2(safe_float(value))


BACKLINK_ARCHIVE_METRICS = {
    "total_backlinks": ("backlinks", safe_int),
    "referring_domains": ("referringDomains", safe_int),
    "domain_rating": ("domainRating", safe_int),
}

KEYWORD_ARCHIVE_METRICS = {
    "total_keywords": ("totalKeywords", safe_int),
    "top_3": ("top3", safe_int),
    "top_10": ("top10", safe_int),
    "traffic_value": ("trafficValue", _float2),
}


def _site_website(rows: List[BoundRow]) -> str:
    """First non-empty website cell of a per-site sheet."""
    for row in rows:
        website = clean_string(row.get("website"))
        if website:
            return website
    return ""


def build_site_tables(
    workbook: Workbook,
    tables: List[Tuple[str, TableSchema]],
    record_type,
) -> Dict[str, Dict[str, Any]]:
    """
    Read the parallel per-site sheets into {displayName: {role, website, rows}}.

    Missing sheets are skipped. When two sheets resolve to the same display
    name the later one is suffixed with its role.
    """
    result: Dict[str, Dict[str, Any]] = {}

    for role, schema in tables:
        table = read_table(workbook, schema, with_links=True)
        if table is None:
            continue

        website = _site_website(table.rows)
        name = display_name_from_url(website) or role
        if name in result:
            name = f"{name} ({role})"

        records = map_rows(table.rows, record_type)
        result[name] = {
            "role": role,
            "website": website,
            "rows": [r.to_dict() for r in records],
        }

    return result


def build_backlinks_summary(workbook: Workbook) -> List[Dict[str, Any]]:
    """backlinksSummary section."""
    return [s.to_dict() for s in map_rows(read_rows(workbook, BACKLINKS_SUMMARY), BacklinkSummary)]


def build_backlinks_table(workbook: Workbook) -> Dict[str, Dict[str, Any]]:
    """backlinksTable section."""
    return build_site_tables(workbook, backlink_tables(), BacklinkRecord)


def build_backlinks_archive(workbook: Workbook) -> List[Dict[str, Any]]:
    """backlinksSummaryArchive section."""
    entries = build_archive(read_rows(workbook, BACKLINKS_ARCHIVE), BACKLINK_ARCHIVE_METRICS)
    return [e.to_dict() for e in entries]


def build_keywords_summary(workbook: Workbook) -> List[Dict[str, Any]]:
    """keywordsSummary section."""
    return [s.to_dict() for s in map_rows(read_rows(workbook, KEYWORDS_SUMMARY), KeywordSummary)]


def build_keywords_table(workbook: Workbook) -> Dict[str, Dict[str, Any]]:
    """keywordsTable section."""
    return build_site_tables(workbook, keyword_tables(), KeywordRecord)


def build_keywords_archive(workbook: Workbook) -> List[Dict[str, Any]]:
    """keywordsSummaryArchive section."""
    entries = build_archive(read_rows(workbook, KEYWORDS_ARCHIVE), KEYWORD_ARCHIVE_METRICS)
    return [e.to_dict() for e in entries]
