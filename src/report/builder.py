"""
Client Report Builder

Assembles the client report from independently computed sections.

Each section is read from the workbook only when it is not already cached;
a cache-bust request recomputes every requested section and refreshes
the cache with the new values.
"""

import logging
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional

from src.cache.config import get_cache_config
from src.cache.response_cache import NullResponseCache, ResponseCache
from src.errors import MissingParameterError
from src.report.geogrid import build_geogrid
from src.report.overview import (
    build_dashboard,
    build_gbp_insights,
    build_webhooks,
    build_website_stats,
)
from src.report.rankings import (
    build_backlinks_archive,
    build_backlinks_summary,
    build_backlinks_table,
    build_keywords_archive,
    build_keywords_summary,
    build_keywords_table,
)
from src.sheets.store import RowStore, Workbook

logger = logging.getLogger(__name__)

SectionBuilder = Callable[[Workbook], Any]

# Output order of a full report
SECTION_BUILDERS: Dict[str, SectionBuilder] = {
    "dashboard": build_dashboard,
    "websiteStats": build_website_stats,
    "geogridData": build_geogrid,
    "gbpInsights": build_gbp_insights,
    "backlinksSummary": build_backlinks_summary,
    "backlinksTable": build_backlinks_table,
    "backlinksSummaryArchive": build_backlinks_archive,
    "keywordsSummary": build_keywords_summary,
    "keywordsTable": build_keywords_table,
    "keywordsSummaryArchive": build_keywords_archive,
    "webhooks": build_webhooks,
}

SECTIONS: List[str] = list(SECTION_BUILDERS.keys())


def parse_sections(raw: Optional[str], log: Optional[logging.Logger] = None) -> List[str]:
    """
    Parse the comma-separated sections allow-list.

    Absent or blank means every section. Unknown names are dropped with a
    warning; duplicates are collapsed, keeping first occurrence.
    """
    log = log or logger
    if raw is None or not raw.strip():
        return list(SECTIONS)

    selected: List[str] = []
    for name in (part.strip() for part in raw.split(",")):
        if not name or name in selected:
            continue
        if name not in SECTION_BUILDERS:
            log.warning(f"Ignoring unknown report section: {name}")
            continue
        selected.append(name)
    return selected


class ClientReportBuilder:
    """
    Builds client reports from a row store, caching each section.

    Args:
        store: Row store the workbooks are read from
        cache: Section cache (defaults to no caching)
        ttl: Lifetime of cached sections (defaults to CACHE_TTL_SECONDS)
        log: Logger to report progress on (defaults to the module logger)
    """

    def __init__(
        self,
        store: RowStore,
        cache: Optional[ResponseCache] = None,
        ttl: Optional[timedelta] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.cache = cache or NullResponseCache()
        self.ttl = ttl or get_cache_config().ttl
        self.log = log or logger

    def build(
        self,
        workbook_id: Optional[str],
        sections: Optional[List[str]] = None,
        cache_bust: bool = False,
    ) -> Dict[str, Any]:
        """
        Build the report.

        Args:
            workbook_id: Workbook to read (required)
            sections: Sections to include, in order (None = all)
            cache_bust: Recompute instead of reading the cache

        Raises:
            MissingParameterError: if workbook_id is empty
        """
        if not workbook_id or not workbook_id.strip():
            raise MissingParameterError("workbookId")
        workbook_id = workbook_id.strip()

        names = SECTIONS if sections is None else sections
        workbook: Optional[Workbook] = None
        report: Dict[str, Any] = {}
        computed = 0

        for name in names:
            key = self.cache.section_key(workbook_id, name)

            if not cache_bust:
                cached = self.cache.get(key)
                if cached is not None:
                    self.log.debug(f"Cache hit for {name} ({workbook_id})")
                    report[name] = cached
                    continue

            if workbook is None:
                workbook = self.store.open(workbook_id)

            data = SECTION_BUILDERS[name](workbook)
            computed += 1
            self.cache.put(key, data, self.ttl)
            report[name] = data

        self.log.info(
            f"Client report for {workbook_id}: {len(report)} sections "
            f"({computed} computed, {len(report) - computed} cached)"
        )
        return report
