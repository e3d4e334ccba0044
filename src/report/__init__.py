"""
Client Report

Reads a client workbook and builds the dashboard report sections:
dashboard, websiteStats, geogridData, gbpInsights, backlinks and keywords
summaries/tables/archives, and webhooks.
"""

from .builder import ClientReportBuilder, SECTIONS, SECTION_BUILDERS, parse_sections
from .archive import ArchiveEntry, build_archive, compute_deltas

__all__ = [
    "ClientReportBuilder",
    "SECTIONS",
    "SECTION_BUILDERS",
    "parse_sections",
    "ArchiveEntry",
    "build_archive",
    "compute_deltas",
]
