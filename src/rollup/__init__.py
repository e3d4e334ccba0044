"""
Service Rollup

Location resolution and per-service keyword volume aggregation over the
shared services workbook.
"""

from .locations import (
    LocationResolver,
    LocationRoute,
    ResolvedLocation,
    resolve_location,
)
from .months import MonthColumn, discover_month_columns, select_months
from .aggregator import (
    ServiceRollup,
    KeywordVolume,
    aggregate_services,
    partition_catalogs,
    compute_trend,
    format_percentage,
)
from .service import ServiceRollupService, empty_rollup

__all__ = [
    "LocationResolver",
    "LocationRoute",
    "ResolvedLocation",
    "resolve_location",
    "MonthColumn",
    "discover_month_columns",
    "select_months",
    "ServiceRollup",
    "KeywordVolume",
    "aggregate_services",
    "partition_catalogs",
    "compute_trend",
    "format_percentage",
    "ServiceRollupService",
    "empty_rollup",
]
