"""Row-to-record mapping: cell coercion and typed records."""

from .coerce import (
    coerce_bool,
    safe_int,
    safe_float,
    has_numeric_value,
    is_placeholder,
    parse_month_header,
    parse_date_cell,
    clean_string,
    pick_link,
    is_client_marker,
    display_name_from_url,
    normalize_key,
)
from .records import (
    ClientRecord,
    OnPageRecord,
    BacklinkRecord,
    KeywordRecord,
    BacklinkSummary,
    KeywordSummary,
    SentimentRecord,
    map_rows,
    find_client,
)

__all__ = [
    "coerce_bool",
    "safe_int",
    "safe_float",
    "has_numeric_value",
    "is_placeholder",
    "parse_month_header",
    "parse_date_cell",
    "clean_string",
    "pick_link",
    "is_client_marker",
    "display_name_from_url",
    "normalize_key",
    "ClientRecord",
    "OnPageRecord",
    "BacklinkRecord",
    "KeywordRecord",
    "BacklinkSummary",
    "KeywordSummary",
    "SentimentRecord",
    "map_rows",
    "find_client",
]
