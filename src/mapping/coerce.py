"""
Cell Coercion

Safe conversions from untyped spreadsheet cells to Python values.

Every function here is total: malformed input folds to a documented
default (0, '', False or None) instead of raising, so missing data never
reaches arithmetic or JSON output as NaN.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_MONTH_HEADER = re.compile(r"^\s*([A-Za-z]+)\.?,?\s+(\d{4})\s*$")
_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)

PLACEHOLDERS = {"", "-"}

MONTHS = {
    "january": 1, "february": 2, "march": 3, "april": 4,
    "may": 5, "june": 6, "july": 7, "august": 8,
    "september": 9, "october": 10, "november": 11, "december": 12,
}
# 3-letter abbreviations plus the common "sept"
MONTHS.update({name[:3]: num for name, num in list(MONTHS.items())})
MONTHS["sept"] = 9

GENERIC_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


# ============================================================================
# BOOLEANS
# ============================================================================

def coerce_bool(value: Any) -> bool:
    """
    True for a native True or a string equal to "true" (any case).

    Numbers are not truthy here; spreadsheet exports only carry booleans
    as native values or as their display text.
    """
    if value is True:
        return True
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


# ============================================================================
# NUMBERS
# ============================================================================

def is_placeholder(value: Any) -> bool:
    """Empty cells and the '-' filler count as no data."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in PLACEHOLDERS
    return False


def safe_float(value: Any) -> float:
    """
    Parse a number, keeping only digits, '.' and '-'.

    Returns 0.0 for None, booleans, empty or unparseable input.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0

    cleaned = _NON_NUMERIC.sub("", str(value))
    if not cleaned:
        return 0.0
    try:
        result = float(cleaned)
    except ValueError:
        return 0.0
    return result if math.isfinite(result) else 0.0


def safe_int(value: Any) -> int:
    """Integer variant of safe_float (truncates toward zero)."""
    return int(safe_float(value))


def has_numeric_value(value: Any) -> bool:
    """True when a cell holds a real number (zero included), not a placeholder."""
    if is_placeholder(value) or isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)

    cleaned = _NON_NUMERIC.sub("", str(value))
    if not cleaned:
        return False
    try:
        float(cleaned)
    except ValueError:
        return False
    return True


def round2(value: float) -> float:
    return round(value, 2)


# ============================================================================
# DATES
# ============================================================================

def parse_month_header(value: Any) -> Optional[date]:
    """
    Parse "Month YYYY" text (full or abbreviated month, any case).

    Returns the first day of that month, or None when the text does not match.
    """
    if not isinstance(value, str):
        return None

    match = _MONTH_HEADER.match(value)
    if not match:
        return None

    month = MONTHS.get(match.group(1).lower())
    if month is None:
        return None
    return date(int(match.group(2)), month, 1)


def parse_date_cell(value: Any) -> Optional[date]:
    """
    Parse a date cell.

    Native dates are used directly; text is tried as "Month YYYY" first and
    then against a set of common formats. Returns None if nothing matches.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()

    month = parse_month_header(text)
    if month is not None:
        return month

    for fmt in GENERIC_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


# ============================================================================
# STRINGS & LINKS
# ============================================================================

def clean_string(value: Any, default: str = "") -> str:
    """Trimmed text of a cell; empty input folds to the default."""
    if value is None:
        return default
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    text = str(value).strip()
    return text if text else default


def is_http_url(value: Any) -> bool:
    return isinstance(value, str) and bool(_HTTP_URL.match(value.strip()))


def pick_link(rich_link: Optional[str], fallback: Any) -> str:
    """
    Choose a hyperlink for a cell.

    The embedded (rich-text) link wins. The plain-text fallback is used only
    when there is no embedded link and it looks like an http(s) URL.
    """
    if rich_link and rich_link.strip():
        return rich_link.strip()
    if is_http_url(fallback):
        return fallback.strip()
    return ""


def is_client_marker(value: Any) -> bool:
    """
    True when an account-type cell marks the client row.

    Compared case-insensitively; the workbooks were inconsistent about case.
    """
    return clean_string(value).lower() == "client"


def display_name_from_url(url: Any) -> str:
    """
    Short display name for a website: protocol and www. stripped, path dropped.

    >>> display_name_from_url("https://www.example.com/about")
    'example.com'
    """
    text = clean_string(url)
    if not text:
        return ""
    text = re.sub(r"^[a-z]+://", "", text, flags=re.IGNORECASE)
    text = re.sub(r"^www\.", "", text, flags=re.IGNORECASE)
    return re.split(r"[/?#]", text, maxsplit=1)[0].lower()


def normalize_key(value: Any) -> str:
    """Lowercased, trimmed text used for grouping."""
    return clean_string(value).lower()
