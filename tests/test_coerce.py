"""
Tests for cell coercion.

Every coercion is total: malformed cells fold to a default instead of raising.
"""

import pytest
from datetime import date, datetime

from src.mapping.coerce import (
    clean_string,
    coerce_bool,
    display_name_from_url,
    has_numeric_value,
    is_client_marker,
    is_placeholder,
    normalize_key,
    parse_date_cell,
    parse_month_header,
    pick_link,
    safe_float,
    safe_int,
)


# =============================================================================
# BOOLEANS
# =============================================================================

class TestCoerceBool:
    """Test boolean coercion."""

    def test_native_true(self):
        assert coerce_bool(True) is True

    def test_text_true_any_case(self):
        assert coerce_bool("TRUE") is True
        assert coerce_bool("true") is True
        assert coerce_bool(" True ") is True

    def test_everything_else_is_false(self):
        assert coerce_bool(False) is False
        assert coerce_bool("FALSE") is False
        assert coerce_bool("yes") is False
        assert coerce_bool(1) is False
        assert coerce_bool(None) is False
        assert coerce_bool("") is False


# =============================================================================
# NUMBERS
# =============================================================================

class TestSafeNumbers:
    """Test numeric parsing."""

    def test_plain_numbers(self):
        assert safe_float(3.5) == 3.5
        assert safe_int(42) == 42

    def test_formatted_text(self):
        assert safe_float("$1,234.50") == 1234.5
        assert safe_int("1,204") == 1204
        assert safe_float("2.4 s") == 2.4
        assert safe_float("-3") == -3.0

    def test_defaults_to_zero(self):
        assert safe_float(None) == 0.0
        assert safe_float("") == 0.0
        assert safe_float("n/a") == 0.0
        assert safe_float("-") == 0.0
        assert safe_int("1.2.3") == 0

    def test_booleans_are_not_numbers(self):
        assert safe_float(True) == 0.0

    def test_non_finite(self):
        assert safe_float(float("nan")) == 0.0
        assert safe_float(float("inf")) == 0.0

    def test_int_truncates(self):
        assert safe_int("7.9") == 7


class TestNumericValue:
    """Zero counts as data; placeholders do not."""

    def test_zero_counts(self):
        assert has_numeric_value(0) is True
        assert has_numeric_value("0") is True

    def test_placeholders(self):
        assert has_numeric_value("") is False
        assert has_numeric_value("-") is False
        assert has_numeric_value(None) is False
        assert is_placeholder(" - ") is True

    def test_text(self):
        assert has_numeric_value("1,500") is True
        assert has_numeric_value("n/a") is False
        assert has_numeric_value(False) is False


# =============================================================================
# DATES
# =============================================================================

class TestDates:
    """Test month header and date cell parsing."""

    def test_month_header(self):
        assert parse_month_header("January 2024") == date(2024, 1, 1)
        assert parse_month_header("feb 2024") == date(2024, 2, 1)
        assert parse_month_header("Sept 2023") == date(2023, 9, 1)
        assert parse_month_header("Mar. 2024") == date(2024, 3, 1)

    def test_month_header_rejects_other_text(self):
        assert parse_month_header("Service") is None
        assert parse_month_header("Smarch 2024") is None
        assert parse_month_header("2024") is None
        assert parse_month_header(None) is None

    def test_native_dates(self):
        assert parse_date_cell(date(2024, 5, 2)) == date(2024, 5, 2)
        assert parse_date_cell(datetime(2024, 5, 2, 13, 0)) == date(2024, 5, 2)

    def test_text_formats(self):
        assert parse_date_cell("2024-02-14") == date(2024, 2, 14)
        assert parse_date_cell("02/14/2024") == date(2024, 2, 14)
        assert parse_date_cell("March 3, 2024") == date(2024, 3, 3)
        assert parse_date_cell("March 2024") == date(2024, 3, 1)

    def test_unparseable(self):
        assert parse_date_cell("garbage") is None
        assert parse_date_cell("") is None
        assert parse_date_cell(45000) is None


# =============================================================================
# STRINGS & LINKS
# =============================================================================

class TestStrings:
    """Test string helpers."""

    def test_clean_string(self):
        assert clean_string("  Glow  ") == "Glow"
        assert clean_string(None) == ""
        assert clean_string("", "N/A") == "N/A"
        assert clean_string(12) == "12"

    def test_client_marker_is_case_insensitive(self):
        assert is_client_marker("Client")
        assert is_client_marker(" client ")
        assert is_client_marker("CLIENT")
        assert not is_client_marker("Competitor")
        assert not is_client_marker(None)

    def test_display_name_from_url(self):
        assert display_name_from_url("https://www.glowmedspa.com/about") == "glowmedspa.com"
        assert display_name_from_url("http://Radiance.com?ref=1") == "radiance.com"
        assert display_name_from_url("example.org") == "example.org"
        assert display_name_from_url("") == ""

    def test_normalize_key(self):
        assert normalize_key(" Botox Miami ") == "botox miami"


class TestPickLink:
    """Embedded hyperlinks win over plain text."""

    def test_rich_link_preferred(self):
        assert pick_link("https://rich.example.com", "https://plain.example.com") == "https://rich.example.com"

    def test_plain_url_fallback(self):
        assert pick_link(None, " https://plain.example.com ") == "https://plain.example.com"

    def test_plain_text_is_not_a_link(self):
        assert pick_link(None, "Running") == ""
        assert pick_link("", None) == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
