"""
Location Resolution

Resolves a free-text location ("USA", "Ontario", "Alabama, USA",
"New York, NY") to the services table that holds its rows, the column to
filter on and the filter value, then filters rows through progressively
looser matching passes.

The comma grammar is a best-effort heuristic. "State, Country" and
"City, ST" cannot be told apart without a list of valid city names, so a
few inputs resolve to the wrong route:
- "Los Angeles, CA": "ca" is a country token, so this is read as a state
- "Miami, Florida": a one-word city with a full state name is read as a state
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from src.mapping.coerce import clean_string
from src.sheets.schema import BoundRow
from src.sheets.tables import SERVICES_CANADA, SERVICES_CITIES, SERVICES_STATES, SERVICES_USA

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = "USA"


class LocationRoute(str, Enum):
    """Which partition a location resolves to."""
    COUNTRY = "country"
    STATE = "state"
    CITY = "city"


# Right-hand tokens that mark "State, Country"
COUNTRY_TOKENS = {"usa", "united states", "canada", "ca", "us"}

US_STATES: Dict[str, str] = {
    "alabama": "AL", "alaska": "AK", "arizona": "AZ", "arkansas": "AR",
    "california": "CA", "colorado": "CO", "connecticut": "CT", "delaware": "DE",
    "district of columbia": "DC", "florida": "FL", "georgia": "GA", "hawaii": "HI",
    "idaho": "ID", "illinois": "IL", "indiana": "IN", "iowa": "IA",
    "kansas": "KS", "kentucky": "KY", "louisiana": "LA", "maine": "ME",
    "maryland": "MD", "massachusetts": "MA", "michigan": "MI", "minnesota": "MN",
    "mississippi": "MS", "missouri": "MO", "montana": "MT", "nebraska": "NE",
    "nevada": "NV", "new hampshire": "NH", "new jersey": "NJ", "new mexico": "NM",
    "new york": "NY", "north carolina": "NC", "north dakota": "ND", "ohio": "OH",
    "oklahoma": "OK", "oregon": "OR", "pennsylvania": "PA", "rhode island": "RI",
    "south carolina": "SC", "south dakota": "SD", "tennessee": "TN", "texas": "TX",
    "utah": "UT", "vermont": "VT", "virginia": "VA", "washington": "WA",
    "west virginia": "WV", "wisconsin": "WI", "wyoming": "WY",
}

CANADIAN_PROVINCES: Dict[str, str] = {
    "alberta": "AB", "british columbia": "BC", "manitoba": "MB",
    "new brunswick": "NB", "newfoundland and labrador": "NL", "nova scotia": "NS",
    "northwest territories": "NT", "nunavut": "NU", "ontario": "ON",
    "prince edward island": "PE", "quebec": "QC", "saskatchewan": "SK", "yukon": "YT",
}

REGION_ABBREVIATIONS: Dict[str, str] = {**US_STATES, **CANADIAN_PROVINCES}
ABBREVIATION_TO_REGION: Dict[str, str] = {abbr: name for name, abbr in REGION_ABBREVIATIONS.items()}


def is_region_abbreviation(token: str) -> bool:
    return token.strip().upper() in ABBREVIATION_TO_REGION


def region_code(value: str) -> Optional[str]:
    """Two-letter code of a US state or Canadian province given its name or code."""
    normalized = value.strip().lower()
    if normalized in REGION_ABBREVIATIONS:
        return REGION_ABBREVIATIONS[normalized]
    if normalized.upper() in ABBREVIATION_TO_REGION:
        return normalized.upper()
    return None


def region_equivalent(a: str, b: str) -> bool:
    """True when both values name the same region (full name or abbreviation)."""
    code = region_code(a)
    return code is not None and code == region_code(b)


def letters_only(value: str) -> str:
    return re.sub(r"[^a-z]", "", value.lower())


@dataclass(frozen=True)
class ResolvedLocation:
    """Where a location's rows live and how to select them."""
    route: LocationRoute
    table: str
    column: str
    value: str
    secondary: Optional[str] = None
    raw: str = ""

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "route": self.route.value,
            "table": self.table,
            "column": self.column,
            "value": self.value,
            "secondary": self.secondary,
            "raw": self.raw,
        }


class LocationResolver:
    """
    Resolves location text and filters service rows to it.

    Resolution is a pure function of the input string.
    """

    def resolve(self, location: Optional[str]) -> ResolvedLocation:
        raw = (location or "").strip() or DEFAULT_LOCATION

        if raw == "USA":
            resolved = self._country(SERVICES_USA, "USA", raw)
        elif raw == "Canada":
            resolved = self._country(SERVICES_CANADA, "Canada", raw)
        elif "," in raw:
            resolved = self._resolve_pair(raw)
        else:
            resolved = self._state(raw, raw)

        logger.info(
            f"Location '{raw}' resolved: route={resolved.route.value}, "
            f"value={resolved.value}, secondary={resolved.secondary}"
        )
        return resolved

    def _resolve_pair(self, raw: str) -> ResolvedLocation:
        left, right = (part.strip() for part in raw.split(",", 1))

        if right.lower() in COUNTRY_TOKENS:
            return self._state(left, raw)

        if len(right) == 2 and is_region_abbreviation(right):
            return self._city(left, right, raw)

        if re.search(r"\s", left):
            return self._city(left, right or None, raw)

        return self._state(left, raw)

    @staticmethod
    def _country(table: str, value: str, raw: str) -> ResolvedLocation:
        return ResolvedLocation(LocationRoute.COUNTRY, table, "country", value, raw=raw)

    @staticmethod
    def _state(value: str, raw: str) -> ResolvedLocation:
        return ResolvedLocation(LocationRoute.STATE, SERVICES_STATES, "state", value, raw=raw)

    @staticmethod
    def _city(value: str, secondary: Optional[str], raw: str) -> ResolvedLocation:
        return ResolvedLocation(LocationRoute.CITY, SERVICES_CITIES, "city", value, secondary, raw=raw)

    # =========================================================================
    # Row filtering
    # =========================================================================

    def filter_rows(self, rows: Sequence[BoundRow], location: ResolvedLocation) -> List[BoundRow]:
        """
        Rows belonging to a resolved location.

        Returns an empty list when nothing matches.
        """
        target = location.value.strip().lower()
        if not target:
            logger.info(f"Location '{location.raw}' has nothing to match on")
            return []

        if location.route == LocationRoute.CITY:
            return [r for r in rows if self._city_matches(r, location)]

        exact = [r for r in rows if self._cell(r, location.column).lower() == target]
        if exact or location.route == LocationRoute.COUNTRY:
            return exact

        # State route: ignore punctuation and spacing noise
        target_letters = letters_only(target)
        loose = []
        if target_letters:
            loose = [r for r in rows if letters_only(self._cell(r, location.column)) == target_letters]
        if loose:
            logger.debug(f"State '{location.value}' matched on letters-only pass")
            return loose

        # Maximal recall: name/abbreviation equivalence, else containment either way
        recall = []
        if region_code(target):
            recall = [r for r in rows if region_equivalent(self._cell(r, location.column), target)]
        if not recall and not is_region_abbreviation(target):
            recall = [r for r in rows if self._state_recall_matches(self._cell(r, location.column), location.value)]
        if recall:
            logger.debug(f"State '{location.value}' matched on containment/abbreviation pass")
        else:
            logger.info(f"No rows for location '{location.raw}'")
        return recall

    @staticmethod
    def _cell(row: BoundRow, column: str) -> str:
        return clean_string(row.get(column))

    @staticmethod
    def _state_recall_matches(cell: str, value: str) -> bool:
        cell_norm, value_norm = cell.strip().lower(), value.strip().lower()
        if not cell_norm or not value_norm:
            return False
        return cell_norm in value_norm or value_norm in cell_norm

    def _city_matches(self, row: BoundRow, location: ResolvedLocation) -> bool:
        if self._cell(row, "city").lower() != location.value.strip().lower():
            return False
        if not location.secondary:
            return True

        state = self._cell(row, "state").lower()
        token = location.secondary.strip().lower()
        if not state:
            # A blank state does not disqualify the row
            return True
        return (
            state == token
            or token in state
            or state in token
            or region_equivalent(state, token)
        )


def resolve_location(location: Optional[str]) -> ResolvedLocation:
    """Convenience function to resolve without instantiating the resolver."""
    return LocationResolver().resolve(location)
