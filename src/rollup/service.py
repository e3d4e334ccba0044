"""
Service Rollup

Request-level pipeline for the services endpoint:
location text → resolved partition → filtered rows → month selection →
per-service aggregation → top/new service lists.
"""

import logging
from typing import Any, Dict, List, Optional

from src.errors import DashboardError
from src.mapping.coerce import clean_string
from src.rollup.aggregator import aggregate_services, partition_catalogs
from src.rollup.locations import LocationResolver
from src.rollup.months import discover_month_columns, select_months
from src.sheets.schema import read_table
from src.sheets.store import RowStore
from src.sheets.tables import SERVICES_CITIES, services_table

logger = logging.getLogger(__name__)


def empty_rollup() -> Dict[str, List[Dict[str, Any]]]:
    return {"topServices": [], "newServices": []}


class ServiceRollupService:
    """
    Aggregates the shared services workbook for a location.

    Args:
        store: Row store holding the services workbook
        workbook_id: Id of the services workbook
        resolver: Location resolver (defaults to LocationResolver())
        log: Logger to report progress on (defaults to the module logger)
    """

    def __init__(
        self,
        store: RowStore,
        workbook_id: Optional[str],
        resolver: Optional[LocationResolver] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.workbook_id = workbook_id
        self.resolver = resolver or LocationResolver()
        self.log = log or logger

    def _open(self):
        if not self.workbook_id:
            raise DashboardError("SERVICES_WORKBOOK_ID is not configured")
        return self.store.open(self.workbook_id)

    def rollup(self, location: Optional[str]) -> Dict[str, List[Dict[str, Any]]]:
        """
        Build {topServices, newServices} for a location.

        A location with no matching rows yields empty lists.
        """
        resolved = self.resolver.resolve(location)
        workbook = self._open()

        table = read_table(workbook, services_table(resolved.table))
        if table is None:
            self.log.warning(f"Services table '{resolved.table}' not found")
            return empty_rollup()

        rows = self.resolver.filter_rows(table.rows, resolved)
        if not rows:
            return empty_rollup()

        months = discover_month_columns(table.columns.header)
        current, previous = select_months(rows, months)
        if current is None:
            self.log.warning(f"No month column with data for '{resolved.raw}' in '{resolved.table}'")
            return empty_rollup()

        groups = aggregate_services(rows, current, previous)
        top, new = partition_catalogs(groups)

        self.log.info(
            f"Service rollup for '{resolved.raw}': {len(rows)} rows, "
            f"current={current.label}, previous={previous.label if previous else None}, "
            f"{len(top)} top / {len(new)} new services"
        )
        return {
            "topServices": [g.to_dict() for g in top],
            "newServices": [g.to_dict() for g in new],
        }

    def list_cities(self) -> List[Dict[str, str]]:
        """
        Distinct (city, state, country) entries of the cities table.

        Deduplicated case-insensitively and sorted by "City, State".
        """
        table = read_table(self._open(), services_table(SERVICES_CITIES))
        if table is None:
            self.log.warning(f"Services table '{SERVICES_CITIES}' not found")
            return []

        seen = set()
        cities: List[Dict[str, str]] = []
        for row in table.rows:
            city = clean_string(row.get("city"))
            if not city:
                continue
            state = clean_string(row.get("state"))
            country = clean_string(row.get("country"))

            key = (city.lower(), state.lower(), country.lower())
            if key in seen:
                continue
            seen.add(key)

            cities.append({
                "city": city,
                "state": state,
                "country": country,
                "label": f"{city}, {state}" if state else city,
            })

        cities.sort(key=lambda c: (c["label"].lower(), c["country"].lower()))
        return cities
