"""
GeoGrid Section

Groups GeoGrid rank-tracking runs by keyword. Each keyword maps to its runs
ordered newest first; consumers read position 0 as the latest run.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from src.mapping.coerce import clean_string, normalize_key, parse_date_cell, safe_int
from src.sheets.schema import BoundRow, read_rows
from src.sheets.store import Workbook
from src.sheets.tables import GEOGRID, GEOGRID_COMPETITORS

logger = logging.getLogger(__name__)


@dataclass
class GeoGridCompetitor:
    name: str
    domain: str = ""
    rank: int = 0
    top5_total: int = 0
    top10_total: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "domain": self.domain,
            "rank": self.rank,
            "top5Total": self.top5_total,
            "top10Total": self.top10_total,
        }


@dataclass
class GeoGridObservation:
    keyword: str
    run_date: date
    competitors: List[GeoGridCompetitor] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "date": self.run_date.isoformat(),
            "competitors": [c.to_dict() for c in self.competitors],
        }


def _competitors(row: BoundRow) -> List[GeoGridCompetitor]:
    competitors = []
    for n in range(1, GEOGRID_COMPETITORS + 1):
        name = clean_string(row.get(f"competitor_{n}_name"))
        domain = clean_string(row.get(f"competitor_{n}_domain"))
        if not name and not domain:
            continue
        competitors.append(GeoGridCompetitor(
            name=name or domain,
            domain=domain,
            rank=safe_int(row.get(f"competitor_{n}_rank")),
            top5_total=safe_int(row.get(f"competitor_{n}_top5")),
            top10_total=safe_int(row.get(f"competitor_{n}_top10")),
        ))
    return competitors


def group_observations(rows: List[BoundRow], today: Optional[date] = None) -> Dict[str, List[GeoGridObservation]]:
    """
    Group runs by normalized keyword, newest first.

    An unparseable run date falls back to today so the row's competitor
    data is kept.
    """
    today = today or date.today()
    grouped: Dict[str, List[GeoGridObservation]] = {}

    for row in rows:
        keyword = clean_string(row.get("keyword"))
        if not keyword:
            continue

        run_date = parse_date_cell(row.get("run_date"))
        if run_date is None:
            logger.debug(f"GeoGrid row {row.row_number} has no valid run date, using {today}")
            run_date = today

        grouped.setdefault(normalize_key(keyword), []).append(
            GeoGridObservation(keyword=keyword, run_date=run_date, competitors=_competitors(row))
        )

    for observations in grouped.values():
        observations.sort(key=lambda o: o.run_date, reverse=True)

    return grouped


def build_geogrid(workbook: Workbook, today: Optional[date] = None) -> Dict[str, List[Dict[str, Any]]]:
    """geogridData section."""
    grouped = group_observations(read_rows(workbook, GEOGRID), today=today)
    return {
        keyword: [o.to_dict() for o in observations]
        for keyword, observations in sorted(grouped.items())
    }
