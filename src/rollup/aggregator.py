"""
Service Aggregation

Groups keyword rows by service and rolls them up into per-service entries
with volume totals, month-over-month trend, average competition/CPC and a
share of the location's total volume.

Ordering is deterministic: volume descending, then name ascending
(case-insensitive), for both services and their keywords.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from src.mapping.coerce import clean_string, round2, safe_float, safe_int
from src.rollup.catalog import EMERGING_INDEX, ESTABLISHED_INDEX, is_emerging, is_established
from src.rollup.months import MonthColumn
from src.sheets.schema import BoundRow

logger = logging.getLogger(__name__)


def compute_trend(current: float, previous: float) -> int:
    """1 if volume grew, -1 if it shrank, 0 if unchanged."""
    if current > previous:
        return 1
    if current < previous:
        return -1
    return 0


def format_percentage(part: float, total: float) -> str:
    """Share of total as a one-decimal string; '0.0' when total is zero."""
    if total <= 0:
        return "0.0"
    return f"{100 * part / total:.1f}"


@dataclass
class KeywordVolume:
    keyword: str
    volume: int = 0
    previous_volume: int = 0

    @property
    def trend(self) -> int:
        return compute_trend(self.volume, self.previous_volume)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "volume": self.volume,
            "previousVolume": self.previous_volume,
            "trend": self.trend,
        }


@dataclass
class ServiceRollup:
    """Aggregated keyword volumes for one service at one location."""
    service: str
    volume: int = 0
    previous_volume: int = 0
    competition_sum: float = 0.0
    cpc_sum: float = 0.0
    keyword_count: int = 0
    volume_percentage: str = "0.0"
    keywords: Dict[str, KeywordVolume] = field(default_factory=dict)

    @property
    def avg_competition(self) -> float:
        return round2(self.competition_sum / self.keyword_count) if self.keyword_count else 0.0

    @property
    def avg_cpc(self) -> float:
        return round2(self.cpc_sum / self.keyword_count) if self.keyword_count else 0.0

    @property
    def trend(self) -> int:
        return compute_trend(self.volume, self.previous_volume)

    def add(self, keyword: str, volume: int, previous_volume: int, competition: float, cpc: float):
        self.volume += volume
        self.previous_volume += previous_volume
        if competition > 0:
            self.competition_sum += competition
        if cpc > 0:
            self.cpc_sum += cpc
        self.keyword_count += 1

        entry = self.keywords.setdefault(keyword.lower(), KeywordVolume(keyword=keyword))
        entry.volume += volume
        entry.previous_volume += previous_volume

    def sorted_keywords(self) -> List[KeywordVolume]:
        return sorted(self.keywords.values(), key=lambda k: (-k.volume, k.keyword.lower()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.service,
            "totalVolume": self.volume,
            "previousVolume": self.previous_volume,
            "trend": self.trend,
            "volumePercentage": self.volume_percentage,
            "avgCompetition": self.avg_competition,
            "avgCpc": self.avg_cpc,
            "keywordCount": self.keyword_count,
            "keywords": [k.to_dict() for k in self.sorted_keywords()],
        }


def _canonical_name(service: str) -> str:
    key = service.lower()
    return ESTABLISHED_INDEX.get(key) or EMERGING_INDEX.get(key) or service


def aggregate_services(
    rows: Sequence[BoundRow],
    current: Optional[MonthColumn],
    previous: Optional[MonthColumn],
) -> Dict[str, ServiceRollup]:
    """
    Group rows by service (case-insensitive) and accumulate totals.

    Rows without a service name are dropped. With no current month there is
    nothing to aggregate.
    """
    groups: Dict[str, ServiceRollup] = {}
    if current is None:
        return groups

    for row in rows:
        service = clean_string(row.get("service"))
        if not service:
            continue

        group = groups.setdefault(service.lower(), ServiceRollup(service=_canonical_name(service)))
        group.add(
            keyword=clean_string(row.get("keyword")) or service,
            volume=safe_int(row.at(current.index)),
            previous_volume=safe_int(row.at(previous.index)) if previous else 0,
            competition=safe_float(row.get("competition")),
            cpc=safe_float(row.get("cpc")),
        )

    total = sum(g.volume for g in groups.values())
    for group in groups.values():
        group.volume_percentage = format_percentage(group.volume, total)

    return groups


def _ranked(groups: Sequence[ServiceRollup]) -> List[ServiceRollup]:
    return sorted(
        (g for g in groups if g.volume > 0),
        key=lambda g: (-g.volume, g.service.lower()),
    )


def partition_catalogs(groups: Dict[str, ServiceRollup]) -> Tuple[List[ServiceRollup], List[ServiceRollup]]:
    """
    Split rollups into (top services, new services) by catalog membership.

    Services with no current volume, or in neither catalog, are left out.
    """
    values = list(groups.values())
    top = _ranked([g for g in values if is_established(g.service)])
    new = _ranked([g for g in values if is_emerging(g.service)])

    uncatalogued = [g.service for g in values if not is_established(g.service) and not is_emerging(g.service)]
    if uncatalogued:
        logger.debug(f"Services outside both catalogs: {', '.join(sorted(uncatalogued))}")

    return top, new
