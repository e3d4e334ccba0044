"""
Archive Builder

Turns dated snapshot rows (one per crawl or month) into a newest-first
history with month-over-month deltas.

The delta of an entry is its metric minus the same metric of the next
older entry, so the oldest entry always carries zero change.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Sequence, Tuple

from src.mapping.coerce import parse_date_cell, round2
from src.sheets.schema import BoundRow

# field name -> (output key, parser)
MetricMap = Dict[str, Tuple[str, Callable[[Any], float]]]


@dataclass
class ArchiveEntry:
    """One dated snapshot with its deltas against the previous snapshot."""
    date: date
    metrics: Dict[str, float] = field(default_factory=dict)
    changes: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "date": self.date.isoformat(),
            "label": self.date.strftime("%B %Y"),
        }
        result.update(self.metrics)
        result.update({f"{key}Change": value for key, value in self.changes.items()})
        return result


def compute_deltas(entries: List[ArchiveEntry]) -> List[ArchiveEntry]:
    """
    Fill in deltas on entries already sorted newest first.

    Each entry is compared with the one after it; the last (oldest) gets zeros.
    """
    for index, entry in enumerate(entries):
        older = entries[index + 1] if index + 1 < len(entries) else None
        entry.changes = {}
        for key, value in entry.metrics.items():
            if older is None:
                entry.changes[key] = 0
            else:
                delta = value - older.metrics.get(key, 0)
                entry.changes[key] = round2(delta) if isinstance(delta, float) else delta
    return entries


def build_archive(rows: Sequence[BoundRow], metrics: MetricMap, date_field: str = "date") -> List[ArchiveEntry]:
    """
    Build a newest-first archive from snapshot rows.

    Rows whose date cell does not parse are skipped.
    """
    entries: List[ArchiveEntry] = []
    for row in rows:
        snapshot_date = parse_date_cell(row.get(date_field))
        if snapshot_date is None:
            continue
        entries.append(ArchiveEntry(
            date=snapshot_date,
            metrics={key: parser(row.get(name)) for name, (key, parser) in metrics.items()},
        ))

    entries.sort(key=lambda e: e.date, reverse=True)
    return compute_deltas(entries)
