"""
Month Column Selection

Services tables carry one search-volume column per month, headed
"Month YYYY". The current month is the newest column that actually has
data for the selected rows; the previous month is the next older such
column. Columns left entirely blank are skipped so a freshly added, not yet
filled month is never reported as current.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional, Sequence, Tuple

from src.mapping.coerce import has_numeric_value, parse_date_cell
from src.sheets.schema import BoundRow


@dataclass(frozen=True)
class MonthColumn:
    index: int
    month: date
    header: str

    @property
    def label(self) -> str:
        return self.month.strftime("%B %Y")


def discover_month_columns(header: Sequence[Any]) -> List[MonthColumn]:
    """
    Header cells that parse as dates, newest first.

    Ties (two columns for the same month) keep the rightmost column first.
    """
    columns = []
    for index, cell in enumerate(header):
        month = parse_date_cell(cell)
        if month is None:
            continue
        columns.append(MonthColumn(index=index, month=month, header=str(cell).strip()))

    columns.sort(key=lambda c: (c.month, c.index), reverse=True)
    return columns


def column_has_data(rows: Sequence[BoundRow], column: MonthColumn) -> bool:
    """True when at least one row holds a number (zero included) in the column."""
    return any(has_numeric_value(row.at(column.index)) for row in rows)


def select_months(
    rows: Sequence[BoundRow],
    columns: Sequence[MonthColumn],
) -> Tuple[Optional[MonthColumn], Optional[MonthColumn]]:
    """
    Pick (current, previous) month columns for a set of rows.

    Either may be None when not enough columns hold data.
    """
    populated = (c for c in columns if column_has_data(rows, c))
    current = next(populated, None)
    previous = next(populated, None)
    return current, previous
