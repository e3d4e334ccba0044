"""
Spreadsheet Access

Row store abstraction, backends, and the schema layer that maps
header names to column offsets.
"""

from .store import RowStore, Workbook, InMemoryRowStore, InMemoryWorkbook
from .schema import (
    Field,
    TableSchema,
    ColumnMap,
    BoundRow,
    BoundTable,
    read_table,
    read_rows,
    normalize_header,
)

__all__ = [
    "RowStore",
    "Workbook",
    "InMemoryRowStore",
    "InMemoryWorkbook",
    "Field",
    "TableSchema",
    "ColumnMap",
    "BoundRow",
    "BoundTable",
    "read_table",
    "read_rows",
    "normalize_header",
]
