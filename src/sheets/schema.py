"""
Table Schemas

Each table is declared once as an ordered list of named fields. Binding a
schema to the table's header row resolves every field to its column offset,
so the rest of the code reads cells by name instead of by bare index.

A required field that is missing from the header raises SchemaMismatchError.
A missing table is not an error: it simply has no rows.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from src.errors import SchemaMismatchError
from src.sheets.store import LinkRow, Row, Workbook

logger = logging.getLogger(__name__)


def normalize_header(value: Any) -> str:
    """Header text compared case- and whitespace-insensitively."""
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip().lower()


@dataclass(frozen=True)
class Field:
    """A named column in a table."""
    name: str
    header: str
    aliases: Tuple[str, ...] = ()
    required: bool = True

    def matches(self, header_cell: Any) -> bool:
        normalized = normalize_header(header_cell)
        if not normalized:
            return False
        return normalized == normalize_header(self.header) or normalized in {
            normalize_header(a) for a in self.aliases
        }


@dataclass(frozen=True)
class TableSchema:
    """Ordered field list for one table."""
    table: str
    fields: Tuple[Field, ...]
    header_row: int = 1

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def bind(self, header: Sequence[Any]) -> "ColumnMap":
        """
        Resolve field offsets from a header row.

        Raises:
            SchemaMismatchError: if any required field has no matching header
        """
        offsets: Dict[str, int] = {}
        missing: List[str] = []

        for f in self.fields:
            index = next((i for i, cell in enumerate(header) if f.matches(cell)), None)
            if index is None:
                if f.required:
                    missing.append(f.header)
                continue
            offsets[f.name] = index

        if missing:
            raise SchemaMismatchError(self.table, missing)

        return ColumnMap(table=self.table, offsets=offsets, header=list(header))

    def with_table(self, table: str) -> "TableSchema":
        """Same fields under another table name (parallel client/competitor tables)."""
        return TableSchema(table=table, fields=self.fields, header_row=self.header_row)


@dataclass
class ColumnMap:
    """Field offsets resolved against a concrete header row."""
    table: str
    offsets: Dict[str, int]
    header: List[Any] = field(default_factory=list)

    def index(self, name: str) -> Optional[int]:
        return self.offsets.get(name)

    def has(self, name: str) -> bool:
        return name in self.offsets


class BoundRow:
    """A data row read through its schema."""

    __slots__ = ("columns", "values", "links", "row_number")

    def __init__(
        self,
        columns: ColumnMap,
        values: Row,
        links: Optional[LinkRow] = None,
        row_number: int = 0,
    ):
        self.columns = columns
        self.values = values
        self.links = links or []
        self.row_number = row_number

    def get(self, name: str, default: Any = None) -> Any:
        index = self.columns.index(name)
        if index is None or index >= len(self.values):
            return default
        return self.values[index]

    def at(self, index: int, default: Any = None) -> Any:
        """Cell by raw offset (used for dynamic columns such as month volumes)."""
        if index < 0 or index >= len(self.values):
            return default
        return self.values[index]

    def link(self, name: str) -> Optional[str]:
        """Rich-text hyperlink of a field's cell, if the store exposed one."""
        index = self.columns.index(name)
        if index is None or index >= len(self.links):
            return None
        return self.links[index]

    def is_blank(self) -> bool:
        return all(v is None or (isinstance(v, str) and not v.strip()) for v in self.values)

    def __repr__(self) -> str:
        return f"BoundRow({self.columns.table}#{self.row_number})"


@dataclass
class BoundTable:
    """A table read through its schema: header offsets plus data rows."""
    schema: TableSchema
    columns: ColumnMap
    rows: List[BoundRow]

    def __iter__(self) -> Iterator[BoundRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


def read_table(
    workbook: Workbook,
    schema: TableSchema,
    with_links: bool = False,
) -> Optional[BoundTable]:
    """
    Read and bind a whole table.

    Returns None when the table does not exist. Blank rows are skipped.
    """
    raw = workbook.read(schema.table)
    if raw is None:
        logger.debug(f"Table '{schema.table}' absent")
        return None
    if len(raw) < schema.header_row:
        return BoundTable(schema=schema, columns=ColumnMap(schema.table, {}), rows=[])

    header = raw[schema.header_row - 1]
    columns = schema.bind(header)

    links: List[LinkRow] = []
    if with_links:
        links = workbook.read_links(schema.table) or []

    rows: List[BoundRow] = []
    for offset, values in enumerate(raw[schema.header_row:], start=schema.header_row):
        row_links = links[offset] if offset < len(links) else None
        row = BoundRow(columns, values, row_links, row_number=offset + 1)
        if row.is_blank():
            continue
        rows.append(row)

    logger.debug(f"Read {len(rows)} rows from '{schema.table}'")
    return BoundTable(schema=schema, columns=columns, rows=rows)


def read_rows(workbook: Workbook, schema: TableSchema, with_links: bool = False) -> List[BoundRow]:
    """Rows of a table, or an empty list when the table is absent."""
    table = read_table(workbook, schema, with_links=with_links)
    return table.rows if table is not None else []
