"""
Row Store Abstraction

The spreadsheet backend is addressed as a key-value row store:
a workbook is opened by id, and its tables are read by name and row range.
Each row is an ordered list of untyped cells (str, int, float, bool,
date/datetime or None).

A table that does not exist reads as None. Callers treat that as
"no data" rather than an error.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

Row = List[Any]
LinkRow = List[Optional[str]]


class Workbook(ABC):
    """A single opened workbook."""

    workbook_id: str

    @abstractmethod
    def read(
        self,
        table: str,
        start_row: int = 1,
        end_row: Optional[int] = None,
    ) -> Optional[List[Row]]:
        """
        Read rows from a table.

        Args:
            table: Table (sheet) name
            start_row: First row to return, 1-based and inclusive
            end_row: Last row to return, inclusive (None = to the end)

        Returns:
            List of rows, or None if the table does not exist
        """

    def read_links(
        self,
        table: str,
        start_row: int = 1,
        end_row: Optional[int] = None,
    ) -> Optional[List[LinkRow]]:
        """
        Read the rich-text hyperlink of each cell, parallel to read().

        Backends without hyperlink support return None.
        """
        return None


class RowStore(ABC):
    """Opens workbooks by their opaque identifier."""

    @abstractmethod
    def open(self, workbook_id: str) -> Workbook:
        """Open a workbook. Raises RowStoreError if it cannot be reached."""


def _slice(rows: Sequence[Any], start_row: int, end_row: Optional[int]) -> List[Any]:
    start = max(start_row, 1) - 1
    end = None if end_row is None else max(end_row, 0)
    return [list(r) for r in rows[start:end]]


class InMemoryWorkbook(Workbook):
    """Workbook backed by plain Python lists."""

    def __init__(
        self,
        workbook_id: str,
        tables: Dict[str, Sequence[Sequence[Any]]],
        links: Optional[Dict[str, Sequence[Sequence[Optional[str]]]]] = None,
    ):
        self.workbook_id = workbook_id
        self._tables = {name: [list(r) for r in rows] for name, rows in tables.items()}
        self._links = {name: [list(r) for r in rows] for name, rows in (links or {}).items()}

    def read(self, table, start_row=1, end_row=None):
        rows = self._tables.get(table)
        if rows is None:
            return None
        return _slice(rows, start_row, end_row)

    def read_links(self, table, start_row=1, end_row=None):
        rows = self._links.get(table)
        if rows is None:
            return None
        return _slice(rows, start_row, end_row)


class InMemoryRowStore(RowStore):
    """
    Row store holding workbooks in memory.

    Used by the test suite and for local fixtures. Opening an unknown
    workbook id yields an empty workbook, so every table reads as absent.
    """

    def __init__(self, workbooks: Optional[Dict[str, InMemoryWorkbook]] = None):
        self._workbooks: Dict[str, InMemoryWorkbook] = dict(workbooks or {})

    def add(
        self,
        workbook_id: str,
        tables: Dict[str, Sequence[Sequence[Any]]],
        links: Optional[Dict[str, Sequence[Sequence[Optional[str]]]]] = None,
    ) -> InMemoryWorkbook:
        workbook = InMemoryWorkbook(workbook_id, tables, links)
        self._workbooks[workbook_id] = workbook
        return workbook

    def open(self, workbook_id: str) -> Workbook:
        workbook = self._workbooks.get(workbook_id)
        if workbook is None:
            logger.warning(f"Workbook {workbook_id} not found in memory store")
            return InMemoryWorkbook(workbook_id, {})
        return workbook
