"""
Google Sheets Row Store

Reads workbooks through gspread with service-account credentials.

Values are read in their formatted (display) form, so booleans arrive as
"TRUE"/"FALSE" strings and dates as their displayed text. The mapping layer
coerces both. Hyperlinks are read separately from the grid metadata.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

import gspread
import requests
from google.auth.exceptions import TransportError
from google.oauth2.service_account import Credentials

from src.errors import RowStoreError
from src.sheets.store import LinkRow, Row, RowStore, Workbook
from src.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]

LINK_FIELDS = "sheets(data(rowData(values(hyperlink,textFormatRuns(format(link(uri)))))))"

# Failures that make a single table unreadable; the table is then treated as absent
READ_ERRORS = (gspread.exceptions.APIError, requests.exceptions.RequestException, TransportError)


def build_credentials(settings: Settings) -> Credentials:
    """Build service-account credentials from inline JSON or a key file."""
    inline = (settings.GOOGLE_SERVICE_ACCOUNT_JSON or "").strip()
    keyfile = (settings.GOOGLE_APPLICATION_CREDENTIALS or "").strip()

    if inline:
        try:
            info = json.loads(inline)
        except json.JSONDecodeError as e:
            raise RowStoreError("GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON") from e
        return Credentials.from_service_account_info(info, scopes=SCOPES)

    if keyfile:
        if not os.path.exists(keyfile):
            raise RowStoreError(f"Service account key file not found: {keyfile}")
        return Credentials.from_service_account_file(keyfile, scopes=SCOPES)

    raise RowStoreError(
        "No service account credentials configured. Set GOOGLE_SERVICE_ACCOUNT_JSON "
        "or GOOGLE_APPLICATION_CREDENTIALS."
    )


def _cell_link(cell: Dict[str, Any]) -> Optional[str]:
    """Extract the link of a grid cell: whole-cell hyperlink first, then rich-text runs."""
    if not cell:
        return None
    if cell.get("hyperlink"):
        return cell["hyperlink"]
    for run in cell.get("textFormatRuns", []) or []:
        uri = ((run.get("format") or {}).get("link") or {}).get("uri")
        if uri:
            return uri
    return None


class GoogleSheetsWorkbook(Workbook):
    """A spreadsheet opened through gspread."""

    def __init__(self, spreadsheet: gspread.Spreadsheet):
        self.spreadsheet = spreadsheet
        self.workbook_id = spreadsheet.id

    def _worksheet(self, table: str) -> Optional[gspread.Worksheet]:
        try:
            return self.spreadsheet.worksheet(table)
        except gspread.exceptions.WorksheetNotFound:
            logger.debug(f"Sheet '{table}' not found in {self.workbook_id}")
            return None
        except READ_ERRORS as e:
            logger.warning(f"Failed to look up sheet '{table}' in {self.workbook_id}: {e}")
            return None

    def read(self, table, start_row=1, end_row=None) -> Optional[List[Row]]:
        worksheet = self._worksheet(table)
        if worksheet is None:
            return None

        last_row = end_row if end_row is not None else worksheet.row_count
        if last_row < start_row:
            return []

        try:
            return worksheet.get_values(f"{start_row}:{last_row}")
        except READ_ERRORS as e:
            logger.warning(f"Failed to read sheet '{table}' in {self.workbook_id}: {e}")
            return None

    def read_links(self, table, start_row=1, end_row=None) -> Optional[List[LinkRow]]:
        range_name = f"'{table}'!{start_row}:{end_row}" if end_row else f"'{table}'"
        try:
            metadata = self.spreadsheet.fetch_sheet_metadata(params={
                "includeGridData": "true",
                "ranges": [range_name],
                "fields": LINK_FIELDS,
            })
        except READ_ERRORS as e:
            logger.warning(f"Failed to read hyperlinks for '{table}' in {self.workbook_id}: {e}")
            return None

        sheets = metadata.get("sheets") or []
        if not sheets:
            return None

        data = sheets[0].get("data") or [{}]
        rows = data[0].get("rowData") or []
        links = [[_cell_link(cell) for cell in row.get("values", [])] for row in rows]

        # The grid request is not offset by start_row when reading a whole sheet
        if not end_row and start_row > 1:
            links = links[start_row - 1:]
        return links


class GoogleSheetsRowStore(RowStore):
    """Row store backed by Google Sheets."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[gspread.Client] = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> gspread.Client:
        if self._client is None:
            self._client = gspread.authorize(build_credentials(self.settings))
        return self._client

    def open(self, workbook_id: str) -> Workbook:
        try:
            spreadsheet = self.client.open_by_key(workbook_id)
        except gspread.exceptions.SpreadsheetNotFound as e:
            raise RowStoreError(f"Workbook not found: {workbook_id}") from e
        except READ_ERRORS as e:
            raise RowStoreError(f"Failed to open workbook {workbook_id}: {e}") from e

        logger.info(f"Opened workbook {workbook_id} ({spreadsheet.title})")
        return GoogleSheetsWorkbook(spreadsheet)
