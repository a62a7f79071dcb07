"""Google Sheets sink.

Each write replaces the sheet's contents with a full snapshot: ensure the
sheet exists, overwrite the header row, clear every row below it, then
append the new rows. Writes are not transactional and the last writer wins.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from loguru import logger

from adsreport.core.config import GoogleSheetsConfig
from adsreport.core.constants import GOOGLE_TOKEN_URI, SHEETS_VALUE_INPUT_OPTION
from adsreport.core.exceptions import SinkWriteError
from adsreport.sinks.base import WriteResult
from adsreport.utils.numbers import coerce_columns

SINK_NAME = "google_sheets"

# Failures of a Sheets call: API errors, credential refresh and transport errors
SHEETS_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)


def build_sheets_service(config: GoogleSheetsConfig):
    """Build a Sheets API v4 service from service-account settings.

    Raises:
        ConfigurationError: If a credential or the spreadsheet id is missing
    """
    config.require()
    credentials = service_account.Credentials.from_service_account_info(
        {
            "type": "service_account",
            "client_email": config.service_account_email,
            "private_key": config.private_key,
            "token_uri": GOOGLE_TOKEN_URI,
        },
        scopes=list(config.scopes),
    )
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


def column_letter(index: int) -> str:
    """A1 column letter of a 1-based column index (1 -> A, 27 -> AA)."""
    letters = ""
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def a1(sheet_name: str, cells: str) -> str:
    """Quoted A1 range, e.g. 'Ads'!A2:AF."""
    escaped = sheet_name.replace("'", "''")
    return f"'{escaped}'!{cells}"


class GoogleSheetsSink:
    """Writes header + rows matrices to named sheets of one spreadsheet.

    Attributes:
        service: Sheets API v4 service (googleapiclient Resource)
        spreadsheet_id: Target spreadsheet
    """

    def __init__(self, service: Any, spreadsheet_id: str):
        self.service = service
        self.spreadsheet_id = spreadsheet_id

    @classmethod
    def from_config(cls, config: GoogleSheetsConfig) -> "GoogleSheetsSink":
        return cls(build_sheets_service(config), config.spreadsheet_id)

    def _error(self, action: str, target: Optional[str], error: Exception) -> SinkWriteError:
        status = getattr(getattr(error, "resp", None), "status", None)
        logger.error(f"Google Sheets {action} failed for {target or self.spreadsheet_id}: {error}")
        return SinkWriteError(
            f"Google Sheets {action} failed: {error}",
            sink=SINK_NAME,
            target=target,
            details={"status": status, "spreadsheet_id": self.spreadsheet_id},
        )

    def _execute(self, request: Any, action: str, target: Optional[str] = None) -> Dict[str, Any]:
        """Run a Sheets API request, mapping any failure to SinkWriteError."""
        try:
            return request.execute()
        except SHEETS_ERRORS as e:
            raise self._error(action, target, e) from e

    def get_spreadsheet(self) -> Dict[str, Any]:
        """Spreadsheet metadata without grid data."""
        request = self.service.spreadsheets().get(spreadsheetId=self.spreadsheet_id, includeGridData=False)
        return self._execute(request, "read")

    @staticmethod
    def _sheet_entries(spreadsheet: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [
            {
                "title": s.get("properties", {}).get("title"),
                "sheetId": s.get("properties", {}).get("sheetId"),
                "index": s.get("properties", {}).get("index"),
            }
            for s in spreadsheet.get("sheets") or []
        ]

    def list_sheets(self) -> List[Dict[str, Any]]:
        """Title, sheet id and index of every sheet."""
        return self._sheet_entries(self.get_spreadsheet())

    def status(self) -> Dict[str, Any]:
        """Spreadsheet title and sheet list."""
        spreadsheet = self.get_spreadsheet()
        return {
            "success": True,
            "spreadsheetTitle": spreadsheet.get("properties", {}).get("title"),
            "spreadsheetId": self.spreadsheet_id,
            "sheets": self._sheet_entries(spreadsheet),
        }

    def get_worksheet_id(self, sheet_name: str) -> int:
        """Numeric id of a sheet, falling back to the first sheet.

        Raises:
            SinkWriteError: If the spreadsheet has no sheets
        """
        sheets = self.list_sheets()
        if not sheets:
            raise SinkWriteError("Spreadsheet contains no sheets", sink=SINK_NAME, target=sheet_name)

        for sheet in sheets:
            if (sheet["title"] or "").strip() == sheet_name:
                return sheet["sheetId"]

        logger.warning(f"Sheet '{sheet_name}' not found, using '{sheets[0]['title']}'")
        return sheets[0]["sheetId"]

    def ensure_sheet(self, sheet_name: str) -> bool:
        """Create the sheet if it does not exist.

        Returns:
            True if the sheet was created
        """
        titles = {s["title"] for s in self.list_sheets()}
        if sheet_name in titles:
            return False

        body = {"requests": [{"addSheet": {"properties": {"title": sheet_name}}}]}
        request = self.service.spreadsheets().batchUpdate(spreadsheetId=self.spreadsheet_id, body=body)
        self._execute(request, "addSheet", sheet_name)

        logger.info(f"Created sheet '{sheet_name}'")
        return True

    def write_header(self, sheet_name: str, headers: Sequence[str]) -> None:
        request = self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=a1(sheet_name, "A1"),
            valueInputOption=SHEETS_VALUE_INPUT_OPTION,
            body={"values": [list(headers)]},
        )
        self._execute(request, "header update", sheet_name)

    def clear_rows(self, sheet_name: str, width: int) -> None:
        """Clear every row below the header, across ``width`` columns."""
        last_column = column_letter(max(width, 1))
        request = self.service.spreadsheets().values().clear(
            spreadsheetId=self.spreadsheet_id,
            range=a1(sheet_name, f"A2:{last_column}"),
            body={},
        )
        self._execute(request, "clear", sheet_name)

    def append_rows(self, sheet_name: str, rows: Sequence[Sequence[Any]]) -> int:
        if not rows:
            return 0
        request = self.service.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=a1(sheet_name, "A2"),
            valueInputOption=SHEETS_VALUE_INPUT_OPTION,
            body={"values": [list(r) for r in rows]},
        )
        self._execute(request, "append", sheet_name)
        return len(rows)

    def read_values(self, sheet_name: str) -> List[List[Any]]:
        """All values of a sheet (header included)."""
        request = self.service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id, range=a1(sheet_name, "A:ZZ")
        )
        response = self._execute(request, "read", sheet_name)
        return response.get("values") or []

    def write(
        self,
        sheet_name: str,
        matrix: Sequence[Sequence[Any]],
        numeric_headers: Optional[Iterable[str]] = None,
    ) -> WriteResult:
        """Replace a sheet's contents with a header + rows matrix.

        Args:
            sheet_name: Target sheet (created if missing)
            matrix: Header row followed by data rows
            numeric_headers: Columns written as numbers

        Returns:
            WriteResult with the number of data rows written

        Raises:
            SinkWriteError: If any Sheets API call fails
        """
        if not matrix:
            raise SinkWriteError("Nothing to write: matrix has no header", sink=SINK_NAME, target=sheet_name)

        if numeric_headers:
            matrix = coerce_columns(matrix, numeric_headers)

        header, rows = list(matrix[0]), matrix[1:]
        self.ensure_sheet(sheet_name)
        self.write_header(sheet_name, header)
        self.clear_rows(sheet_name, len(header))
        written = self.append_rows(sheet_name, rows)

        logger.success(f"Wrote {written} rows to sheet '{sheet_name}'")
        return WriteResult(SINK_NAME, sheet_name, written)
