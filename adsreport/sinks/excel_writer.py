"""XLSX serialization of a header + rows matrix with openpyxl."""

from datetime import datetime
from io import BytesIO
from typing import Any, Iterable, Optional, Sequence

from loguru import logger
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils.exceptions import IllegalCharacterError

from adsreport.core.constants import (
    DATE_FORMAT_ISO,
    EXCEL_DATE_FORMAT,
    EXCEL_SHEET_TITLE,
    EXPORT_BASENAME,
    XLSX_CONTENT_TYPE,
    ExportFormat,
)
from adsreport.core.exceptions import SinkWriteError
from adsreport.sinks.base import WriteResult
from adsreport.utils.numbers import coerce_columns


def _as_date(value: Any):
    """Parse a YYYY-MM-DD cell into a date, or None."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT_ISO).date()
    except ValueError:
        return None


def _clean(value: Any) -> Any:
    """Strip control characters openpyxl refuses to store."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


class ExcelWriter:
    """Serializes a matrix into a single-sheet workbook.

    The date column (the first column unless ``date_header`` names another)
    holds the report date: cells that parse as a valid date are stored as
    dates formatted ``yyyy-mm-dd``. Columns named in ``numeric_headers``
    are stored as numbers.
    """

    name = ExportFormat.EXCEL.value
    content_type = XLSX_CONTENT_TYPE
    filename = f"{EXPORT_BASENAME}.xlsx"

    def __init__(
        self,
        sheet_title: str = EXCEL_SHEET_TITLE,
        numeric_headers: Optional[Iterable[str]] = None,
        date_header: Optional[str] = None,
    ):
        self.sheet_title = sheet_title
        self.numeric_headers = list(numeric_headers or [])
        self.date_header = date_header
        self.last_result = None

    def _date_column(self, matrix: Sequence[Sequence[Any]]) -> int:
        """1-based index of the date column."""
        if self.date_header and matrix and self.date_header in matrix[0]:
            return list(matrix[0]).index(self.date_header) + 1
        return 1

    def write(self, matrix: Sequence[Sequence[Any]]) -> bytes:
        """Build the workbook.

        Args:
            matrix: Header row followed by data rows

        Returns:
            XLSX file content

        Raises:
            SinkWriteError: If the workbook cannot be built
        """
        if self.numeric_headers:
            matrix = coerce_columns(matrix, self.numeric_headers)

        try:
            workbook = Workbook()
            sheet = workbook.active
            sheet.title = self.sheet_title

            date_column = self._date_column(matrix)
            for index, row in enumerate(matrix):
                sheet.append([_clean(v) for v in row])
                if index == 0 or len(row) < date_column:
                    continue
                cell = sheet.cell(row=index + 1, column=date_column)
                day = _as_date(cell.value)
                if day is not None:
                    cell.value = day
                    cell.number_format = EXCEL_DATE_FORMAT

            buffer = BytesIO()
            workbook.save(buffer)
        except (ValueError, TypeError, IllegalCharacterError) as e:
            raise SinkWriteError(
                "Failed to build Excel workbook",
                sink=self.name,
                target=self.filename,
                details={"error": str(e)},
            ) from e

        self.last_result = WriteResult(self.name, self.filename, max(len(matrix) - 1, 0))
        logger.debug(f"Excel export: {self.last_result.rows_written} rows")
        return buffer.getvalue()
