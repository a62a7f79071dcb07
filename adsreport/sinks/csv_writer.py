"""CSV serialization of a header + rows matrix."""

from typing import Any, Sequence

from loguru import logger

from adsreport.core.constants import CSV_CONTENT_TYPE, EXPORT_BASENAME, ExportFormat
from adsreport.sinks.base import WriteResult


def escape_field(value: Any) -> str:
    """
    Escape one CSV field.

    A field is quoted only when it contains a comma or a double quote;
    embedded quotes are doubled. None becomes an empty field.
    """
    if value is None:
        return ""
    text = str(value)
    if "," in text or '"' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


class CsvWriter:
    """Serializes a matrix to CSV text (fields joined by ``,``, rows by ``\\n``)."""

    name = ExportFormat.CSV.value
    content_type = CSV_CONTENT_TYPE
    filename = f"{EXPORT_BASENAME}.csv"

    def __init__(self):
        self.last_result = None

    def write(self, matrix: Sequence[Sequence[Any]]) -> str:
        text = "\n".join(",".join(escape_field(v) for v in row) for row in matrix)
        self.last_result = WriteResult(self.name, self.filename, max(len(matrix) - 1, 0))
        logger.debug(f"CSV export: {self.last_result.rows_written} rows")
        return text
