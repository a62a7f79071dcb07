"""Export services.

Glue between an InsightsReport and the sinks: file downloads (CSV/XLSX)
and the multi-sheet Google Sheets snapshot.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from adsreport.core.constants import ExportFormat, SheetName
from adsreport.core.exceptions import SinkWriteError, ValidationError
from adsreport.core.protocols import MatrixWriter
from adsreport.domain.rows import DATE_HEADER, AdRow, CampaignRow
from adsreport.platforms.facebook.pipeline import InsightsReport
from adsreport.sinks.base import WriteResult
from adsreport.sinks.csv_writer import CsvWriter
from adsreport.sinks.excel_writer import ExcelWriter
from adsreport.sinks.google_sheets import GoogleSheetsSink
from adsreport.sinks.looker import looker_url_for
from adsreport.utils.aggregation import build_performance_metrics


@dataclass(frozen=True)
class ExportFile:
    """A serialized export ready to be downloaded."""
    content: Any
    content_type: str
    filename: str
    rows: int


def parse_export_format(value: Optional[str]) -> ExportFormat:
    """Validate the ``format`` query parameter (default csv).

    Raises:
        ValidationError: If the format is neither csv nor excel
    """
    try:
        return ExportFormat((value or ExportFormat.CSV.value).lower())
    except ValueError:
        raise ValidationError('Invalid format. Use "csv" or "excel".', field="format", details={"value": value})


def export_report(report: InsightsReport, export_format: ExportFormat) -> ExportFile:
    """Serialize the unified matrix of a report.

    Args:
        report: Pipeline output
        export_format: CSV or EXCEL

    Returns:
        ExportFile with content (str for CSV, bytes for XLSX)
    """
    matrix = report.unified_matrix()
    writer: MatrixWriter
    if export_format is ExportFormat.EXCEL:
        writer = ExcelWriter(numeric_headers=AdRow.numeric_headers(), date_header=DATE_HEADER)
    else:
        writer = CsvWriter()

    content = writer.write(matrix)
    rows = writer.last_result.rows_written
    logger.info(f"Exported {rows} rows as {export_format.value}")
    return ExportFile(content, writer.content_type, writer.filename, rows)


@dataclass
class SyncResult:
    """Per-sheet outcome of a Google Sheets snapshot."""

    results: List[WriteResult] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def row_counts(self) -> Dict[str, int]:
        return {r.target: r.rows_written for r in self.results}

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": self.ok, "rowCounts": self.row_counts()}
        if self.errors:
            body["errors"] = dict(self.errors)
        return body


class SheetsSyncService:
    """Writes every report sheet to the spreadsheet.

    Sheets are written independently: a failing sheet is recorded in the
    result and the remaining sheets are still written.
    """

    def __init__(self, sink: GoogleSheetsSink):
        self.sink = sink

    def _plan(self, report: InsightsReport) -> List[Tuple[str, Callable[[], List[List[Any]]], Sequence[str]]]:
        ad_numeric = AdRow.numeric_headers()
        return [
            (SheetName.MARKETING_API.value, report.unified_matrix, ad_numeric),
            (SheetName.ADS.value, report.ad_matrix, ad_numeric),
            (SheetName.CAMPAIGNS.value, report.campaign_matrix, CampaignRow.numeric_headers()),
            (
                SheetName.PERFORMANCE_METRICS.value,
                lambda: build_performance_metrics(report.unified_matrix()),
                (),
            ),
        ]

    def sync(self, report: InsightsReport) -> SyncResult:
        result = SyncResult()
        for sheet_name, build_matrix, numeric in self._plan(report):
            try:
                result.results.append(self.sink.write(sheet_name, build_matrix(), numeric_headers=numeric))
            except (SinkWriteError, ValueError) as e:
                logger.error(f"Sheet '{sheet_name}' failed: {e}")
                result.errors[sheet_name] = str(e)

        if result.ok:
            logger.success(f"Google Sheets snapshot written: {result.row_counts()}")
        else:
            logger.warning(f"Google Sheets snapshot incomplete, failed sheets: {list(result.errors)}")
        return result

    def looker_url(self) -> str:
        return looker_url_for(self.sink, SheetName.MARKETING_API.value)
