"""Export sinks: CSV, Excel, Google Sheets and Looker Studio."""

from adsreport.sinks.base import WriteResult
from adsreport.sinks.csv_writer import CsvWriter, escape_field
from adsreport.sinks.excel_writer import ExcelWriter
from adsreport.sinks.google_sheets import GoogleSheetsSink, build_sheets_service
from adsreport.sinks.looker import build_looker_url, looker_url_for

__all__ = [
    "WriteResult",
    "CsvWriter",
    "escape_field",
    "ExcelWriter",
    "GoogleSheetsSink",
    "build_sheets_service",
    "build_looker_url",
    "looker_url_for",
]
