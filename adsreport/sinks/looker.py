"""Looker Studio deep link for the reporting spreadsheet.

Builds a Linking API ``reporting/create`` URL whose data source is the
unified sheet. The report layout travels JSON-encoded in the ``config``
query parameter.
"""

import json
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from loguru import logger

from adsreport.core.constants import LOOKER_CREATE_URL, LOOKER_REPORT_NAME, SheetName
from adsreport.sinks.google_sheets import GoogleSheetsSink

DEFAULT_DIMENSIONS: List[str] = ["Date", "Type", "Campaing Name", "Ad Set Name", "Ad Name"]
DEFAULT_METRICS: List[str] = [
    "Amount Spent",
    "Impressions",
    "Reach",
    "Clicks (all)",
    "Link Clicks",
    "Purchase",
    "Purchase Conversion Value",
    "Leads",
]


def report_layout(
    sheet_name: str = SheetName.MARKETING_API.value,
    dimensions: Optional[List[str]] = None,
    metrics: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Default report layout: one table over the unified sheet."""
    return {
        "dataSource": {"type": "googleSheets", "sheet": sheet_name},
        "dimensions": dimensions or list(DEFAULT_DIMENSIONS),
        "metrics": metrics or list(DEFAULT_METRICS),
        "dateRangeDimension": "Date",
    }


def build_looker_url(
    spreadsheet_id: str,
    worksheet_id: Any,
    report_name: str = LOOKER_REPORT_NAME,
    layout: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Build a Looker Studio ``reporting/create`` URL.

    Args:
        spreadsheet_id: Google Sheets spreadsheet id
        worksheet_id: Numeric sheet id (gid) of the data sheet
        report_name: Name of the created report
        layout: Report layout, JSON-encoded into ``config``

    Returns:
        Absolute URL
    """
    params = {
        "ds.connector": "googleSheets",
        "ds.spreadsheetId": spreadsheet_id,
        "ds.worksheetId": str(worksheet_id),
        "r.reportName": report_name,
        "config": json.dumps(layout or report_layout(), separators=(",", ":")),
    }
    return f"{LOOKER_CREATE_URL}?{urlencode(params)}"


def looker_url_for(sink: GoogleSheetsSink, sheet_name: str = SheetName.MARKETING_API.value) -> str:
    """Resolve the worksheet id of ``sheet_name`` (first sheet as fallback) and build the URL.

    Raises:
        SinkWriteError: If the spreadsheet cannot be read or has no sheets
    """
    worksheet_id = sink.get_worksheet_id(sheet_name)
    logger.info(f"Looker Studio data source: sheet '{sheet_name}' (worksheet id {worksheet_id})")
    return build_looker_url(sink.spreadsheet_id, worksheet_id, layout=report_layout(sheet_name))
