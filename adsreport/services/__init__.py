"""Export services."""

from adsreport.services.export_service import (
    ExportFile,
    SheetsSyncService,
    SyncResult,
    export_report,
    parse_export_format,
)

__all__ = ["ExportFile", "SheetsSyncService", "SyncResult", "export_report", "parse_export_format"]
