"""Common sink types."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class WriteResult:
    """Outcome of one sink write.

    Attributes:
        sink: Sink name (csv, excel, google_sheets)
        target: File name or sheet name written
        rows_written: Data rows written, header excluded
    """
    sink: str
    target: str
    rows_written: int

    def to_dict(self) -> Dict[str, Any]:
        return {"sink": self.sink, "target": self.target, "rowsWritten": self.rows_written}
