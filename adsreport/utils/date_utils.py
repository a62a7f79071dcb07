"""Date helpers for report date dimensions and request validation."""
import math
from datetime import date, datetime, timedelta
from typing import Dict, Optional, Tuple

from adsreport.core.constants import DATE_FORMAT_ISO
from adsreport.core.exceptions import ValidationError


def parse_date(value: str, field: str = "date") -> date:
    """
    Parse a YYYY-MM-DD string.

    Args:
        value: Date string
        field: Name reported in the error

    Returns:
        date object

    Raises:
        ValidationError: If the value is not a valid calendar date
    """
    try:
        return datetime.strptime(value, DATE_FORMAT_ISO).date()
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid date for '{field}': expected YYYY-MM-DD",
            field=field,
            details={"value": value},
        )


def validate_date_range(since: str, until: str) -> Tuple[date, date]:
    """
    Validate an inclusive reporting range.

    Raises:
        ValidationError: If either bound is invalid or since is after until
    """
    start = parse_date(since, "from")
    end = parse_date(until, "to")
    if start > end:
        raise ValidationError(
            "'from' must not be after 'to'",
            field="from",
            details={"from": since, "to": until},
        )
    return start, end


def iso_week(day: date) -> str:
    """
    ISO-8601 week number of a date, zero-padded to two digits.

    The date is shifted to the Thursday of its week; the week number is the
    1-based count of 7-day blocks from January 1st of that Thursday's year.

    Example:
        2024-12-31 -> "01", 2025-04-10 -> "15"
    """
    thursday = day + timedelta(days=4 - day.isoweekday())
    year_start = date(thursday.year, 1, 1)
    days = (thursday - year_start).days
    week = math.ceil((days + 1) / 7)
    return f"{week:02d}"


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def month_name(day: date) -> str:
    """Full English month name, regardless of the process locale."""
    return MONTH_NAMES[day.month - 1]


def date_dimensions(value: str) -> Dict[str, str]:
    """
    Derive the report date columns from an insight ``date_start``.

    Args:
        value: Date in YYYY-MM-DD format

    Returns:
        Dictionary with date, iso_week, month and year. The derived columns
        are empty when the value is not a valid date.
    """
    try:
        day = datetime.strptime(value, DATE_FORMAT_ISO).date()
    except (TypeError, ValueError):
        return {"date": value or "", "iso_week": "", "month": "", "year": ""}

    return {
        "date": value,
        "iso_week": iso_week(day),
        "month": month_name(day),
        "year": str(day.year),
    }


def get_range_dates(days: int, today: Optional[date] = None) -> Tuple[str, str]:
    """
    Calculate date range from days ago to today.

    Args:
        days: Number of days to look back
        today: Reference day (defaults to the current date)

    Returns:
        Tuple of (since_date, until_date) in YYYY-MM-DD format

    Raises:
        ValidationError: If days is negative
    """
    if days < 0:
        raise ValidationError("Days must not be negative", field="days", details={"days": days})

    today = today or date.today()
    since = (today - timedelta(days=days)).strftime(DATE_FORMAT_ISO)
    return since, today.strftime(DATE_FORMAT_ISO)
