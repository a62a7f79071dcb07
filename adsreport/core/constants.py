"""Constants and enumerations for the adsreport package.

This module centralizes all magic strings, numbers, and enumerations
to improve maintainability and avoid duplication.
"""

from enum import Enum
from typing import Final


# Date formats
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"
EXCEL_DATE_FORMAT: Final[str] = "yyyy-mm-dd"

# API constants
DEFAULT_PAGE_SIZE: Final[int] = 500
REQUEST_TIMEOUT_SECONDS: Final[int] = 30

# Default string values for canonical rows
DEFAULT_METRIC: Final[str] = "0"
UNKNOWN: Final[str] = "Unknown"
DEFAULT_BUYING_TYPE: Final[str] = "AUCTION"


class ActionType(Enum):
    """Closed vocabulary of conversion events read from insight actions."""

    LINK_CLICK = "link_click"
    LANDING_PAGE_VIEW = "landing_page_view"
    VIEW_CONTENT = "view_content"
    ADD_TO_WISHLIST = "add_to_wishlist"
    ADD_TO_CART = "add_to_cart"
    INITIATE_CHECKOUT = "initiate_checkout"
    ADD_PAYMENT_INFO = "add_payment_info"
    PURCHASE = "purchase"
    LEAD = "lead"
    CONTACT = "contact"

    @classmethod
    def from_tag(cls, tag: str):
        """Return the member for an upstream tag, or None for unknown tags."""
        try:
            return cls(tag)
        except ValueError:
            return None


class InsightLevel(Enum):
    """Aggregation level of an insight record."""

    AD = "ad"
    CAMPAIGN = "campaign"


class RowType(Enum):
    """Value of the ``Type`` column in unified and metric sheets."""

    AD = "Ad"
    CAMPAIGN = "Campaign"


class ExportFormat(Enum):
    """File formats served by the export endpoint."""

    CSV = "csv"
    EXCEL = "excel"


class SheetName(Enum):
    """Worksheets maintained in the reporting spreadsheet."""

    MARKETING_API = "MarketingAPI"
    ADS = "Ads"
    CAMPAIGNS = "Campaigns"
    PERFORMANCE_METRICS = "PerformanceMetrics"


# Export content types and file names
CSV_CONTENT_TYPE: Final[str] = "text/csv"
XLSX_CONTENT_TYPE: Final[str] = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)
EXPORT_BASENAME: Final[str] = "facebook-ads-data"
EXCEL_SHEET_TITLE: Final[str] = "Facebook Ads"

# Google Sheets
SHEETS_SCOPES: Final[tuple] = ("https://www.googleapis.com/auth/spreadsheets",)
SHEETS_VALUE_INPUT_OPTION: Final[str] = "USER_ENTERED"
GOOGLE_TOKEN_URI: Final[str] = "https://oauth2.googleapis.com/token"

# Looker Studio Linking API
LOOKER_CREATE_URL: Final[str] = "https://lookerstudio.google.com/reporting/create"
LOOKER_REPORT_NAME: Final[str] = "Facebook Ads Data"

# Permissions a token must carry to read ad accounts
REQUIRED_PERMISSIONS: Final[tuple] = (
    "ads_management",
    "ads_read",
    "business_management",
)

# Environment variable names
ENV_CONFIG_FILE: Final[str] = "REPORT_CONFIG_FILE"
ENV_FACEBOOK_API_VERSION: Final[str] = "FACEBOOK_API_VERSION"
ENV_FACEBOOK_GRAPH_URL: Final[str] = "FACEBOOK_GRAPH_URL"
ENV_FACEBOOK_PAGE_SIZE: Final[str] = "FACEBOOK_PAGE_SIZE"
ENV_FACEBOOK_TOKEN_IN_QUERY: Final[str] = "FACEBOOK_TOKEN_IN_QUERY"
ENV_FACEBOOK_ACCESS_TOKEN: Final[str] = "FACEBOOK_ACCESS_TOKEN"
ENV_REQUEST_TIMEOUT: Final[str] = "REQUEST_TIMEOUT_SECONDS"
ENV_GOOGLE_SERVICE_ACCOUNT_EMAIL: Final[str] = "GOOGLE_SERVICE_ACCOUNT_EMAIL"
ENV_GOOGLE_PRIVATE_KEY: Final[str] = "GOOGLE_PRIVATE_KEY"
ENV_GOOGLE_SHEETS_ID: Final[str] = "GOOGLE_SHEETS_ID"
ENV_LOG_LEVEL: Final[str] = "LOG_LEVEL"
ENV_LOG_FILE: Final[str] = "LOG_FILE"
ENV_CORS_ORIGINS: Final[str] = "CORS_ORIGINS"

# Logging configuration
LOG_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
LOG_LEVEL_DEFAULT: Final[str] = "INFO"
LOG_LEVEL_DEBUG: Final[str] = "DEBUG"
