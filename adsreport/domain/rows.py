"""
Canonical row schemas consumed by every sink.

AdRow and CampaignRow are the two variants of the wide, fixed-schema output
record. Each column is declared once with its header and its default, so a
row can never miss a key: a None passed at construction is replaced by the
column default.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Union

from adsreport.core.constants import (
    DEFAULT_BUYING_TYPE,
    DEFAULT_METRIC,
    UNKNOWN,
    RowType,
)


def column(header: str, default: str = DEFAULT_METRIC, numeric: bool = True):
    """Declare a canonical column."""
    return field(default=default, metadata={"header": header, "numeric": numeric})


def label(header: str, default: str = ""):
    """Declare a descriptive (non numeric) canonical column."""
    return column(header, default=default, numeric=False)


@dataclass(frozen=True)
class CanonicalRow:
    """Behaviour shared by AdRow and CampaignRow."""

    row_type: ClassVar[RowType]

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                object.__setattr__(self, f.name, f.default)
            elif not isinstance(value, str):
                object.__setattr__(self, f.name, str(value))

    @classmethod
    def headers(cls) -> List[str]:
        return [f.metadata["header"] for f in fields(cls)]

    @classmethod
    def numeric_headers(cls) -> List[str]:
        return [f.metadata["header"] for f in fields(cls) if f.metadata["numeric"]]

    def to_dict(self) -> Dict[str, str]:
        """Header-keyed mapping in column order (the JSON shape of the API)."""
        return {f.metadata["header"]: getattr(self, f.name) for f in fields(self)}

    def to_values(self) -> List[str]:
        return [getattr(self, f.name) for f in fields(self)]


@dataclass(frozen=True)
class AdRow(CanonicalRow):
    """One ad on one day, with the full conversion funnel."""

    row_type: ClassVar[RowType] = RowType.AD

    date: str = label("Date")
    iso_week: str = label("ISO Week")
    month: str = label("Month")
    year: str = label("Year")
    ad_name: str = label("Ad Name", UNKNOWN)
    adset_name: str = label("Ad Set Name", UNKNOWN)
    campaign_name: str = label("Campaing Name", UNKNOWN)
    campaign_objective: str = label("Campaing Objective", UNKNOWN)
    buying_type: str = label("Buying Type", DEFAULT_BUYING_TYPE)
    bid_strategy: str = label("Bid Strategy", UNKNOWN)
    amount_spent: str = column("Amount Spent")
    reach: str = column("Reach")
    impressions: str = column("Impressions")
    clicks_all: str = column("Clicks (all)")
    link_clicks: str = column("Link Clicks")
    landing_page_views: str = column("Landing Page views")
    view_content: str = column("View Content")
    view_content_value: str = column("View Content Conversion Value")
    add_to_wishlist: str = column("Add To Wishlist")
    add_to_wishlist_value: str = column("Add To Wishlist Conversion Value")
    add_to_cart: str = column("Add To Cart")
    add_to_cart_value: str = column("Add To Cart Conversion Value")
    initiated_checkout: str = column("Initiated Checkout")
    initiated_checkout_value: str = column("Initiated Checkout Conversion Value")
    adds_payment_info: str = column("Adds Payment Info")
    add_payment_info_value: str = column("Add Payment Info Conversion Value")
    purchase: str = column("Purchase")
    purchase_value: str = column("Purchase Conversion Value")
    leads: str = column("Leads")
    lead_value: str = column("Lead Conversion Value")
    contact: str = column("Contact")
    contact_value: str = column("Contact Conversion Value")


@dataclass(frozen=True)
class CampaignRow(CanonicalRow):
    """One campaign on one day; reach/impressions/clicks/spend only."""

    row_type: ClassVar[RowType] = RowType.CAMPAIGN

    date: str = label("Date")
    iso_week: str = label("ISO Week")
    month: str = label("Month")
    year: str = label("Year")
    campaign_name: str = label("Campaing Name", UNKNOWN)
    campaign_objective: str = label("Campaing Objective", UNKNOWN)
    buying_type: str = label("Buying Type", DEFAULT_BUYING_TYPE)
    bid_strategy: str = label("Bid Strategy")
    amount_spent: str = column("Amount Spent")
    reach: str = column("Reach")
    impressions: str = column("Impressions")
    clicks_all: str = column("Clicks (all)")
    link_clicks: str = column("Link Clicks")
    landing_page_views: str = column("Landing Page views")


Row = Union[AdRow, CampaignRow]

TYPE_HEADER = "Type"
DATE_HEADER = "Date"
UNIFIED_HEADERS: List[str] = [TYPE_HEADER] + AdRow.headers()

# Ad-only identity columns; blank for campaign rows in the unified schema
_AD_IDENTITY_FIELDS = ("ad_name", "adset_name")


def to_unified_values(row: Row) -> List[Any]:
    """Lay a row out on the unified (ad-shaped) schema, led by a Type column.

    Campaign rows keep the columns they share with ad rows; ad identity
    columns are blank and every ad-only metric is 0.
    """
    if isinstance(row, AdRow):
        return [row.row_type.value] + row.to_values()

    shared = {f.name for f in fields(row)}
    values: List[Any] = [row.row_type.value]
    for f in fields(AdRow):
        if f.name in shared:
            values.append(getattr(row, f.name))
        elif f.name in _AD_IDENTITY_FIELDS:
            values.append("")
        else:
            values.append(0)
    return values


@dataclass(frozen=True)
class PerformanceMetricRow:
    """Aggregated funnel totals and ratios for one (date, type, campaign)."""

    date: str = field(metadata={"header": "Date"})
    type: str = field(metadata={"header": "Type"})
    campaign: str = field(metadata={"header": "Campaign"})
    spend: float = field(default=0.0, metadata={"header": "Spend"})
    impressions: float = field(default=0.0, metadata={"header": "Impressions"})
    clicks: float = field(default=0.0, metadata={"header": "Clicks"})
    link_clicks: float = field(default=0.0, metadata={"header": "Link Clicks"})
    landing_page_views: float = field(default=0.0, metadata={"header": "Landing Page Views"})
    add_to_cart: float = field(default=0.0, metadata={"header": "Add To Cart"})
    initiated_checkout: float = field(default=0.0, metadata={"header": "Initiated Checkout"})
    purchases: float = field(default=0.0, metadata={"header": "Purchases"})
    purchase_value: float = field(default=0.0, metadata={"header": "Purchase Value"})
    leads: float = field(default=0.0, metadata={"header": "Leads"})
    roas: float = field(default=0.0, metadata={"header": "ROAS"})
    roi: float = field(default=0.0, metadata={"header": "ROI"})
    cpa: float = field(default=0.0, metadata={"header": "CPA"})
    ctr: float = field(default=0.0, metadata={"header": "CTR"})
    cpc: float = field(default=0.0, metadata={"header": "CPC"})
    cpm: float = field(default=0.0, metadata={"header": "CPM"})
    conversion_rate: float = field(default=0.0, metadata={"header": "Conversion Rate"})
    cost_per_lead: float = field(default=0.0, metadata={"header": "Cost Per Lead"})

    @classmethod
    def headers(cls) -> List[str]:
        return [f.metadata["header"] for f in fields(cls)]

    @classmethod
    def attribute_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def to_values(self) -> List[Any]:
        return [getattr(self, f.name) for f in fields(self)]
