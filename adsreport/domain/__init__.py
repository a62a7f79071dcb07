"""Domain layer: Graph entities, joined records and canonical rows."""

from adsreport.domain.models import (
    Campaign,
    AdSet,
    ActionStat,
    Insight,
    JoinedRecord,
    AdAccount,
)
from adsreport.domain.rows import (
    CanonicalRow,
    AdRow,
    CampaignRow,
    PerformanceMetricRow,
    UNIFIED_HEADERS,
    to_unified_values,
)

__all__ = [
    "Campaign",
    "AdSet",
    "ActionStat",
    "Insight",
    "JoinedRecord",
    "AdAccount",
    "CanonicalRow",
    "AdRow",
    "CampaignRow",
    "PerformanceMetricRow",
    "UNIFIED_HEADERS",
    "to_unified_values",
]
