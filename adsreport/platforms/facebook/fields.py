"""
Facebook Graph API field definitions.
"""

from typing import Any, List

from facebook_business.adobjects.adaccount import AdAccount
from facebook_business.adobjects.adset import AdSet
from facebook_business.adobjects.adsinsights import AdsInsights
from facebook_business.adobjects.campaign import Campaign
from facebook_business.adobjects.user import User

fields_user = [
    User.Field.id,
    User.Field.name,
    User.Field.email,
]

fields_account_info = [
    AdAccount.Field.id,
    AdAccount.Field.name,
    AdAccount.Field.account_id,
    AdAccount.Field.account_status,
]

fields_ads_campaign = [
    Campaign.Field.id,
    Campaign.Field.name,
    Campaign.Field.objective,
    Campaign.Field.buying_type,
    Campaign.Field.bid_strategy,
]

fields_ads_adset = [
    AdSet.Field.id,
    AdSet.Field.name,
    AdSet.Field.bid_strategy,
    AdSet.Field.campaign_id,
]

fields_campaign_insight = [
    AdsInsights.Field.campaign_id,
    AdsInsights.Field.campaign_name,
    AdsInsights.Field.objective,
    AdsInsights.Field.date_start,
    AdsInsights.Field.date_stop,
    AdsInsights.Field.spend,
    AdsInsights.Field.impressions,
    AdsInsights.Field.clicks,
    AdsInsights.Field.outbound_clicks,
    AdsInsights.Field.actions,
    AdsInsights.Field.reach,
]

fields_ad_insight = [
    AdsInsights.Field.ad_id,
    AdsInsights.Field.ad_name,
    AdsInsights.Field.adset_id,
    AdsInsights.Field.campaign_id,
    AdsInsights.Field.date_start,
    AdsInsights.Field.date_stop,
    AdsInsights.Field.spend,
    AdsInsights.Field.impressions,
    AdsInsights.Field.clicks,
    AdsInsights.Field.outbound_clicks,
    AdsInsights.Field.reach,
    AdsInsights.Field.actions,
    AdsInsights.Field.action_values,
]


def normalize_fields(fields: List[Any]) -> List[str]:
    """Normalize a field list to strings.

    SDK Field attributes are plain strings, but anything carrying a ``name``
    attribute is accepted too.

    Args:
        fields: List of field names (strings or Field objects)

    Returns:
        List of field names as strings
    """
    normalized = []
    for field in fields:
        if isinstance(field, str):
            normalized.append(field)
        elif hasattr(field, "name"):
            normalized.append(field.name)
        else:
            normalized.append(str(field))
    return normalized


def join_fields(fields: List[Any]) -> str:
    """Comma-separated ``fields`` query value."""
    return ",".join(normalize_fields(fields))
