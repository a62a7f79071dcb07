"""Insight joiner.

Resolves each insight's parent campaign and ad set from id maps built once
per run. Missing parents become empty entities; joining never fails.
"""

from typing import Dict, Iterable, List

from adsreport.core.constants import InsightLevel
from adsreport.domain.models import AdSet, Campaign, Insight, JoinedRecord


class InsightJoiner:
    """Joins insights against campaign and ad set lookups.

    Example:
        >>> joiner = InsightJoiner(campaigns, ad_sets)
        >>> records = joiner.join_all(ad_insights)
    """

    def __init__(self, campaigns: Iterable[Campaign], ad_sets: Iterable[AdSet]):
        # Later duplicates overwrite earlier ones
        self.campaigns: Dict[str, Campaign] = {c.id: c for c in campaigns}
        self.ad_sets: Dict[str, AdSet] = {a.id: a for a in ad_sets}

    def join(self, insight: Insight) -> JoinedRecord:
        adset = AdSet.empty()
        if insight.level is InsightLevel.AD:
            adset = self.ad_sets.get(insight.adset_id, adset)

        campaign_id = insight.campaign_id or adset.campaign_id
        campaign = self.campaigns.get(campaign_id, Campaign.empty()) if campaign_id else Campaign.empty()

        return JoinedRecord(insight=insight, campaign=campaign, adset=adset)

    def join_all(self, insights: Iterable[Insight]) -> List[JoinedRecord]:
        return [self.join(insight) for insight in insights]


def join_insights(
    insights: Iterable[Insight],
    campaigns: Iterable[Campaign],
    ad_sets: Iterable[AdSet],
) -> List[JoinedRecord]:
    """Join insights with their parent campaign and ad set.

    Args:
        insights: Ad-level or campaign-level insights
        campaigns: All campaigns of the account
        ad_sets: All ad sets of the account

    Returns:
        One JoinedRecord per insight, in input order
    """
    return InsightJoiner(campaigns, ad_sets).join_all(insights)


def count_unresolved(records: Iterable[JoinedRecord]) -> Dict[str, int]:
    """Count records whose campaign or (ad-level) ad set was not found."""
    missing_campaigns = 0
    missing_ad_sets = 0
    for record in records:
        if not record.campaign.id:
            missing_campaigns += 1
        if record.level is InsightLevel.AD and not record.adset.id:
            missing_ad_sets += 1
    return {"missing_campaigns": missing_campaigns, "missing_ad_sets": missing_ad_sets}
