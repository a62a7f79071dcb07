"""Facebook Ads row normalizer.

Turns joined insight records into canonical report rows: AdRow for ad-level
insights, CampaignRow for campaign-level ones.

Facebook-specific transformations:
- Derive ISO week, month and year from ``date_start``
- Flatten the nested ``actions`` / ``action_values`` arrays
- Link clicks from ``actions``, falling back to ``outbound_clicks``
- Resolve names through campaign, then insight, then the column default

Example:
    >>> normalizer = RowNormalizer()
    >>> rows = normalizer.normalize_all(records)
"""

from typing import Dict, Iterable, List, Optional

from adsreport.core.constants import DEFAULT_METRIC, ActionType, InsightLevel
from adsreport.domain.models import ActionStat, JoinedRecord
from adsreport.domain.rows import AdRow, CampaignRow, Row
from adsreport.utils.date_utils import date_dimensions


class ActionIndex:
    """Lookup of one insight's action collection by action type.

    Built once per insight. The first entry of a type wins and unknown types
    are ignored; an empty value reads as missing.
    """

    def __init__(self, stats: Iterable[ActionStat]):
        self._values: Dict[ActionType, str] = {}
        for stat in stats:
            action = ActionType.from_tag(stat.action_type)
            if action is not None:
                self._values.setdefault(action, stat.value)

    def find(self, action: ActionType) -> Optional[str]:
        """Value of an action type, or None when absent or empty."""
        return self._values.get(action) or None

    def get(self, action: ActionType) -> str:
        return self.find(action) or DEFAULT_METRIC


class RowNormalizer:
    """Maps JoinedRecord to AdRow or CampaignRow.

    Column defaults are declared on the row classes; this class passes None
    for anything unresolved and lets the row fill in its default.
    """

    def normalize(self, record: JoinedRecord) -> Row:
        if record.level is InsightLevel.AD:
            return self._ad_row(record)
        return self._campaign_row(record)

    def normalize_all(self, records: Iterable[JoinedRecord]) -> List[Row]:
        return [self.normalize(record) for record in records]

    @staticmethod
    def _link_clicks(actions: ActionIndex, outbound: ActionIndex) -> Optional[str]:
        return actions.find(ActionType.LINK_CLICK) or outbound.find(ActionType.LINK_CLICK)

    def _common(self, record: JoinedRecord, actions: ActionIndex) -> Dict[str, Optional[str]]:
        """Columns shared by ad and campaign rows."""
        insight = record.insight
        campaign = record.campaign
        outbound = ActionIndex(insight.outbound_clicks)

        columns: Dict[str, Optional[str]] = dict(date_dimensions(insight.date_start))
        columns.update(
            campaign_name=campaign.name or insight.campaign_name or None,
            campaign_objective=campaign.objective or insight.objective or None,
            buying_type=campaign.buying_type or None,
            amount_spent=insight.spend or None,
            reach=insight.reach or None,
            impressions=insight.impressions or None,
            clicks_all=insight.clicks or None,
            link_clicks=self._link_clicks(actions, outbound),
            landing_page_views=actions.find(ActionType.LANDING_PAGE_VIEW),
        )
        return columns

    def _campaign_row(self, record: JoinedRecord) -> CampaignRow:
        actions = ActionIndex(record.insight.actions)
        return CampaignRow(
            bid_strategy=record.campaign.bid_strategy or None,
            **self._common(record, actions),
        )

    def _ad_row(self, record: JoinedRecord) -> AdRow:
        insight = record.insight
        actions = ActionIndex(insight.actions)
        values = ActionIndex(insight.action_values)

        return AdRow(
            ad_name=insight.ad_name or None,
            adset_name=record.adset.name or None,
            bid_strategy=record.adset.bid_strategy or None,
            view_content=actions.get(ActionType.VIEW_CONTENT),
            view_content_value=values.get(ActionType.VIEW_CONTENT),
            add_to_wishlist=actions.get(ActionType.ADD_TO_WISHLIST),
            add_to_wishlist_value=values.get(ActionType.ADD_TO_WISHLIST),
            add_to_cart=actions.get(ActionType.ADD_TO_CART),
            add_to_cart_value=values.get(ActionType.ADD_TO_CART),
            initiated_checkout=actions.get(ActionType.INITIATE_CHECKOUT),
            initiated_checkout_value=values.get(ActionType.INITIATE_CHECKOUT),
            adds_payment_info=actions.get(ActionType.ADD_PAYMENT_INFO),
            add_payment_info_value=values.get(ActionType.ADD_PAYMENT_INFO),
            purchase=actions.get(ActionType.PURCHASE),
            purchase_value=values.get(ActionType.PURCHASE),
            leads=actions.get(ActionType.LEAD),
            lead_value=values.get(ActionType.LEAD),
            contact=actions.get(ActionType.CONTACT),
            contact_value=values.get(ActionType.CONTACT),
            **self._common(record, actions),
        )
