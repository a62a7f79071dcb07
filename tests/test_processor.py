"""Tests for RowNormalizer and ActionIndex."""

from adsreport.core.constants import ActionType, InsightLevel
from adsreport.domain.models import ActionStat, AdSet, Campaign, Insight, JoinedRecord
from adsreport.domain.rows import AdRow, CampaignRow
from adsreport.platforms.facebook.processor import ActionIndex, RowNormalizer


def normalize(insight, campaign=None, adset=None):
    record = JoinedRecord(
        insight=insight,
        campaign=campaign or Campaign.empty(),
        adset=adset or AdSet.empty(),
    )
    return RowNormalizer().normalize(record)


class TestActionIndex:

    def test_first_occurrence_wins(self):
        index = ActionIndex([ActionStat("purchase", "3"), ActionStat("purchase", "9")])
        assert index.get(ActionType.PURCHASE) == "3"

    def test_unknown_tags_are_ignored(self):
        index = ActionIndex([ActionStat("video_view", "12")])
        assert all(index.find(action) is None for action in ActionType)

    def test_missing_or_empty_reads_as_zero(self):
        index = ActionIndex([ActionStat("lead", "")])
        assert index.find(ActionType.LEAD) is None
        assert index.get(ActionType.LEAD) == "0"
        assert index.get(ActionType.CONTACT) == "0"


def test_summer_sale_ad_row(summer_sale):
    campaign, adset, insight = summer_sale

    row = normalize(insight, campaign, adset)

    assert isinstance(row, AdRow)
    assert row.date == "2025-04-10"
    assert row.iso_week == "15"
    assert row.month == "April"
    assert row.year == "2025"
    assert row.ad_name == "Ad a1"
    assert row.adset_name == "Prospecting"
    assert row.campaign_name == "Summer Sale"
    assert row.campaign_objective == "CONVERSIONS"
    assert row.buying_type == "AUCTION"
    assert row.bid_strategy == "LOWEST_COST"
    assert row.amount_spent == "100"
    assert row.reach == "800"
    assert row.impressions == "1000"
    assert row.clicks_all == "50"
    assert row.purchase == "3"
    assert row.purchase_value == "150"
    # everything the insight did not report is "0"
    assert row.link_clicks == "0"
    assert row.add_to_cart == "0"
    assert row.leads == "0"
    assert row.contact_value == "0"


def test_unresolved_ad_row_uses_column_defaults(payloads):
    insight = Insight.from_api(
        {"ad_id": "a1", "date_start": "2025-04-10", "adset_id": "x", "campaign_id": "y"},
        InsightLevel.AD,
    )

    row = normalize(insight)

    assert row.ad_name == "Unknown"
    assert row.adset_name == "Unknown"
    assert row.campaign_name == "Unknown"
    assert row.campaign_objective == "Unknown"
    assert row.bid_strategy == "Unknown"
    assert row.buying_type == "AUCTION"
    assert row.amount_spent == "0"
    assert row.impressions == "0"
    assert len(row.to_values()) == len(AdRow.headers())


def test_campaign_name_falls_back_to_insight(payloads):
    insight = Insight.from_api(payloads.ad_insight(campaign_name="From insight"), InsightLevel.AD)
    assert normalize(insight).campaign_name == "From insight"


def test_link_clicks_from_actions_take_precedence(payloads):
    insight = Insight.from_api(
        payloads.ad_insight(
            actions=payloads.actions(link_click="12"),
            outbound_clicks=payloads.actions(link_click="40"),
        ),
        InsightLevel.AD,
    )
    assert normalize(insight).link_clicks == "12"


def test_link_clicks_fall_back_to_outbound_clicks(payloads):
    insight = Insight.from_api(
        payloads.ad_insight(outbound_clicks=payloads.actions(link_click="40")),
        InsightLevel.AD,
    )
    assert normalize(insight).link_clicks == "40"


def test_funnel_columns_come_from_their_own_tags(payloads):
    insight = Insight.from_api(
        payloads.ad_insight(
            actions=payloads.actions(
                add_to_cart="4",
                initiate_checkout="2",
                landing_page_view="30",
                **{"offsite_conversion.fb_pixel_add_to_cart": "99"},
            ),
            action_values=payloads.actions(add_to_cart="80.5"),
        ),
        InsightLevel.AD,
    )

    row = normalize(insight)

    assert row.add_to_cart == "4"
    assert row.add_to_cart_value == "80.5"
    assert row.initiated_checkout == "2"
    assert row.initiated_checkout_value == "0"
    assert row.landing_page_views == "30"


def test_campaign_row(payloads):
    campaign = Campaign.from_api(payloads.campaign(buying_type="RESERVED"))
    insight = Insight.from_api(payloads.campaign_insight(), InsightLevel.CAMPAIGN)

    row = normalize(insight, campaign)

    assert isinstance(row, CampaignRow)
    assert row.campaign_name == "Summer Sale"
    assert row.buying_type == "RESERVED"
    assert row.bid_strategy == ""
    assert row.amount_spent == "250.5"
    assert row.reach == "4000"
    assert row.to_dict()["Campaing Name"] == "Summer Sale"


def test_campaign_row_keeps_campaign_bid_strategy(payloads):
    campaign = Campaign.from_api(payloads.campaign(bid_strategy="COST_CAP"))
    insight = Insight.from_api(payloads.campaign_insight(), InsightLevel.CAMPAIGN)

    assert normalize(insight, campaign).bid_strategy == "COST_CAP"
