"""
Domain models for the insights pipeline.

Campaigns, ad sets and insights are immutable value records built from Graph
API payloads. Parent references are plain ids resolved by the joiner.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from adsreport.core.constants import InsightLevel


def _text(value: Any) -> str:
    """Graph returns numbers as strings; keep them that way, map None to ''."""
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Campaign:
    """
    Campaign entity.

    Attributes:
        id: Graph campaign id
        name: Campaign name
        objective: Campaign objective (e.g. CONVERSIONS)
        buying_type: AUCTION or RESERVED
        bid_strategy: Campaign-level bid strategy, empty when set on ad sets
    """
    id: str = ""
    name: str = ""
    objective: str = ""
    buying_type: str = ""
    bid_strategy: str = ""

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Campaign":
        return cls(
            id=_text(payload.get("id")),
            name=_text(payload.get("name")),
            objective=_text(payload.get("objective")),
            buying_type=_text(payload.get("buying_type")),
            bid_strategy=_text(payload.get("bid_strategy")),
        )

    @classmethod
    def empty(cls) -> "Campaign":
        """Placeholder used when an insight references an unknown campaign."""
        return cls()


@dataclass(frozen=True)
class AdSet:
    """
    Ad set entity.

    Attributes:
        id: Graph ad set id
        name: Ad set name
        bid_strategy: Bid strategy (e.g. LOWEST_COST_WITHOUT_CAP)
        campaign_id: Parent campaign id
    """
    id: str = ""
    name: str = ""
    bid_strategy: str = ""
    campaign_id: str = ""

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "AdSet":
        return cls(
            id=_text(payload.get("id")),
            name=_text(payload.get("name")),
            bid_strategy=_text(payload.get("bid_strategy")),
            campaign_id=_text(payload.get("campaign_id")),
        )

    @classmethod
    def empty(cls) -> "AdSet":
        return cls()


@dataclass(frozen=True)
class ActionStat:
    """One ``{action_type, value}`` entry of an insight action collection."""
    action_type: str
    value: str

    @classmethod
    def many_from_api(cls, entries: Optional[Iterable[Any]]) -> Tuple["ActionStat", ...]:
        """Parse an action collection, skipping malformed entries."""
        if not entries:
            return ()
        stats = []
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("action_type"):
                continue
            stats.append(cls(action_type=str(entry["action_type"]), value=_text(entry.get("value"))))
        return tuple(stats)


@dataclass(frozen=True)
class Insight:
    """
    Dated performance record for one ad or one campaign.

    Metrics stay strings exactly as returned by the Graph API; numeric
    coercion is left to the sinks.
    """
    level: InsightLevel
    date_start: str
    date_stop: str = ""
    ad_id: str = ""
    ad_name: str = ""
    adset_id: str = ""
    campaign_id: str = ""
    campaign_name: str = ""
    objective: str = ""
    spend: str = ""
    impressions: str = ""
    clicks: str = ""
    reach: str = ""
    actions: Tuple[ActionStat, ...] = field(default_factory=tuple)
    action_values: Tuple[ActionStat, ...] = field(default_factory=tuple)
    outbound_clicks: Tuple[ActionStat, ...] = field(default_factory=tuple)

    @property
    def entity_id(self) -> str:
        return self.ad_id if self.level is InsightLevel.AD else self.campaign_id

    @property
    def key(self) -> Tuple[str, str]:
        return self.entity_id, self.date_start

    @classmethod
    def from_api(cls, payload: Dict[str, Any], level: InsightLevel) -> "Insight":
        return cls(
            level=level,
            date_start=_text(payload.get("date_start")),
            date_stop=_text(payload.get("date_stop")),
            ad_id=_text(payload.get("ad_id")),
            ad_name=_text(payload.get("ad_name")),
            adset_id=_text(payload.get("adset_id")),
            campaign_id=_text(payload.get("campaign_id")),
            campaign_name=_text(payload.get("campaign_name")),
            objective=_text(payload.get("objective")),
            spend=_text(payload.get("spend")),
            impressions=_text(payload.get("impressions")),
            clicks=_text(payload.get("clicks")),
            reach=_text(payload.get("reach")),
            actions=ActionStat.many_from_api(payload.get("actions")),
            action_values=ActionStat.many_from_api(payload.get("action_values")),
            outbound_clicks=ActionStat.many_from_api(payload.get("outbound_clicks")),
        )


@dataclass(frozen=True)
class JoinedRecord:
    """An insight with its parent campaign and ad set resolved.

    Unresolved parents are empty entities, never None.
    """
    insight: Insight
    campaign: Campaign = field(default_factory=Campaign.empty)
    adset: AdSet = field(default_factory=AdSet.empty)

    @property
    def level(self) -> InsightLevel:
        return self.insight.level


@dataclass(frozen=True)
class AdAccount:
    """Ad account visible to the authenticated user."""
    id: str
    name: str
    account_id: str
    status: str

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "AdAccount":
        # account_status 1 == ACTIVE; every other code is some flavour of disabled
        return cls(
            id=_text(payload.get("id")),
            name=_text(payload.get("name")),
            account_id=_text(payload.get("account_id")),
            status="Active" if payload.get("account_status") == 1 else "Inactive",
        )

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "accountId": self.account_id, "status": self.status}
