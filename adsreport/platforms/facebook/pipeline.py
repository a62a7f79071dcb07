"""Facebook Ads insights pipeline.

Coordinates the Graph client, the joiner and the row normalizer to turn one
ad account's date range into canonical report rows:

    fetch (campaigns, ad sets, campaign insights, ad insights)
      -> join (insight -> campaign / ad set)
      -> normalize (JoinedRecord -> AdRow / CampaignRow)

Architecture:
- Dependency injection for the Graph client and the progress observer
- No logging inside the stages; progress goes to the PipelineObserver
- Request-scoped: nothing is cached between runs
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from adsreport.core.exceptions import PipelineError, ReportError
from adsreport.core.protocols import PipelineObserver
from adsreport.domain.rows import AdRow, CampaignRow, UNIFIED_HEADERS, to_unified_values
from adsreport.infrastructure.observers import LoguruObserver
from adsreport.platforms.facebook.client import FacebookGraphClient, normalize_account_id
from adsreport.platforms.facebook.joiner import InsightJoiner, count_unresolved
from adsreport.platforms.facebook.processor import RowNormalizer
from adsreport.utils.date_utils import validate_date_range

STAGE_FETCH = "fetch"
STAGE_JOIN = "join"
STAGE_NORMALIZE = "normalize"


@dataclass
class InsightsReport:
    """Normalized rows of one pipeline run."""

    ads: List[AdRow] = field(default_factory=list)
    campaigns: List[CampaignRow] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        """JSON body of GET /insights."""
        return {
            "ads": [row.to_dict() for row in self.ads],
            "campaigns": [row.to_dict() for row in self.campaigns],
        }

    def ad_matrix(self) -> List[List[Any]]:
        return [AdRow.headers()] + [row.to_values() for row in self.ads]

    def campaign_matrix(self) -> List[List[Any]]:
        return [CampaignRow.headers()] + [row.to_values() for row in self.campaigns]

    def unified_matrix(self) -> List[List[Any]]:
        """Header plus campaign rows then ad rows on the unified schema."""
        rows = [to_unified_values(row) for row in self.campaigns]
        rows.extend(to_unified_values(row) for row in self.ads)
        return [list(UNIFIED_HEADERS)] + rows


class InsightsPipeline:
    """Fetch, join and normalize the insights of one ad account.

    Example:
        >>> pipeline = InsightsPipeline(FacebookGraphClient(http))
        >>> report = pipeline.run("act_123", "2024-06-01", "2024-06-30")
        >>> report.to_dict()["ads"][0]["Campaing Name"]
    """

    def __init__(
        self,
        client: FacebookGraphClient,
        observer: Optional[PipelineObserver] = None,
        normalizer: Optional[RowNormalizer] = None,
    ):
        """Initialize the pipeline.

        Args:
            client: Graph client bound to the caller's access token
            observer: Progress observer (defaults to LoguruObserver)
            normalizer: Row normalizer (defaults to RowNormalizer)
        """
        self.client = client
        self.observer = observer or LoguruObserver()
        self.normalizer = normalizer or RowNormalizer()

    def run(self, account_id: str, since: str, until: str) -> InsightsReport:
        """Run the pipeline for one account and inclusive date range.

        Args:
            account_id: Ad account id, with or without the ``act_`` prefix
            since: First day, YYYY-MM-DD
            until: Last day, YYYY-MM-DD

        Returns:
            InsightsReport with ad rows and campaign rows

        Raises:
            ValidationError: If the account id or a date is invalid
            AuthenticationError: If the token is rejected
            UpstreamFetchError: If any Graph request fails
            PipelineError: If a stage fails unexpectedly
        """
        account_id = normalize_account_id(account_id)
        validate_date_range(since, until)

        stage = STAGE_FETCH
        try:
            self.observer.on_stage_start(stage, account_id=account_id, since=since, until=until)
            campaigns = self.client.get_campaigns(account_id)
            self.observer.on_fetched("campaigns", len(campaigns))
            ad_sets = self.client.get_ad_sets(account_id)
            self.observer.on_fetched("ad sets", len(ad_sets))
            campaign_insights = self.client.get_campaign_insights(account_id, since, until)
            self.observer.on_fetched("campaign insights", len(campaign_insights))
            ad_insights = self.client.get_ad_insights(account_id, since, until)
            self.observer.on_fetched("ad insights", len(ad_insights))

            stage = STAGE_JOIN
            self.observer.on_stage_start(stage)
            joiner = InsightJoiner(campaigns, ad_sets)
            campaign_records = joiner.join_all(campaign_insights)
            ad_records = joiner.join_all(ad_insights)
            for level, records in (("campaign", campaign_records), ("ad", ad_records)):
                self.observer.on_joined(level, len(records), **count_unresolved(records))

            stage = STAGE_NORMALIZE
            self.observer.on_stage_start(stage)
            report = InsightsReport(
                ads=self.normalizer.normalize_all(ad_records),
                campaigns=self.normalizer.normalize_all(campaign_records),
            )
            self.observer.on_normalized("campaign", len(report.campaigns))
            self.observer.on_normalized("ad", len(report.ads))
            return report

        except ReportError as e:
            self.observer.on_error(stage, e)
            raise
        except Exception as e:
            self.observer.on_error(stage, e)
            raise PipelineError(
                f"Insights pipeline failed: {e}",
                stage=stage,
                details={"account_id": account_id},
            ) from e
