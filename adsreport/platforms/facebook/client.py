"""Facebook Graph API client.

Typed access to the Graph endpoints used by the insights pipeline and the
account/token endpoints of the HTTP API. HTTP concerns (authentication,
pagination, error mapping) live in GraphHTTPClient; this class only knows
paths, fields and parameters.
"""

import json
from typing import Any, Dict, List

from loguru import logger

from adsreport.adapters.http_client import GraphHTTPClient
from adsreport.core.constants import REQUIRED_PERMISSIONS, InsightLevel
from adsreport.core.exceptions import (
    AuthenticationError,
    PermissionDeniedError,
    UpstreamFetchError,
    ValidationError,
)
from adsreport.domain.models import AdAccount, AdSet, Campaign, Insight
from adsreport.platforms.facebook.constants import (
    ACCOUNT_PREFIX,
    AD_ACCOUNTS_PATH,
    ADSETS_EDGE,
    CAMPAIGNS_EDGE,
    INSIGHTS_EDGE,
    ME_PATH,
    PERMISSION_GRANTED,
    PERMISSIONS_EDGE,
    PROFILE_PICTURE_URL,
    TIME_INCREMENT_DAILY,
)
from adsreport.platforms.facebook.fields import (
    fields_account_info,
    fields_ad_insight,
    fields_ads_adset,
    fields_ads_campaign,
    fields_campaign_insight,
    fields_user,
    join_fields,
)


def normalize_account_id(account_id: str) -> str:
    """Ensure an ad account id has the ``act_`` prefix.

    Raises:
        ValidationError: If the account id is empty
    """
    account_id = (account_id or "").strip()
    if not account_id:
        raise ValidationError("Missing required parameter: accountId", field="accountId")
    if not account_id.startswith(ACCOUNT_PREFIX):
        account_id = f"{ACCOUNT_PREFIX}{account_id}"
    return account_id


class FacebookGraphClient:
    """Client for the Facebook Marketing Graph API.

    Attributes:
        http: Authenticated, paginating HTTP client
        page_size: ``limit`` sent with every paginated request
    """

    def __init__(self, http: GraphHTTPClient):
        """Initialize the Graph client.

        Args:
            http: Authenticated HTTP client bound to one access token
        """
        self.http = http
        self.page_size = http.config.page_size

    def _account_edge(self, account_id: str, edge: str) -> str:
        return self.http.url_for(f"{normalize_account_id(account_id)}/{edge}")

    def get_campaigns(self, account_id: str) -> List[Campaign]:
        """Get every campaign of an ad account.

        Raises:
            UpstreamFetchError: If any page fails
        """
        logger.debug(f"Fetching campaigns for account {account_id}")
        payloads = self.http.fetch_all_pages(
            self._account_edge(account_id, CAMPAIGNS_EDGE),
            {"fields": join_fields(fields_ads_campaign), "limit": self.page_size},
        )
        return [Campaign.from_api(p) for p in payloads]

    def get_ad_sets(self, account_id: str) -> List[AdSet]:
        """Get every ad set of an ad account.

        Raises:
            UpstreamFetchError: If any page fails
        """
        logger.debug(f"Fetching ad sets for account {account_id}")
        payloads = self.http.fetch_all_pages(
            self._account_edge(account_id, ADSETS_EDGE),
            {"fields": join_fields(fields_ads_adset), "limit": self.page_size},
        )
        return [AdSet.from_api(p) for p in payloads]

    def get_campaign_insights(self, account_id: str, since: str, until: str) -> List[Insight]:
        """Get daily campaign-level insights for an inclusive date range."""
        return self._get_insights(account_id, since, until, InsightLevel.CAMPAIGN, fields_campaign_insight)

    def get_ad_insights(self, account_id: str, since: str, until: str) -> List[Insight]:
        """Get daily ad-level insights for an inclusive date range."""
        return self._get_insights(account_id, since, until, InsightLevel.AD, fields_ad_insight)

    def _get_insights(
        self,
        account_id: str,
        since: str,
        until: str,
        level: InsightLevel,
        fields: List[Any],
    ) -> List[Insight]:
        logger.debug(f"Fetching {level.value} insights for account {account_id} ({since} -> {until})")
        params = {
            "level": level.value,
            "time_range": json.dumps({"since": since, "until": until}),
            "time_increment": TIME_INCREMENT_DAILY,
            "fields": join_fields(fields),
            "limit": self.page_size,
        }
        payloads = self.http.fetch_all_pages(self._account_edge(account_id, INSIGHTS_EDGE), params)
        return [Insight.from_api(p, level) for p in payloads]

    def get_ad_accounts(self) -> List[AdAccount]:
        """Get the ad accounts visible to the token's user."""
        payloads = self.http.fetch_all_pages(
            self.http.url_for(AD_ACCOUNTS_PATH),
            {"fields": join_fields(fields_account_info), "limit": self.page_size},
        )
        return [AdAccount.from_api(p) for p in payloads]

    def get_me(self) -> Dict[str, Any]:
        """Get the profile of the token's user.

        Raises:
            AuthenticationError: If the token is invalid
        """
        return self.http.get(self.http.url_for(ME_PATH), {"fields": join_fields(fields_user)})

    def get_granted_permissions(self, user_id: str) -> List[str]:
        """Get the permissions granted to the app by a user."""
        body = self.http.get(self.http.url_for(f"{user_id}/{PERMISSIONS_EDGE}"))
        return [
            entry.get("permission")
            for entry in body.get("data") or []
            if entry.get("status") == PERMISSION_GRANTED
        ]

    def verify_token(self) -> Dict[str, Any]:
        """Validate the access token and its permissions.

        Returns:
            User profile: id, name, email and picture URL

        Raises:
            AuthenticationError: If the token is invalid
            PermissionDeniedError: If a required permission is not granted
        """
        try:
            user = self.get_me()
        except UpstreamFetchError as e:
            raise AuthenticationError(e.message or "Invalid access token") from e

        user_id = user.get("id")
        if not user_id:
            raise AuthenticationError("Invalid access token")

        try:
            granted = set(self.get_granted_permissions(user_id))
        except UpstreamFetchError as e:
            raise AuthenticationError("Could not verify permissions", details={"error": e.message}) from e

        missing = [p for p in REQUIRED_PERMISSIONS if p not in granted]
        if missing:
            raise PermissionDeniedError(
                f"Missing required permissions: {', '.join(missing)}",
                details={"missing": missing},
            )

        logger.info(f"Access token verified for user {user_id}")
        return {
            "id": user_id,
            "name": user.get("name"),
            "email": user.get("email"),
            "image": PROFILE_PICTURE_URL.format(user_id=user_id),
        }
