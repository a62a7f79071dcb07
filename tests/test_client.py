"""Tests for FacebookGraphClient request building and token verification."""

import json

import pytest

from adsreport.adapters.http_client import GraphHTTPClient
from adsreport.core.config import FacebookConfig
from adsreport.core.exceptions import AuthenticationError, PermissionDeniedError, ValidationError
from adsreport.infrastructure.token_provider import StaticTokenProvider
from adsreport.platforms.facebook.client import FacebookGraphClient, normalize_account_id
from conftest import FakeResponse, page


@pytest.fixture
def client(fake_session):
    http = GraphHTTPClient(StaticTokenProvider("tok"), FacebookConfig(page_size=100), session=fake_session)
    return FacebookGraphClient(http)


def granted(*permissions):
    return FakeResponse({"data": [{"permission": p, "status": "granted"} for p in permissions]})


def test_normalize_account_id():
    assert normalize_account_id("123") == "act_123"
    assert normalize_account_id(" act_123 ") == "act_123"
    with pytest.raises(ValidationError, match="accountId"):
        normalize_account_id("")


def test_get_campaigns(client, fake_session, payloads):
    fake_session.request.return_value = page([payloads.campaign(), payloads.campaign(id="c2", name="Winter")])

    campaigns = client.get_campaigns("123")

    assert [c.name for c in campaigns] == ["Summer Sale", "Winter"]
    call = fake_session.request.call_args
    assert call.kwargs["url"] == "https://graph.facebook.com/v18.0/act_123/campaigns"
    assert call.kwargs["params"] == {"fields": "id,name,objective,buying_type,bid_strategy", "limit": 100}


def test_get_ad_sets(client, fake_session, payloads):
    fake_session.request.return_value = page([payloads.adset()])

    [adset] = client.get_ad_sets("act_123")

    assert adset.campaign_id == "c1"
    assert fake_session.request.call_args.kwargs["url"].endswith("/act_123/adsets")


def test_ad_insights_request_daily_rows_for_the_range(client, fake_session, payloads):
    fake_session.request.return_value = page([payloads.ad_insight(actions=payloads.actions(purchase="3"))])

    [insight] = client.get_ad_insights("123", "2025-04-01", "2025-04-30")

    assert insight.ad_id == "a1"
    assert insight.actions[0].value == "3"

    params = fake_session.request.call_args.kwargs["params"]
    assert params["level"] == "ad"
    assert json.loads(params["time_range"]) == {"since": "2025-04-01", "until": "2025-04-30"}
    assert params["time_increment"] == 1
    assert "action_values" in params["fields"].split(",")
    assert fake_session.request.call_args.kwargs["url"].endswith("/act_123/insights")


def test_campaign_insights_use_campaign_level(client, fake_session, payloads):
    fake_session.request.return_value = page([payloads.campaign_insight()])

    [insight] = client.get_campaign_insights("123", "2025-04-01", "2025-04-30")

    assert insight.entity_id == "c1"
    assert fake_session.request.call_args.kwargs["params"]["level"] == "campaign"


def test_get_ad_accounts(client, fake_session):
    fake_session.request.return_value = page(
        [
            {"id": "act_1", "name": "Main", "account_id": "1", "account_status": 1},
            {"id": "act_2", "name": "Old", "account_id": "2", "account_status": 2},
        ]
    )

    accounts = [a.to_dict() for a in client.get_ad_accounts()]

    assert accounts == [
        {"id": "act_1", "name": "Main", "accountId": "1", "status": "Active"},
        {"id": "act_2", "name": "Old", "accountId": "2", "status": "Inactive"},
    ]
    assert fake_session.request.call_args.kwargs["url"].endswith("/me/adaccounts")


def test_verify_token(client, fake_session):
    fake_session.request.side_effect = [
        FakeResponse({"id": "42", "name": "Ada", "email": "ada@example.com"}),
        granted("ads_management", "ads_read", "business_management", "email"),
    ]

    user = client.verify_token()

    assert user["id"] == "42"
    assert user["name"] == "Ada"
    assert user["email"] == "ada@example.com"
    assert "42" in user["image"]
    assert fake_session.request.call_args_list[1].kwargs["url"].endswith("/42/permissions")


def test_verify_token_missing_permissions(client, fake_session):
    fake_session.request.side_effect = [FakeResponse({"id": "42"}), granted("ads_read")]

    with pytest.raises(PermissionDeniedError) as exc_info:
        client.verify_token()

    assert exc_info.value.http_status == 403
    assert "ads_management" in exc_info.value.message
    assert "business_management" in exc_info.value.message


def test_verify_token_rejected_token(client, fake_session):
    fake_session.request.return_value = FakeResponse(
        {"error": {"message": "Malformed access token", "code": 190}}, status_code=400
    )

    with pytest.raises(AuthenticationError, match="Malformed access token"):
        client.verify_token()


def test_verify_token_upstream_failure_is_an_auth_error(client, fake_session):
    fake_session.request.return_value = FakeResponse({}, status_code=500)

    with pytest.raises(AuthenticationError):
        client.verify_token()
