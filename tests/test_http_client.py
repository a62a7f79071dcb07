"""Tests for GraphHTTPClient: pagination, auth placement and error mapping."""

import pytest
import requests

from adsreport.adapters.http_client import GraphHTTPClient
from adsreport.core.config import FacebookConfig
from adsreport.core.exceptions import AuthenticationError, UpstreamFetchError
from adsreport.infrastructure.token_provider import StaticTokenProvider
from conftest import FakeResponse, page

URL = "https://graph.facebook.com/v18.0/act_1/campaigns"


def make_client(session, **config):
    return GraphHTTPClient(StaticTokenProvider("tok-123"), FacebookConfig(**config), session=session)


def test_three_pages_of_two_yield_six_records_in_order(fake_session):
    fake_session.request.side_effect = [
        page([{"id": "1"}, {"id": "2"}], next_url=f"{URL}?after=p2"),
        page([{"id": "3"}, {"id": "4"}], next_url=f"{URL}?after=p3"),
        page([{"id": "5"}, {"id": "6"}]),
    ]
    client = make_client(fake_session)

    items = client.fetch_all_pages(URL, {"fields": "id", "limit": 2})

    assert [i["id"] for i in items] == ["1", "2", "3", "4", "5", "6"]
    assert fake_session.request.call_count == 3

    first, second, third = fake_session.request.call_args_list
    assert first.kwargs["url"] == URL
    assert first.kwargs["params"] == {"fields": "id", "limit": 2}
    # the cursor URL carries its own query string
    assert second.kwargs["url"] == f"{URL}?after=p2"
    assert second.kwargs["params"] is None
    assert third.kwargs["url"] == f"{URL}?after=p3"


def test_bearer_header_by_default(fake_session):
    fake_session.request.return_value = page([])
    make_client(fake_session).fetch_all_pages(URL)

    call = fake_session.request.call_args
    assert call.kwargs["headers"]["Authorization"] == "Bearer tok-123"
    assert call.kwargs["timeout"] == 30


def test_token_in_query_when_configured(fake_session):
    fake_session.request.return_value = page([])
    make_client(fake_session, token_in_query=True, timeout=5).fetch_all_pages(URL, {"fields": "id"})

    call = fake_session.request.call_args
    assert "Authorization" not in call.kwargs["headers"]
    assert call.kwargs["params"] == {"fields": "id", "access_token": "tok-123"}
    assert call.kwargs["timeout"] == 5


def test_explicit_error_message_is_surfaced_verbatim(fake_session):
    fake_session.request.return_value = FakeResponse(
        {"error": {"message": "(#100) Invalid parameter", "code": 100}}, status_code=400
    )

    with pytest.raises(UpstreamFetchError) as exc_info:
        make_client(fake_session).fetch_all_pages(URL)

    assert exc_info.value.message == "(#100) Invalid parameter"
    assert exc_info.value.status_code == 400


def test_non_2xx_without_error_body(fake_session):
    fake_session.request.return_value = FakeResponse({}, status_code=502)

    with pytest.raises(UpstreamFetchError) as exc_info:
        make_client(fake_session).get(URL)

    assert exc_info.value.message == "Failed to fetch: 502"


def test_oauth_error_code_maps_to_authentication_error(fake_session):
    fake_session.request.return_value = FakeResponse(
        {"error": {"message": "Error validating access token", "code": 190}}, status_code=400
    )

    with pytest.raises(AuthenticationError) as exc_info:
        make_client(fake_session).fetch_all_pages(URL)

    assert exc_info.value.http_status == 401


def test_http_401_maps_to_authentication_error(fake_session):
    fake_session.request.return_value = FakeResponse({}, status_code=401)

    with pytest.raises(AuthenticationError):
        make_client(fake_session).get(URL)


def test_missing_data_array_is_an_upstream_error(fake_session):
    fake_session.request.return_value = FakeResponse({"paging": {}})

    with pytest.raises(UpstreamFetchError, match="missing the data array"):
        make_client(fake_session).fetch_all_pages(URL)


def test_failure_on_a_later_page_aborts_the_fetch(fake_session):
    fake_session.request.side_effect = [
        page([{"id": "1"}], next_url=f"{URL}?after=p2"),
        FakeResponse({"error": {"message": "Service temporarily unavailable", "code": 2}}, status_code=503),
    ]

    with pytest.raises(UpstreamFetchError, match="Service temporarily unavailable"):
        make_client(fake_session).fetch_all_pages(URL)
    assert fake_session.request.call_count == 2


def test_invalid_json(fake_session):
    fake_session.request.return_value = FakeResponse(None, status_code=200, text="<html>oops</html>")

    with pytest.raises(UpstreamFetchError, match="Invalid JSON"):
        make_client(fake_session).get(URL)


def test_timeout_is_not_retried(fake_session):
    fake_session.request.side_effect = requests.exceptions.Timeout("read timed out")

    with pytest.raises(UpstreamFetchError, match="timeout"):
        make_client(fake_session).get(URL)
    assert fake_session.request.call_count == 1


def test_missing_token_raises_before_any_request(fake_session):
    client = GraphHTTPClient(StaticTokenProvider(None), FacebookConfig(), session=fake_session)

    with pytest.raises(AuthenticationError):
        client.get(URL)
    fake_session.request.assert_not_called()


def test_tokens_are_redacted_from_logs():
    sanitized = GraphHTTPClient._sanitize_log_data({"access_token": "secret", "fields": "id"})
    assert sanitized == {"access_token": "***REDACTED***", "fields": "id"}

    redacted = GraphHTTPClient._redact_url(f"{URL}?access_token=abc123&after=xyz")
    assert "abc123" not in redacted
    assert redacted.endswith("after=xyz")


def test_url_for_uses_versioned_root(fake_session):
    client = make_client(fake_session, api_version="v19.0", graph_url="https://graph.example.com/")
    assert client.url_for("/me/adaccounts") == "https://graph.example.com/v19.0/me/adaccounts"
