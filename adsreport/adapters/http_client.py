"""HTTP client for Graph API requests with authentication.

This module provides a clean separation between HTTP communication
and business logic: the platform client only builds URLs and parameters,
while this client owns the session, authentication, error mapping and
cursor pagination.
"""

import re
from typing import Dict, Any, Optional, List

import requests
from loguru import logger

from adsreport.core.config import FacebookConfig
from adsreport.core.exceptions import AuthenticationError, UpstreamFetchError
from adsreport.core.protocols import TokenProvider
from adsreport.platforms.facebook.constants import OAUTH_ERROR_CODE

_TOKEN_IN_URL = re.compile(r"(access_token=)[^&]+")


class GraphHTTPClient:
    """HTTP client for the Facebook Graph API.

    This client handles:
    - Token injection (Bearer header, or access_token query parameter)
    - Graph error envelopes mapped to typed exceptions
    - Cursor pagination through ``paging.next``
    - Request logging with tokens redacted

    Requests are never retried: one failure aborts the call.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        config: Optional[FacebookConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the HTTP client.

        Args:
            token_provider: Provider for the access token of this request
            config: Graph settings (version, timeout, auth placement)
            session: Optional pre-built session (tests inject a mock)
        """
        self.token_provider = token_provider
        self.config = config or FacebookConfig()
        self.timeout = self.config.timeout
        self._session = session or requests.Session()

    def url_for(self, path: str) -> str:
        """Absolute URL of a path under the versioned Graph root."""
        return f"{self.config.base_url}/{path.lstrip('/')}"

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if not self.config.token_in_query:
            headers["Authorization"] = f"Bearer {self.token_provider.get_access_token()}"
        return headers

    def _build_params(self, url: str, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        complete = dict(params or {})
        # paging.next URLs already carry the token when query auth is used
        if self.config.token_in_query and "access_token=" not in url:
            complete["access_token"] = self.token_provider.get_access_token()
        return complete

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute a GET request.

        Args:
            url: Request URL
            params: Query parameters

        Returns:
            Response body as dictionary

        Raises:
            UpstreamFetchError: If the request fails
            AuthenticationError: If the token is rejected
        """
        body, _ = self._request("GET", url, params=params)
        return body

    def fetch_all_pages(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Fetch all pages from a cursor-paginated endpoint.

        Follows ``paging.next`` until it is absent. The next URL carries its
        own query string, so the initial params are sent only once.

        Args:
            url: Request URL
            params: Query parameters of the first request

        Returns:
            Concatenated ``data`` arrays of every page, in response order

        Raises:
            UpstreamFetchError: If any page fails or lacks a data array
            AuthenticationError: If the token is rejected
        """
        all_items: List[Dict[str, Any]] = []
        next_url: Optional[str] = url
        next_params = params
        page = 0

        while next_url:
            body, status = self._request("GET", next_url, params=next_params)

            items = body.get("data")
            if not isinstance(items, list):
                raise UpstreamFetchError(
                    "Response is missing the data array",
                    status_code=status,
                    details={"url": self._redact_url(next_url), "page": page},
                )

            all_items.extend(items)
            page += 1

            next_url = (body.get("paging") or {}).get("next")
            next_params = None

        logger.debug(f"Fetched {len(all_items)} items in {page} page(s) from {self._redact_url(url)}")
        return all_items

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> tuple:
        """Execute an HTTP request and map Graph errors.

        Returns:
            Tuple of (parsed body, HTTP status code)

        Raises:
            UpstreamFetchError: On transport errors, non-2xx answers or invalid JSON
            AuthenticationError: On HTTP 401 or Graph OAuth error code 190
        """
        complete_params = self._build_params(url, params)
        headers = self._build_headers()

        # Log request (without sensitive data)
        logger.debug(f"{method} {self._redact_url(url)}")
        if complete_params:
            logger.debug(f"Params: {self._sanitize_log_data(complete_params)}")

        try:
            response = self._session.request(
                method=method,
                url=url,
                params=complete_params or None,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise UpstreamFetchError(
                f"Request timeout after {self.timeout}s",
                details={"url": self._redact_url(url), "error": str(e)},
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamFetchError(
                "Connection error",
                details={"url": self._redact_url(url), "error": str(e)},
            )

        status = response.status_code
        try:
            body = response.json() if response.content else {}
        except ValueError as e:
            raise UpstreamFetchError(
                "Invalid JSON in response",
                status_code=status,
                response_body=response.text[:500],
                details={"error": str(e)},
            )

        error = body.get("error") if isinstance(body, dict) else None
        if error or not response.ok:
            self._raise_for_error(status, error, response.text[:500] if response.text else None)

        if not isinstance(body, dict):
            raise UpstreamFetchError(
                "Unexpected response shape", status_code=status, response_body=str(body)[:500]
            )
        return body, status

    @staticmethod
    def _raise_for_error(status: int, error: Any, response_body: Optional[str]):
        """Raise the typed exception for a Graph error answer.

        An explicit ``error.message`` is surfaced verbatim.
        """
        message = f"Failed to fetch: {status}"
        code = None
        if isinstance(error, dict):
            message = error.get("message") or message
            code = error.get("code")
        elif isinstance(error, str):
            message = error

        logger.error(f"Graph API error {status}: {message}")

        if status == 401 or code == OAUTH_ERROR_CODE:
            raise AuthenticationError(message, details={"status_code": status, "code": code})

        raise UpstreamFetchError(
            message,
            status_code=status,
            response_body=response_body,
            details={"code": code} if code is not None else None,
        )

    @staticmethod
    def _redact_url(url: str) -> str:
        return _TOKEN_IN_URL.sub(r"\1***REDACTED***", url)

    @staticmethod
    def _sanitize_log_data(data: Dict[str, Any]) -> Dict[str, Any]:
        """Remove sensitive data from logs.

        Args:
            data: Data to sanitize

        Returns:
            Sanitized copy of data
        """
        sensitive_keys = {"access_token", "password", "secret", "private_key"}
        sanitized = {}

        for key, value in data.items():
            if any(sk in key.lower() for sk in sensitive_keys):
                sanitized[key] = "***REDACTED***"
            else:
                sanitized[key] = value

        return sanitized
