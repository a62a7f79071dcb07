"""Token provider implementation for request-scoped access tokens.

The caller obtains its Facebook access token out of band and presents it
with each request; this provider only carries it to the HTTP client.
"""

import os
from typing import Optional

from loguru import logger

from adsreport.core.constants import ENV_FACEBOOK_ACCESS_TOKEN
from adsreport.core.exceptions import AuthenticationError


class StaticTokenProvider:
    """Token provider holding one access token.

    There is no refresh: an expired token is terminal and surfaces as an
    AuthenticationError from the Graph API.
    """

    def __init__(self, access_token: Optional[str]):
        """Initialize the token provider.

        Args:
            access_token: Facebook user access token
        """
        self._access_token = (access_token or "").strip() or None

    @classmethod
    def from_bearer_header(cls, authorization: Optional[str]) -> "StaticTokenProvider":
        """Build a provider from an ``Authorization: Bearer <token>`` header.

        Raises:
            AuthenticationError: If the header is missing or not a Bearer token
        """
        if not authorization:
            raise AuthenticationError("Unauthorized")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError("Unauthorized", details={"reason": "expected Bearer token"})
        return cls(token)

    @classmethod
    def from_env(cls, variable: str = ENV_FACEBOOK_ACCESS_TOKEN) -> "StaticTokenProvider":
        """Build a provider from an environment variable (CLI usage)."""
        token = os.getenv(variable)
        if not token:
            logger.warning(f"{variable} is not set")
        return cls(token)

    def get_access_token(self) -> str:
        """Get the access token.

        Returns:
            Access token

        Raises:
            AuthenticationError: If no token is available
        """
        if not self._access_token:
            raise AuthenticationError("No access token available")
        return self._access_token
