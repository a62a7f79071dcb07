"""Custom exception hierarchy for the adsreport package.

Every error raised by the pipeline, the sinks or the HTTP layer inherits from
ReportError, so callers can catch the whole family in one place. Each subclass
maps to exactly one HTTP status in the API layer.
"""

from typing import Optional, Dict, Any


class ReportError(Exception):
    """Base exception for all adsreport errors.

    Attributes:
        message: Text shown to API clients (never decorated)
        details: Extra context for logs
        http_status: Status code the API answers with
    """

    http_status: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def _decorate(self, text: str) -> str:
        if self.details:
            return f"{text} | Details: {self.details}"
        return text

    def __str__(self) -> str:
        return self._decorate(self.message)


class AuthenticationError(ReportError):
    """Raised when the access token is missing, expired or rejected.

    Terminal: the user must re-authenticate with Facebook.
    """

    http_status = 401


class PermissionDeniedError(ReportError):
    """Raised when a valid token lacks one of the required permissions."""

    http_status = 403


class ValidationError(ReportError):
    """Raised when a request parameter is missing or malformed.

    Examples:
        - accountId not provided
        - from/to not in YYYY-MM-DD format
        - unknown export format
    """

    http_status = 400

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.field = field

    def _decorate(self, text: str) -> str:
        return f"{text} (field: {self.field})" if self.field else text


class UpstreamFetchError(ReportError):
    """The Graph API answered with a non-2xx or malformed response, or not at all."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.response_body = response_body

    def _decorate(self, text: str) -> str:
        if self.status_code:
            text = f"[HTTP {self.status_code}] {text}"
        if self.response_body:
            text = f"{text}\nResponse: {self.response_body[:500]}"
        return text


class SinkWriteError(ReportError):
    """Raised when writing to an export destination fails.

    Terminal for that sink only; other sinks of the same export keep going.
    """

    def __init__(
        self,
        message: str,
        sink: Optional[str] = None,
        target: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.sink = sink
        self.target = target

    def _decorate(self, text: str) -> str:
        if self.sink:
            text = f"[{self.sink}] {text}"
        return f"{text} (target: {self.target})" if self.target else text


class ConfigurationError(ReportError):
    """Raised when configuration is invalid or missing.

    Examples:
        - GOOGLE_SHEETS_ID not set when a Sheets export is requested
        - Invalid integer in REQUEST_TIMEOUT_SECONDS
    """


class PipelineError(ReportError):
    """A pipeline stage failed for a reason not covered above."""

    def __init__(self, message: str, stage: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.stage = stage

    def _decorate(self, text: str) -> str:
        return f"{text} (stage: {self.stage})" if self.stage else text
