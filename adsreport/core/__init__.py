"""Core abstractions and interfaces for the adsreport package."""

from adsreport.core.protocols import (
    TokenProvider,
    PipelineObserver,
    MatrixWriter,
)
from adsreport.core.exceptions import (
    ReportError,
    AuthenticationError,
    PermissionDeniedError,
    ValidationError,
    UpstreamFetchError,
    SinkWriteError,
    ConfigurationError,
    PipelineError,
)
from adsreport.core.config import (
    FacebookConfig,
    GoogleSheetsConfig,
    AppConfig,
    ConfigurationManager,
)

__all__ = [
    # Protocols
    "TokenProvider",
    "PipelineObserver",
    "MatrixWriter",
    # Exceptions
    "ReportError",
    "AuthenticationError",
    "PermissionDeniedError",
    "ValidationError",
    "UpstreamFetchError",
    "SinkWriteError",
    "ConfigurationError",
    "PipelineError",
    # Configuration
    "FacebookConfig",
    "GoogleSheetsConfig",
    "AppConfig",
    "ConfigurationManager",
]
