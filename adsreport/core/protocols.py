"""Protocol definitions (interfaces) for the adsreport package.

This module defines the abstract interfaces using Python's Protocol
to support dependency inversion and enable proper testing with mocks.
"""

from typing import Protocol, Any, Sequence


class TokenProvider(Protocol):
    """Interface for providing the Facebook access token of a request."""

    def get_access_token(self) -> str:
        """Retrieve the current access token.

        Returns:
            str: Access token

        Raises:
            AuthenticationError: If no token is available
        """
        ...


class PipelineObserver(Protocol):
    """Receives progress events from the insights pipeline.

    The pipeline itself never logs; it reports to an observer so the
    fetch/join/normalize steps stay free of side effects.
    """

    def on_stage_start(self, stage: str, **context: Any) -> None:
        ...

    def on_fetched(self, resource: str, count: int) -> None:
        ...

    def on_joined(self, level: str, count: int, missing_campaigns: int, missing_ad_sets: int) -> None:
        ...

    def on_normalized(self, level: str, count: int) -> None:
        ...

    def on_error(self, stage: str, error: Exception) -> None:
        ...


class MatrixWriter(Protocol):
    """Interface for sinks that serialize a header + rows matrix.

    ``last_result`` holds the WriteResult of the latest ``write`` call.
    """

    content_type: str
    filename: str
    last_result: Any

    def write(self, matrix: Sequence[Sequence[Any]]) -> Any:
        """Serialize the matrix.

        Args:
            matrix: Header row followed by data rows

        Returns:
            Serialized payload (str or bytes)

        Raises:
            SinkWriteError: If serialization fails
        """
        ...
