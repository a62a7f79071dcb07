"""Pipeline observers.

The insights pipeline reports its progress to a PipelineObserver instead of
logging directly. LoguruObserver is the default; NullObserver discards events.
"""

from typing import Any

from loguru import logger


class LoguruObserver:
    """Writes pipeline progress events to loguru."""

    def on_stage_start(self, stage: str, **context: Any) -> None:
        details = ", ".join(f"{k}={v}" for k, v in context.items())
        logger.info(f"Stage '{stage}' started" + (f" ({details})" if details else ""))

    def on_fetched(self, resource: str, count: int) -> None:
        logger.info(f"Fetched {count} {resource}")

    def on_joined(self, level: str, count: int, missing_campaigns: int, missing_ad_sets: int) -> None:
        logger.info(f"Joined {count} {level} insights")
        if missing_campaigns:
            logger.warning(f"{missing_campaigns} {level} insights reference an unknown campaign")
        if missing_ad_sets:
            logger.warning(f"{missing_ad_sets} {level} insights reference an unknown ad set")

    def on_normalized(self, level: str, count: int) -> None:
        logger.success(f"Normalized {count} {level} rows")

    def on_error(self, stage: str, error: Exception) -> None:
        logger.error(f"Stage '{stage}' failed: {error}")


class NullObserver:
    """Observer that ignores every event."""

    def on_stage_start(self, stage: str, **context: Any) -> None:
        pass

    def on_fetched(self, resource: str, count: int) -> None:
        pass

    def on_joined(self, level: str, count: int, missing_campaigns: int, missing_ad_sets: int) -> None:
        pass

    def on_normalized(self, level: str, count: int) -> None:
        pass

    def on_error(self, stage: str, error: Exception) -> None:
        pass
