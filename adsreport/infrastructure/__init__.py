"""Infrastructure implementations of the core protocols."""

from adsreport.infrastructure.token_provider import StaticTokenProvider
from adsreport.infrastructure.observers import LoguruObserver, NullObserver

__all__ = ["StaticTokenProvider", "LoguruObserver", "NullObserver"]
