"""HTTP adapters."""

from adsreport.adapters.http_client import GraphHTTPClient

__all__ = ["GraphHTTPClient"]
