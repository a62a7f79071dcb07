"""HTTP API (FastAPI)."""

from adsreport.api.app import create_app

__all__ = ["create_app"]
