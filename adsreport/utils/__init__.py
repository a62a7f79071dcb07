"""Utility modules for the adsreport package."""
