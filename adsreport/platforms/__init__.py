"""Ad platform implementations.

Only Facebook is implemented. Import from the platform module directly:

    from adsreport.platforms.facebook.pipeline import InsightsPipeline
"""

__all__ = []
