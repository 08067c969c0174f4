"""
Analytics engine module.
"""

from honeylog.analytics.engine import AnalyticsEngine

__all__ = ["AnalyticsEngine"]
