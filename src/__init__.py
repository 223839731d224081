"""
Task Analytics - ROI ranking, KPI and pipeline analytics over task lists
"""

__version__ = "1.0.0"
__author__ = "Task Analytics Team"

from .services.analytics_service import AnalyticsService

__all__ = [
    "AnalyticsService",
]
