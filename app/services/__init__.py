"""Services package - service class exports."""

from app.services.analytics import (
    AnalyticsCacheRefresher,
    AnalyticsCalculator,
    AnalyticsService,
)

__all__ = [
    "AnalyticsCacheRefresher",
    "AnalyticsCalculator",
    "AnalyticsService",
]
