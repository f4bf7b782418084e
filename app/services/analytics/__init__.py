"""Analytics services."""

from app.services.analytics.calculator import AnalyticsCalculator, approval_rate
from app.services.analytics.freshness import FreshnessPolicy, TtlFreshnessPolicy
from app.services.analytics.refresher import AnalyticsCacheRefresher, validate_subject
from app.services.analytics.service import AnalyticsService
from app.services.analytics.single_flight import SingleFlight

__all__ = [
    "AnalyticsCacheRefresher",
    "AnalyticsCalculator",
    "AnalyticsService",
    "FreshnessPolicy",
    "SingleFlight",
    "TtlFreshnessPolicy",
    "approval_rate",
    "validate_subject",
]
