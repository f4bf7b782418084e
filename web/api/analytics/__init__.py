"""Analytics API."""

from web.api.analytics.views import (
    get_cache_status,
    get_payer_analytics,
    get_provider_analytics,
    get_scheme_analytics,
    refresh_analytics,
)

__all__ = [
    "get_payer_analytics",
    "get_provider_analytics",
    "get_scheme_analytics",
    "get_cache_status",
    "refresh_analytics",
]
