"""Analytics API request/response schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class PayerItem(BaseModel):
    """Payer display data."""

    id: int
    name: str
    type: str | None = None
    created_at: datetime | None = None


class ProviderItem(BaseModel):
    """Provider display data."""

    id: int
    name: str
    type: str | None = None
    location: str | None = None
    created_at: datetime | None = None


class SchemeItem(BaseModel):
    """Scheme display data."""

    id: int
    payer_id: int
    name: str
    created_at: datetime | None = None


class Breakdown(BaseModel):
    name: str
    claims: int
    invoice_cents: int
    approved_cents: int


class ProviderBreakdownItem(Breakdown):
    provider_id: int


class PayerBreakdownItem(Breakdown):
    payer_id: int


class SchemeBreakdownItem(Breakdown):
    scheme_id: int


class MonthlyTrendItem(BaseModel):
    """Claims volume for one month (YYYY-MM)."""

    month: str
    claims: int
    invoice_cents: int
    approved_cents: int


class AnalyticsBody(BaseModel):
    total_claims: int
    total_invoice_cents: int
    total_approved_cents: int
    approval_rate: float
    monthly_trends: list[MonthlyTrendItem]
    computed_at: datetime


class PayerAnalytics(AnalyticsBody):
    """Payer 360 analytics."""

    top_providers: list[ProviderBreakdownItem]
    top_schemes: list[SchemeBreakdownItem]


class ProviderAnalytics(AnalyticsBody):
    """Provider 360 analytics."""

    top_payers: list[PayerBreakdownItem]
    top_schemes: list[SchemeBreakdownItem]


class SchemeAnalytics(AnalyticsBody):
    """Scheme 360 analytics."""

    top_providers: list[ProviderBreakdownItem]


class PayerAnalyticsData(BaseModel):
    payer: PayerItem
    analytics: PayerAnalytics


class ProviderAnalyticsData(BaseModel):
    provider: ProviderItem
    analytics: ProviderAnalytics


class SchemeAnalyticsData(BaseModel):
    scheme: SchemeItem
    analytics: SchemeAnalytics


class PayerAnalyticsResponse(BaseModel):
    success: bool = True
    data: PayerAnalyticsData


class ProviderAnalyticsResponse(BaseModel):
    success: bool = True
    data: ProviderAnalyticsData


class SchemeAnalyticsResponse(BaseModel):
    success: bool = True
    data: SchemeAnalyticsData


class CacheStatus(BaseModel):
    """Snapshot cache state of one subject."""

    exists: bool
    computed_at: datetime | None
    is_stale: bool
    snapshots: int
    refreshing: bool


class CacheStatusResponse(BaseModel):
    success: bool = True
    data: CacheStatus


class RefreshBody(BaseModel):
    """Bulk refresh request: one subject, or everything with entity_type=all."""

    entity_type: Literal["payer", "provider", "scheme", "all"] | None = None
    entity_id: int | None = None


class RefreshResponse(BaseModel):
    success: bool = True
    message: str
    counts: dict[str, int] | None = None
