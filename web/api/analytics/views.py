"""Analytics API views - thin layer over services."""

from app.container import container
from app.errors import ValidationError
from app.models.analytics import AnalyticsSubject, RefreshRequest, SubjectKind
from web.api.errors import parse_subject

from .schemas import (
    CacheStatus,
    CacheStatusResponse,
    PayerAnalytics,
    PayerAnalyticsData,
    PayerAnalyticsResponse,
    PayerItem,
    ProviderAnalytics,
    ProviderAnalyticsData,
    ProviderAnalyticsResponse,
    ProviderItem,
    RefreshBody,
    RefreshResponse,
    SchemeAnalytics,
    SchemeAnalyticsData,
    SchemeAnalyticsResponse,
    SchemeItem,
)


def get_payer_analytics(payer_id: str, refresh: bool = False) -> PayerAnalyticsResponse:
    """Get payer 360 analytics."""
    subject = parse_subject(payer_id, SubjectKind.PAYER)
    payer, snapshot = container.analytics.get_analytics(RefreshRequest(subject, force=refresh))

    return PayerAnalyticsResponse(
        data=PayerAnalyticsData(
            payer=PayerItem(**payer.to_dict()),
            analytics=PayerAnalytics(**snapshot.to_dict()),
        )
    )


def get_provider_analytics(provider_id: str, refresh: bool = False) -> ProviderAnalyticsResponse:
    """Get provider 360 analytics."""
    subject = parse_subject(provider_id, SubjectKind.PROVIDER)
    provider, snapshot = container.analytics.get_analytics(RefreshRequest(subject, force=refresh))

    return ProviderAnalyticsResponse(
        data=ProviderAnalyticsData(
            provider=ProviderItem(**provider.to_dict()),
            analytics=ProviderAnalytics(**snapshot.to_dict()),
        )
    )


def get_scheme_analytics(scheme_id: str, refresh: bool = False) -> SchemeAnalyticsResponse:
    """Get scheme 360 analytics."""
    subject = parse_subject(scheme_id, SubjectKind.SCHEME)
    scheme, snapshot = container.analytics.get_analytics(RefreshRequest(subject, force=refresh))

    return SchemeAnalyticsResponse(
        data=SchemeAnalyticsData(
            scheme=SchemeItem(**scheme.to_dict()),
            analytics=SchemeAnalytics(**snapshot.to_dict()),
        )
    )


def get_cache_status(raw_id: str, kind: SubjectKind) -> CacheStatusResponse:
    """Get snapshot cache state for a payer, provider or scheme."""
    subject = parse_subject(raw_id, kind)
    return CacheStatusResponse(data=CacheStatus(**container.analytics.cache_status(subject)))


def refresh_analytics(body: RefreshBody) -> RefreshResponse:
    """Refresh one subject's analytics, or all of them."""
    if body.entity_type == "all":
        counts = container.analytics.refresh_all()
        return RefreshResponse(message="All analytics refreshed", counts=counts)

    if body.entity_type and body.entity_id is not None:
        kind = SubjectKind(body.entity_type)
        container.analytics.refresh(AnalyticsSubject(kind, body.entity_id))
        return RefreshResponse(message=f"{kind.label} analytics refreshed")

    raise ValidationError("Specify entity_type and entity_id, or entity_type=all")
