"""FastAPI application - wiring only: lifespan, exception handlers, routes."""

from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI

from app.container import container
from app.models.analytics import SubjectKind
from web.api.analytics import (
    get_cache_status,
    get_payer_analytics,
    get_provider_analytics,
    get_scheme_analytics,
    refresh_analytics,
)
from web.api.analytics.schemas import (
    CacheStatusResponse,
    PayerAnalyticsResponse,
    ProviderAnalyticsResponse,
    RefreshBody,
    RefreshResponse,
    SchemeAnalyticsResponse,
)
from web.api.errors import register_exception_handlers

router = APIRouter()


def _flag(value: str) -> bool:
    return value.strip().lower() == "true"


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/payers/{payer_id}/analytics", response_model=PayerAnalyticsResponse)
def payer_analytics(payer_id: str, refresh: str = "false"):
    return get_payer_analytics(payer_id, refresh=_flag(refresh))


@router.get("/providers/{provider_id}/analytics", response_model=ProviderAnalyticsResponse)
def provider_analytics(provider_id: str, refresh: str = "false"):
    return get_provider_analytics(provider_id, refresh=_flag(refresh))


@router.get("/schemes/{scheme_id}/analytics", response_model=SchemeAnalyticsResponse)
def scheme_analytics(scheme_id: str, refresh: str = "false"):
    return get_scheme_analytics(scheme_id, refresh=_flag(refresh))


@router.get("/payers/{payer_id}/analytics/status", response_model=CacheStatusResponse)
def payer_cache_status(payer_id: str):
    return get_cache_status(payer_id, SubjectKind.PAYER)


@router.get("/providers/{provider_id}/analytics/status", response_model=CacheStatusResponse)
def provider_cache_status(provider_id: str):
    return get_cache_status(provider_id, SubjectKind.PROVIDER)


@router.get("/schemes/{scheme_id}/analytics/status", response_model=CacheStatusResponse)
def scheme_cache_status(scheme_id: str):
    return get_cache_status(scheme_id, SubjectKind.SCHEME)


@router.post("/analytics/refresh", response_model=RefreshResponse)
def analytics_refresh(body: RefreshBody):
    return refresh_analytics(body)


def create_app(db_path: str | None = None) -> FastAPI:
    """Build the app; the container is wired on startup."""

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        container.init(db_path)
        yield

    app = FastAPI(title="Provider Financing Analytics", lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()
