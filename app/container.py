"""Dependency Injection container - initialized at app startup."""

from app.models.analytics import SubjectKind
from app.repositories.claims import ClaimsRepository
from app.repositories.common import SnapshotRepository
from app.repositories.db import connect
from app.repositories.entities import PayerRepository, ProviderRepository, SchemeRepository
from app.services.analytics import (
    AnalyticsCacheRefresher,
    AnalyticsCalculator,
    AnalyticsService,
    TtlFreshnessPolicy,
)


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self, db_path: str | None = None) -> None:
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized:
            return

        connect(db_path)

        # Repositories (singletons)
        self._payer_repo = PayerRepository()
        self._provider_repo = ProviderRepository()
        self._scheme_repo = SchemeRepository()
        self._claims_repo = ClaimsRepository()
        self._snapshot_repo = SnapshotRepository()
        entity_repos = {
            SubjectKind.PAYER: self._payer_repo,
            SubjectKind.PROVIDER: self._provider_repo,
            SubjectKind.SCHEME: self._scheme_repo,
        }

        # Services (with injected repos)
        self.freshness = TtlFreshnessPolicy.from_settings()

        self.calculator = AnalyticsCalculator(
            claims_repo=self._claims_repo,
            entity_repos=entity_repos,
        )

        self.refresher = AnalyticsCacheRefresher(
            store=self._snapshot_repo,
            computer=self.calculator,
            freshness=self.freshness,
        )

        self.analytics = AnalyticsService(
            refresher=self.refresher,
            snapshot_repo=self._snapshot_repo,
            entity_repos=entity_repos,
            freshness=self.freshness,
        )

        self._initialized = True

    def reset(self) -> None:
        """Drop all instances so the next init() rewires (tests, reconnects)."""
        self._initialized = False


# Global container instance
container = Container()
