"""Analytics service - subject lookups, cache status, bulk refresh."""

from collections.abc import Callable
from datetime import datetime

from loguru import logger

from app.errors import AnalyticsError, NotFoundError
from app.models.analytics import AnalyticsSnapshot, AnalyticsSubject, RefreshRequest, SubjectKind
from app.models.common import BaseEntity
from app.repositories.common import SnapshotRepository
from app.repositories.entities import EntityRepository
from app.services.analytics.clock import utcnow
from app.services.analytics.freshness import FreshnessPolicy
from app.services.analytics.refresher import AnalyticsCacheRefresher, validate_subject


class AnalyticsService:
    """Analytics business logic over the cache refresher."""

    def __init__(
        self,
        refresher: AnalyticsCacheRefresher,
        snapshot_repo: SnapshotRepository,
        entity_repos: dict[SubjectKind, EntityRepository],
        freshness: FreshnessPolicy,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._refresher = refresher
        self._snapshots = snapshot_repo
        self._entities = entity_repos
        self._freshness = freshness
        self._clock = clock

    def get_entity(self, subject: AnalyticsSubject) -> BaseEntity:
        """Entity row for a subject; NotFoundError if missing."""
        validate_subject(subject)
        entity = self._entities[subject.kind].get_by_id(subject.id)
        if entity is None:
            raise NotFoundError(f"{subject.kind.label} not found")
        return entity

    def get_analytics(self, request: RefreshRequest) -> tuple[BaseEntity, AnalyticsSnapshot]:
        """Entity and its current analytics (existence checked before any recompute)."""
        entity = self.get_entity(request.subject)
        snapshot = self._refresher.get_or_refresh(request.subject, force=request.force)
        return entity, snapshot

    def refresh(self, subject: AnalyticsSubject) -> AnalyticsSnapshot:
        self.get_entity(subject)
        return self._refresher.refresh(subject)

    def cache_status(self, subject: AnalyticsSubject) -> dict:
        """Snapshot state of a subject, including whether a recompute is running."""
        self.get_entity(subject)
        latest = self._snapshots.latest(subject)
        refreshing = self._refresher.is_refreshing(subject)
        if latest is None:
            return {"exists": False, "computed_at": None, "is_stale": True, "snapshots": 0, "refreshing": refreshing}

        return {
            "exists": True,
            "computed_at": latest.computed_at,
            "is_stale": not self._freshness.is_fresh(latest, self._clock()),
            "snapshots": self._snapshots.count(subject),
            "refreshing": refreshing,
        }

    def refresh_all(self, kind: SubjectKind | None = None) -> dict[str, int]:
        """Recompute every subject of a kind (all kinds by default); failures are counted, not raised."""
        kinds = [kind] if kind else list(SubjectKind)
        counts = {f"{k.value}s": 0 for k in kinds}
        counts["failed"] = 0

        for k in kinds:
            for entity_id in self._entities[k].list_ids():
                subject = AnalyticsSubject(k, entity_id)
                try:
                    self._refresher.refresh(subject)
                except AnalyticsError as e:
                    logger.warning("Failed to refresh {}: {}", subject, e.message)
                    counts["failed"] += 1
                    continue
                counts[f"{k.value}s"] += 1

        logger.info("Refreshed analytics: {}", counts)
        return counts

    def prune(self, keep: int = 1, kind: SubjectKind | None = None) -> int:
        """Drop snapshot history beyond the newest `keep` per subject."""
        kinds = [kind] if kind else list(SubjectKind)
        removed = 0
        for k in kinds:
            for entity_id in self._entities[k].list_ids():
                removed += self._snapshots.prune(AnalyticsSubject(k, entity_id), keep)
        return removed
