"""Analytics cache refresher - cached read with recompute on miss.

`get_or_refresh` returns the current snapshot of a subject when the freshness
policy accepts it, and otherwise recomputes, persists and returns a new one.
`force=True` skips the lookup. Recomputes for one subject are deduplicated:
concurrent callers share the in-flight result.

A failed recompute persists nothing, so the previous snapshot stays current.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from loguru import logger

from app.errors import AnalyticsError, ComputeFailureError, InvalidSubjectError
from app.models.analytics import MAX_SUBJECT_ID, AnalyticsSnapshot, AnalyticsSubject, SubjectKind
from app.services.analytics.clock import utcnow
from app.services.analytics.freshness import FreshnessPolicy
from app.services.analytics.single_flight import SingleFlight


class SnapshotStore(Protocol):
    def latest(self, subject: AnalyticsSubject) -> AnalyticsSnapshot | None: ...

    def save(self, snapshot: AnalyticsSnapshot) -> None: ...


class AnalyticsComputer(Protocol):
    def compute(self, subject: AnalyticsSubject) -> dict: ...


def validate_subject(subject: AnalyticsSubject) -> None:
    """Raise InvalidSubjectError unless kind is known and id is an int in 1..MAX_SUBJECT_ID."""
    if not isinstance(subject.kind, SubjectKind):
        raise InvalidSubjectError(f"Unknown subject kind: {subject.kind!r}")
    if isinstance(subject.id, bool) or not isinstance(subject.id, int) or not 1 <= subject.id <= MAX_SUBJECT_ID:
        raise InvalidSubjectError(f"Invalid {subject.kind.value} ID: {subject.id!r}")


class AnalyticsCacheRefresher:
    """Read-through analytics cache for payers, providers and schemes."""

    def __init__(
        self,
        store: SnapshotStore,
        computer: AnalyticsComputer,
        freshness: FreshnessPolicy,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._store = store
        self._computer = computer
        self._freshness = freshness
        self._clock = clock
        self._flights: SingleFlight[tuple[str, int], AnalyticsSnapshot] = SingleFlight()
        logger.debug("AnalyticsCacheRefresher initialized")

    def get_or_refresh(self, subject: AnalyticsSubject, force: bool = False) -> AnalyticsSnapshot:
        """Current snapshot, recomputed when missing, stale or forced."""
        validate_subject(subject)

        if not force:
            cached = self._store.latest(subject)
            if cached is not None and self._freshness.is_fresh(cached, self._clock()):
                logger.debug("Cache hit: {}", subject)
                return cached
            logger.debug("Cache {}: {}", "stale" if cached else "miss", subject)

        return self._recompute(subject)

    def refresh(self, subject: AnalyticsSubject) -> AnalyticsSnapshot:
        """Unconditional recompute."""
        validate_subject(subject)
        return self._recompute(subject)

    def is_refreshing(self, subject: AnalyticsSubject) -> bool:
        """Whether a recompute for the subject is running right now."""
        return self._flights.in_flight(subject.key)

    def _recompute(self, subject: AnalyticsSubject) -> AnalyticsSnapshot:
        return self._flights.do(subject.key, lambda: self._compute_and_save(subject))

    def _compute_and_save(self, subject: AnalyticsSubject) -> AnalyticsSnapshot:
        logger.info("Recomputing analytics for {}", subject)
        try:
            body = self._computer.compute(subject)
        except AnalyticsError:
            raise
        except Exception as e:
            logger.error("Analytics compute failed for {}: {}", subject, e)
            raise ComputeFailureError(subject.kind.value, subject.id, str(e)) from e

        snapshot = AnalyticsSnapshot(
            subject_kind=subject.kind,
            subject_id=subject.id,
            computed_at=self._clock(),
            body=body,
        )

        try:
            self._store.save(snapshot)
        except Exception as e:
            logger.error("Snapshot write failed for {}: {}", subject, e)
            raise ComputeFailureError(subject.kind.value, subject.id, str(e)) from e

        return snapshot
