"""Freshness policies - decide whether a cached snapshot is still usable."""

from datetime import datetime, timedelta
from typing import Protocol

from app.models.analytics import AnalyticsSnapshot, SubjectKind
from settings import (
    PAYER_ANALYTICS_TTL_SECONDS,
    PROVIDER_ANALYTICS_TTL_SECONDS,
    SCHEME_ANALYTICS_TTL_SECONDS,
)


class FreshnessPolicy(Protocol):
    def is_fresh(self, snapshot: AnalyticsSnapshot, now: datetime) -> bool: ...


class TtlFreshnessPolicy:
    """Snapshot is fresh while younger than the TTL of its subject kind."""

    def __init__(self, ttls: dict[SubjectKind, timedelta]):
        self._ttls = dict(ttls)

    @classmethod
    def from_settings(cls) -> "TtlFreshnessPolicy":
        return cls(
            {
                SubjectKind.PAYER: timedelta(seconds=PAYER_ANALYTICS_TTL_SECONDS),
                SubjectKind.PROVIDER: timedelta(seconds=PROVIDER_ANALYTICS_TTL_SECONDS),
                SubjectKind.SCHEME: timedelta(seconds=SCHEME_ANALYTICS_TTL_SECONDS),
            }
        )

    def ttl(self, kind: SubjectKind) -> timedelta:
        return self._ttls[kind]

    def is_fresh(self, snapshot: AnalyticsSnapshot, now: datetime) -> bool:
        return now - snapshot.computed_at < self.ttl(snapshot.subject_kind)
