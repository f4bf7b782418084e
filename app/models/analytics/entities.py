"""Analytics domain entities - subjects, snapshots, refresh requests."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class SubjectKind(StrEnum):
    """Entity kinds that carry 360 analytics."""

    PAYER = "payer"
    PROVIDER = "provider"
    SCHEME = "scheme"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Entity id columns are INTEGER
MAX_SUBJECT_ID = 2**31 - 1


@dataclass(frozen=True)
class AnalyticsSubject:
    """The payer, provider or scheme whose analytics are requested."""

    kind: SubjectKind
    id: int

    @property
    def key(self) -> tuple[str, int]:
        return (self.kind.value, self.id)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """Persisted, timestamped analytics result for a subject."""

    subject_kind: SubjectKind
    subject_id: int
    computed_at: datetime
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def subject(self) -> AnalyticsSubject:
        return AnalyticsSubject(self.subject_kind, self.subject_id)

    def to_dict(self) -> dict[str, Any]:
        """Body plus computed_at, as returned to clients."""
        return {**self.body, "computed_at": self.computed_at.isoformat()}


@dataclass(frozen=True)
class RefreshRequest:
    """Analytics lookup, optionally bypassing the cache."""

    subject: AnalyticsSubject
    force: bool = False
