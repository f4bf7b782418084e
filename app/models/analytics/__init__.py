"""Analytics models."""

from app.models.analytics.entities import (
    MAX_SUBJECT_ID,
    AnalyticsSnapshot,
    AnalyticsSubject,
    RefreshRequest,
    SubjectKind,
)

__all__ = [
    "MAX_SUBJECT_ID",
    "SubjectKind",
    "AnalyticsSubject",
    "AnalyticsSnapshot",
    "RefreshRequest",
]
