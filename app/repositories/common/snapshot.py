"""Snapshot repository - analytics snapshot storage."""

import json
from datetime import datetime, timezone

from loguru import logger

from app.models.analytics import AnalyticsSnapshot, AnalyticsSubject
from app.repositories.base import BaseRepository


def _to_db_time(value: datetime) -> datetime:
    """Aware datetime -> naive UTC (column is TIMESTAMP)."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _from_db_time(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)


class SnapshotRepository(BaseRepository):
    """Repository for analytics snapshots.

    Rows are append-only; the newest row per subject is the current snapshot.
    """

    def latest(self, subject: AnalyticsSubject) -> AnalyticsSnapshot | None:
        """Load the current snapshot for a subject."""
        row = self.fetchone(
            """
            SELECT data, computed_at FROM analytics_snapshot
            WHERE subject_kind = ? AND subject_id = ?
            ORDER BY computed_at DESC, id DESC
            LIMIT 1
            """,
            [subject.kind.value, subject.id],
        )
        if row is None:
            return None

        logger.debug("Snapshot hit: {}", subject)
        return AnalyticsSnapshot(
            subject_kind=subject.kind,
            subject_id=subject.id,
            computed_at=_from_db_time(row[1]),
            body=json.loads(row[0]),
        )

    def save(self, snapshot: AnalyticsSnapshot) -> None:
        """Append a snapshot; it becomes the current one."""
        self.execute(
            """
            INSERT INTO analytics_snapshot (subject_kind, subject_id, data, computed_at)
            VALUES (?, ?, ?, ?)
            """,
            [
                snapshot.subject_kind.value,
                snapshot.subject_id,
                json.dumps(snapshot.body),
                _to_db_time(snapshot.computed_at),
            ],
        )
        logger.debug("Snapshot saved: {} at {}", snapshot.subject, snapshot.computed_at)

    def count(self, subject: AnalyticsSubject) -> int:
        """Number of snapshots kept for a subject (current + history)."""
        row = self.fetchone(
            "SELECT COUNT(*) FROM analytics_snapshot WHERE subject_kind = ? AND subject_id = ?",
            [subject.kind.value, subject.id],
        )
        return int(row[0])

    def prune(self, subject: AnalyticsSubject, keep: int = 1) -> int:
        """Delete all but the newest `keep` snapshots of a subject."""
        if keep < 1:
            raise ValueError("keep must be at least 1")

        before = self.count(subject)
        self.execute(
            """
            DELETE FROM analytics_snapshot
            WHERE subject_kind = ? AND subject_id = ? AND id NOT IN (
                SELECT id FROM analytics_snapshot
                WHERE subject_kind = ? AND subject_id = ?
                ORDER BY computed_at DESC, id DESC
                LIMIT ?
            )
            """,
            [subject.kind.value, subject.id, subject.kind.value, subject.id, keep],
        )
        removed = before - self.count(subject)
        if removed:
            logger.info("Pruned {} snapshots for {}", removed, subject)
        return removed
