"""Common repositories."""

from app.repositories.common.snapshot import SnapshotRepository

__all__ = ["SnapshotRepository"]
