"""Common models - base classes and shared tables."""

from app.models.common.base import BaseEntity
from app.models.common.cache import SNAPSHOT_DDL, SNAPSHOT_INDEXES, SNAPSHOT_SEQ_DDL

__all__ = [
    "BaseEntity",
    "SNAPSHOT_SEQ_DDL",
    "SNAPSHOT_DDL",
    "SNAPSHOT_INDEXES",
]
