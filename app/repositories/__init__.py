"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.claims import ClaimsRepository, UploadBatchRepository
from app.repositories.common import SnapshotRepository
from app.repositories.db import (
    close_db,
    connect,
    get_db,
    init_tables,
)
from app.repositories.entities import (
    EntityRepository,
    PayerRepository,
    ProviderRepository,
    SchemeRepository,
)

__all__ = [
    # DB
    "connect",
    "get_db",
    "close_db",
    "init_tables",
    # Base
    "BaseRepository",
    # Common
    "SnapshotRepository",
    # Entities
    "EntityRepository",
    "PayerRepository",
    "ProviderRepository",
    "SchemeRepository",
    # Claims
    "ClaimsRepository",
    "UploadBatchRepository",
]
