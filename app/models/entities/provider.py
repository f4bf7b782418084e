"""Provider (facility) model."""

from dataclasses import dataclass
from datetime import datetime

from app.models.common import BaseEntity

PROVIDER_SEQ_DDL = "CREATE SEQUENCE IF NOT EXISTS provider_seq"

PROVIDER_DDL = """
CREATE TABLE IF NOT EXISTS provider (
    id INTEGER PRIMARY KEY DEFAULT nextval('provider_seq'),
    name VARCHAR NOT NULL UNIQUE,
    type VARCHAR,
    location VARCHAR,
    created_at TIMESTAMP DEFAULT current_timestamp
)
"""


@dataclass
class Provider(BaseEntity):
    """Healthcare facility submitting claims."""

    id: int
    name: str
    type: str | None
    location: str | None
    created_at: datetime | None
