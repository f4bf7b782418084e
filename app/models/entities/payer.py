"""Payer (insurer) model."""

from dataclasses import dataclass
from datetime import datetime

from app.models.common import BaseEntity

PAYER_SEQ_DDL = "CREATE SEQUENCE IF NOT EXISTS payer_seq"

PAYER_DDL = """
CREATE TABLE IF NOT EXISTS payer (
    id INTEGER PRIMARY KEY DEFAULT nextval('payer_seq'),
    name VARCHAR NOT NULL UNIQUE,
    type VARCHAR,
    created_at TIMESTAMP DEFAULT current_timestamp
)
"""


@dataclass
class Payer(BaseEntity):
    """Insurer paying out claims."""

    id: int
    name: str
    type: str | None
    created_at: datetime | None
