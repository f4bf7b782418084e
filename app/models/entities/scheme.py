"""Scheme (payer insurance product) model."""

from dataclasses import dataclass
from datetime import datetime

from app.models.common import BaseEntity

SCHEME_SEQ_DDL = "CREATE SEQUENCE IF NOT EXISTS scheme_seq"

SCHEME_DDL = """
CREATE TABLE IF NOT EXISTS scheme (
    id INTEGER PRIMARY KEY DEFAULT nextval('scheme_seq'),
    payer_id INTEGER NOT NULL,
    name VARCHAR NOT NULL,
    created_at TIMESTAMP DEFAULT current_timestamp,
    UNIQUE (payer_id, name)
)
"""


@dataclass
class Scheme(BaseEntity):
    """Insurance product of one payer; names are unique per payer."""

    id: int
    payer_id: int
    name: str
    created_at: datetime | None
