"""Upload batch model - one loaded claim file and the column mappings it used."""

from dataclasses import dataclass
from datetime import datetime

from app.models.common import BaseEntity

UPLOAD_BATCH_SEQ_DDL = "CREATE SEQUENCE IF NOT EXISTS upload_batch_seq"

UPLOAD_BATCH_DDL = """
CREATE TABLE IF NOT EXISTS upload_batch (
    id INTEGER PRIMARY KEY DEFAULT nextval('upload_batch_seq'),
    filename VARCHAR NOT NULL,
    total_rows INTEGER NOT NULL DEFAULT 0,
    processed_rows INTEGER NOT NULL DEFAULT 0,
    failed_rows INTEGER NOT NULL DEFAULT 0,
    status VARCHAR NOT NULL DEFAULT 'pending',
    error_log JSON,
    created_at TIMESTAMP DEFAULT current_timestamp,
    completed_at TIMESTAMP
)
"""

COLUMN_MAPPING_SEQ_DDL = "CREATE SEQUENCE IF NOT EXISTS column_mapping_seq"

COLUMN_MAPPING_DDL = """
CREATE TABLE IF NOT EXISTS column_mapping (
    id INTEGER PRIMARY KEY DEFAULT nextval('column_mapping_seq'),
    batch_id INTEGER NOT NULL,
    source_column VARCHAR NOT NULL,
    schema_field VARCHAR NOT NULL,
    UNIQUE (batch_id, schema_field)
)
"""

UPLOAD_STATUSES = ("pending", "processing", "completed", "failed")


@dataclass(frozen=True)
class ColumnMapping:
    """One uploaded column feeding one claim field."""

    source_column: str
    schema_field: str


@dataclass
class UploadBatch(BaseEntity):
    """Load of one claim file. error_log holds the rejected rows as JSON."""

    id: int
    filename: str
    total_rows: int
    processed_rows: int
    failed_rows: int
    status: str
    error_log: str | None
    created_at: datetime | None
    completed_at: datetime | None
