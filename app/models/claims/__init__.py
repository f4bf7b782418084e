"""Claims domain models."""

from app.models.claims.claim import (
    CLAIM_DDL,
    CLAIM_FIELDS,
    CLAIM_INDEXES,
    CLAIM_SEQ_DDL,
    CLAIM_STATUSES,
    REQUIRED_FIELDS,
)
from app.models.claims.upload import (
    COLUMN_MAPPING_DDL,
    COLUMN_MAPPING_SEQ_DDL,
    UPLOAD_BATCH_DDL,
    UPLOAD_BATCH_SEQ_DDL,
    UPLOAD_STATUSES,
    ColumnMapping,
    UploadBatch,
)

__all__ = [
    "CLAIM_SEQ_DDL",
    "CLAIM_DDL",
    "CLAIM_INDEXES",
    "CLAIM_FIELDS",
    "CLAIM_STATUSES",
    "REQUIRED_FIELDS",
    "UPLOAD_BATCH_SEQ_DDL",
    "UPLOAD_BATCH_DDL",
    "COLUMN_MAPPING_SEQ_DDL",
    "COLUMN_MAPPING_DDL",
    "UPLOAD_STATUSES",
    "ColumnMapping",
    "UploadBatch",
]
