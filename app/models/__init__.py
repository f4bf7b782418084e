"""Models package - DDL and entities for all domains."""

from app.models.analytics import (
    MAX_SUBJECT_ID,
    AnalyticsSnapshot,
    AnalyticsSubject,
    RefreshRequest,
    SubjectKind,
)
from app.models.claims import (
    CLAIM_DDL,
    CLAIM_INDEXES,
    CLAIM_SEQ_DDL,
    COLUMN_MAPPING_DDL,
    COLUMN_MAPPING_SEQ_DDL,
    UPLOAD_BATCH_DDL,
    UPLOAD_BATCH_SEQ_DDL,
    UploadBatch,
)
from app.models.common import SNAPSHOT_DDL, SNAPSHOT_INDEXES, SNAPSHOT_SEQ_DDL, BaseEntity
from app.models.entities import (
    PAYER_DDL,
    PAYER_SEQ_DDL,
    PROVIDER_DDL,
    PROVIDER_SEQ_DDL,
    SCHEME_DDL,
    SCHEME_SEQ_DDL,
    Payer,
    Provider,
    Scheme,
)

ALL_DDL = [
    # Entities
    PAYER_SEQ_DDL,
    PAYER_DDL,
    PROVIDER_SEQ_DDL,
    PROVIDER_DDL,
    SCHEME_SEQ_DDL,
    SCHEME_DDL,
    # Claims
    UPLOAD_BATCH_SEQ_DDL,
    UPLOAD_BATCH_DDL,
    COLUMN_MAPPING_SEQ_DDL,
    COLUMN_MAPPING_DDL,
    CLAIM_SEQ_DDL,
    CLAIM_DDL,
    *CLAIM_INDEXES,
    # Common
    SNAPSHOT_SEQ_DDL,
    SNAPSHOT_DDL,
    *SNAPSHOT_INDEXES,
]

__all__ = [
    # Common
    "BaseEntity",
    "SNAPSHOT_DDL",
    # Entities
    "Payer",
    "Provider",
    "Scheme",
    # Claims
    "UploadBatch",
    # Analytics
    "MAX_SUBJECT_ID",
    "SubjectKind",
    "AnalyticsSubject",
    "AnalyticsSnapshot",
    "RefreshRequest",
    # All DDL
    "ALL_DDL",
]
