"""Analytics snapshot table - append-only, shared by all subject kinds."""

SNAPSHOT_SEQ_DDL = "CREATE SEQUENCE IF NOT EXISTS analytics_snapshot_seq"

SNAPSHOT_DDL = """
CREATE TABLE IF NOT EXISTS analytics_snapshot (
    id BIGINT PRIMARY KEY DEFAULT nextval('analytics_snapshot_seq'),
    subject_kind VARCHAR NOT NULL,
    subject_id INTEGER NOT NULL,
    data JSON NOT NULL,
    computed_at TIMESTAMP NOT NULL
)
"""

SNAPSHOT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_snapshot_subject ON analytics_snapshot(subject_kind, subject_id)",
]
