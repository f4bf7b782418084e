"""Claim model. Money is stored in integer cents."""

CLAIM_SEQ_DDL = "CREATE SEQUENCE IF NOT EXISTS claim_seq"

CLAIM_DDL = """
CREATE TABLE IF NOT EXISTS claim (
    id BIGINT PRIMARY KEY DEFAULT nextval('claim_seq'),
    claim_number VARCHAR NOT NULL UNIQUE,
    member_number VARCHAR,
    patient_name VARCHAR,
    provider_id INTEGER NOT NULL,
    payer_id INTEGER NOT NULL,
    scheme_id INTEGER,
    service_date DATE,
    claim_date DATE,
    invoice_amount_cents BIGINT NOT NULL,
    approved_amount_cents BIGINT,
    status VARCHAR DEFAULT 'Pending',
    diagnosis_code VARCHAR,
    procedure_code VARCHAR,
    upload_batch_id INTEGER
)
"""

CLAIM_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_claim_payer ON claim(payer_id)",
    "CREATE INDEX IF NOT EXISTS idx_claim_provider ON claim(provider_id)",
    "CREATE INDEX IF NOT EXISTS idx_claim_scheme ON claim(scheme_id)",
    "CREATE INDEX IF NOT EXISTS idx_claim_service_date ON claim(service_date)",
]

# Fields a claim row may carry after column mapping
CLAIM_FIELDS = (
    "claim_number",
    "member_number",
    "patient_name",
    "provider_name",
    "payer_name",
    "scheme_name",
    "service_date",
    "claim_date",
    "invoice_amount",
    "approved_amount",
    "status",
    "diagnosis_code",
    "procedure_code",
)

# Every upload mapping must cover these
REQUIRED_FIELDS = (
    "claim_number",
    "provider_name",
    "payer_name",
    "service_date",
    "invoice_amount",
)

CLAIM_STATUSES = ("Pending", "Approved", "Rejected", "Processing", "Paid")
