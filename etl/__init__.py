"""ETL package - claim file loading."""

from etl.claims import IngestResult, ingest_claims, read_claims_file
from etl.mapping import ColumnMapping, load_mappings, validate_mappings
from etl.validation import RowError, summarize

__all__ = [
    "ColumnMapping",
    "IngestResult",
    "RowError",
    "ingest_claims",
    "load_mappings",
    "read_claims_file",
    "summarize",
    "validate_mappings",
]
