"""Claims ETL - load a mapped claim file into the database."""

from dataclasses import asdict, dataclass, field
from pathlib import Path

import duckdb
import polars as pl
from loguru import logger

from app.errors import ValidationError
from app.models.claims import CLAIM_STATUSES, ColumnMapping
from app.repositories.claims import ClaimsRepository, UploadBatchRepository
from app.repositories.entities import PayerRepository, ProviderRepository, SchemeRepository
from etl.helpers import amount_to_cents, parse_date, sanitize
from etl.mapping import apply_mappings, validate_mappings
from etl.validation import RowError, summarize, validate_claim_row

_STATUS_LOOKUP = {s.lower(): s for s in CLAIM_STATUSES}
EXCEL_SUFFIXES = (".xlsx", ".xlsm")


@dataclass
class IngestResult:
    """Outcome of one claim file load."""

    batch_id: int
    processed: int = 0
    failed: int = 0
    errors: list[RowError] = field(default_factory=list)
    payer_ids: set[int] = field(default_factory=set)
    provider_ids: set[int] = field(default_factory=set)
    scheme_ids: set[int] = field(default_factory=set)

    @property
    def message(self) -> str:
        return f"Processed {self.processed} claims, {self.failed} failed"


def read_claims_file(path: str | Path) -> pl.DataFrame:
    """Read a CSV or Excel claim export (first sheet); every cell stays a string until validated."""
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        frame = pl.read_csv(path, infer_schema=False)
    elif suffix in EXCEL_SUFFIXES:
        frame = pl.read_excel(path, engine="openpyxl")
        frame = frame.with_columns(pl.all().cast(pl.String))
    else:
        raise ValidationError(f"Unsupported file type: {path.name} (expected .csv or .xlsx)")

    logger.info("Read {} rows from {}", frame.height, path)
    return frame


def _normalize_status(value) -> str:
    status = sanitize(value)
    if status is None:
        return "Pending"
    return _STATUS_LOOKUP.get(status.lower(), status)


def ingest_claims(
    conn: duckdb.DuckDBPyConnection,
    frame: pl.DataFrame,
    mappings: list[ColumnMapping],
    filename: str = "upload",
) -> IngestResult:
    """Validate and insert claims, creating payers/providers/schemes on first sight.

    Every load is recorded as an upload batch together with its mappings.
    Invalid and duplicate rows are reported in the result and skipped; the
    valid rows are written in one transaction. When that transaction fails,
    the batch is marked failed and the error re-raised.
    """
    validate_mappings(mappings, frame.columns)

    payers = PayerRepository(conn)
    providers = ProviderRepository(conn)
    schemes = SchemeRepository(conn)
    claims = ClaimsRepository(conn)
    batches = UploadBatchRepository(conn)

    result = IngestResult(batch_id=batches.create(filename, frame.height))
    batches.save_mappings(result.batch_id, mappings)
    seen = claims.claim_numbers()
    rows = []

    conn.execute("BEGIN TRANSACTION")
    try:
        for index, raw in enumerate(frame.iter_rows(named=True), start=1):
            if all(sanitize(v) is None for v in raw.values()):
                continue

            data = apply_mappings(raw, mappings)
            problems = validate_claim_row(data, index)
            if problems:
                result.failed += 1
                result.errors.extend(problems)
                continue

            number = sanitize(data["claim_number"])
            if number in seen:
                result.failed += 1
                result.errors.append(RowError(index, "claim_number", number, f"Duplicate claim number: {number}"))
                continue
            seen.add(number)

            payer_id = payers.get_or_create(sanitize(data["payer_name"]))
            provider_id = providers.get_or_create(sanitize(data["provider_name"]))
            scheme_name = sanitize(data.get("scheme_name"))
            scheme_id = schemes.get_or_create(scheme_name, payer_id=payer_id) if scheme_name else None

            rows.append(
                {
                    "claim_number": number,
                    "member_number": sanitize(data.get("member_number")),
                    "patient_name": sanitize(data.get("patient_name")),
                    "provider_id": provider_id,
                    "payer_id": payer_id,
                    "scheme_id": scheme_id,
                    "service_date": parse_date(data["service_date"]),
                    "claim_date": parse_date(data.get("claim_date")),
                    "invoice_amount_cents": amount_to_cents(data["invoice_amount"]),
                    "approved_amount_cents": amount_to_cents(data.get("approved_amount")),
                    "status": _normalize_status(data.get("status")),
                    "diagnosis_code": sanitize(data.get("diagnosis_code")),
                    "procedure_code": sanitize(data.get("procedure_code")),
                    "upload_batch_id": result.batch_id,
                }
            )
            result.payer_ids.add(payer_id)
            result.provider_ids.add(provider_id)
            if scheme_id is not None:
                result.scheme_ids.add(scheme_id)

        result.processed = claims.insert_many(rows)
        conn.execute("COMMIT")
    except Exception as e:
        conn.execute("ROLLBACK")
        batches.finish(result.batch_id, "failed", errors=[{"error": str(e)}])
        raise

    batches.finish(
        result.batch_id,
        "completed",
        processed=result.processed,
        failed=result.failed,
        errors=[asdict(e) for e in result.errors],
    )
    logger.info("Batch {}: {}", result.batch_id, result.message)
    if result.errors:
        logger.warning("{}; first: {}", summarize(result.errors), result.errors[0])
    return result
