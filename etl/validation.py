"""Claim row validation."""

from dataclasses import dataclass
from typing import Any

from etl.helpers import parse_amount, parse_date, sanitize


@dataclass
class RowError:
    """One problem in one uploaded row (rows are 1-based)."""

    row: int
    field: str
    value: Any
    error: str


def validate_claim_row(data: dict[str, Any], row: int) -> list[RowError]:
    """Problems with a mapped claim row; empty list when valid."""
    errors = []

    for field, label in (
        ("claim_number", "Claim number"),
        ("provider_name", "Provider name"),
        ("payer_name", "Payer name"),
    ):
        if sanitize(data.get(field)) is None:
            errors.append(RowError(row, field, data.get(field), f"{label} is required"))

    invoice = data.get("invoice_amount")
    if sanitize(invoice) is None:
        errors.append(RowError(row, "invoice_amount", invoice, "Invoice amount is required"))
    else:
        amount = parse_amount(invoice)
        if amount is None or amount < 0:
            errors.append(RowError(row, "invoice_amount", invoice, "Invoice amount must be a non-negative number"))

    approved = data.get("approved_amount")
    if sanitize(approved) is not None:
        amount = parse_amount(approved)
        if amount is None or amount < 0:
            errors.append(RowError(row, "approved_amount", approved, "Approved amount must be a non-negative number"))

    service_date = data.get("service_date")
    if sanitize(service_date) is None:
        errors.append(RowError(row, "service_date", service_date, "Service date is required"))
    elif parse_date(service_date) is None:
        errors.append(RowError(row, "service_date", service_date, "Invalid service date format"))

    claim_date = data.get("claim_date")
    if sanitize(claim_date) is not None and parse_date(claim_date) is None:
        errors.append(RowError(row, "claim_date", claim_date, "Invalid claim date format"))

    return errors


def summarize(errors: list[RowError]) -> str:
    """One-line summary, e.g. "Found 3 error(s) in 2 row(s)"."""
    if not errors:
        return "All rows validated successfully"
    rows = {e.row for e in errors}
    return f"Found {len(errors)} error(s) in {len(rows)} row(s)"
