"""Column mappings - uploaded file headers to claim fields."""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from app.errors import ValidationError
from app.models.claims import CLAIM_FIELDS, REQUIRED_FIELDS, ColumnMapping


def load_mappings(path: str | Path) -> list[ColumnMapping]:
    """Read mappings from JSON.

    Accepts a list of {"source_column", "schema_field"} objects or a plain
    {"source column": "schema_field"} object.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        return [ColumnMapping(src, field) for src, field in data.items()]
    if isinstance(data, list):
        try:
            return [ColumnMapping(m["source_column"], m["schema_field"]) for m in data]
        except (KeyError, TypeError) as e:
            raise ValidationError(f"Malformed mapping entry in {path}: {e}") from e
    raise ValidationError(f"Mappings in {path} must be a list or an object")


def validate_mappings(mappings: list[ColumnMapping], columns: Iterable[str] | None = None) -> None:
    """Raise ValidationError unless mappings cover every required claim field."""
    if not mappings:
        raise ValidationError("Mappings array is required")

    fields = [m.schema_field for m in mappings]

    unknown = sorted({f for f in fields if f not in CLAIM_FIELDS})
    if unknown:
        raise ValidationError("Unknown schema fields: " + ", ".join(unknown))

    duplicated = sorted({f for f in fields if fields.count(f) > 1})
    if duplicated:
        raise ValidationError("Fields mapped more than once: " + ", ".join(duplicated))

    missing = [f for f in REQUIRED_FIELDS if f not in fields]
    if missing:
        raise ValidationError("Missing required field mappings: " + ", ".join(missing))

    if columns is not None:
        available = set(columns)
        absent = [m.source_column for m in mappings if m.source_column not in available]
        if absent:
            raise ValidationError("Mapped columns not in file: " + ", ".join(absent))


def apply_mappings(row: dict[str, Any], mappings: list[ColumnMapping]) -> dict[str, Any]:
    """File row (header -> cell) to claim data (field -> cell)."""
    return {m.schema_field: row.get(m.source_column) for m in mappings}
