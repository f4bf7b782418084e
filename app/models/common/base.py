"""Base entity class for all domain entities."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from typing import Any


@dataclass
class BaseEntity:
    """Base class for all entities."""

    @classmethod
    def columns(cls) -> list[str]:
        """Column names in declaration order (matches SELECT order)."""
        return [f.name for f in fields(cls)]

    @classmethod
    def from_row(cls, row: Sequence[Any]):
        """Build entity from a DB row selected with `columns()`."""
        return cls(*row)

    def to_dict(self) -> dict[str, Any]:
        """Convert entity to JSON-friendly dictionary."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, (datetime, date)):
                data[key] = value.isoformat()
        return data
