"""ETL helper functions - cell parsing for uploaded claim files."""

import re
from datetime import date, datetime
from typing import Any

_CURRENCY_PREFIX = re.compile(r"^\s*KES\s*", re.IGNORECASE)
_DAY_FIRST = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")


def sanitize(value: Any) -> str | None:
    """Trimmed string, or None for empty cells."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_amount(value: Any) -> float | None:
    """Amount from "KES 1,234.56", "1234.56" or a number; None if unparseable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)

    text = sanitize(value)
    if text is None:
        return None
    cleaned = _CURRENCY_PREFIX.sub("", text).replace(",", "").replace(" ", "")
    try:
        return float(cleaned)
    except ValueError:
        return None


def amount_to_cents(value: Any) -> int | None:
    amount = parse_amount(value)
    return None if amount is None else round(amount * 100)


def parse_date(value: Any) -> date | None:
    """ISO date/datetime, or day-first DD/MM/YYYY (DD-MM-YYYY); None if invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = sanitize(value)
    if text is None:
        return None

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    match = _DAY_FIRST.match(text)
    if match:
        day, month, year = (int(g) for g in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None
    return None
