"""Time helpers."""

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def trend_start(today: date, months: int) -> date:
    """First day of the month `months - 1` months before `today`'s month."""
    index = today.year * 12 + (today.month - 1) - (months - 1)
    return date(index // 12, index % 12 + 1, 1)
