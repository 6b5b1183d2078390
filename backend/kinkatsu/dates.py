"""Calendar-day helpers.

A workout day is stored as the UTC-midnight instant of that day, so the
``YYYY-MM-DD`` key round-trips without depending on the server's local zone.
"""
from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone

DAY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_day(value: str | date | datetime) -> date:
    """Accept a ``YYYY-MM-DD`` string, a date, or an instant and return the calendar day."""
    if isinstance(value, datetime):
        return as_utc(value).date()
    if isinstance(value, date):
        return value
    if not DAY_PATTERN.fullmatch(value):
        raise ValueError(f"not a YYYY-MM-DD day: {value!r}")
    return date.fromisoformat(value)


def utc_midnight(value: str | date | datetime) -> datetime:
    return datetime.combine(parse_day(value), time.min, tzinfo=timezone.utc)


def as_utc(instant: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything we store is UTC
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def day_key(value: str | date | datetime) -> str:
    return parse_day(value).isoformat()


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def day_range(start: date, end: date) -> list[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]
