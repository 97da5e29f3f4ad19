# src/task_calendar/core/datekey.py

"""
Day and month keys.

This is the only module that formats or parses "YYYY-MM-DD" / "YYYY-MM".
Keys are built from calendar fields, never from an instant, so a day key does
not depend on a timezone.
"""

from __future__ import annotations

import re
from datetime import date, datetime

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


def day_key(year: int, month: int, day: int) -> str:
    """Return "YYYY-MM-DD". Out-of-range input raises ValueError (from date())."""
    d = date(int(year), int(month), int(day))
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def month_key(year: int, month: int) -> str:
    """Return "YYYY-MM"."""
    if not 1 <= int(month) <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return f"{int(year):04d}-{int(month):02d}"


def day_key_of(d: date) -> str:
    return day_key(d.year, d.month, d.day)


def month_key_of(d: date) -> str:
    return month_key(d.year, d.month)


def parse_month_key(key: str) -> tuple[int, int]:
    m = _MONTH_KEY_RE.match((key or "").strip())
    if not m:
        raise ValueError(f"Invalid month key: {key!r}")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month key: {key!r}")
    return year, month


def parse_day_key(key: str) -> date:
    try:
        return date.fromisoformat((key or "").strip())
    except ValueError:
        raise ValueError(f"Invalid day key: {key!r}") from None


def month_of_day(key: str) -> str:
    return month_key_of(parse_day_key(key))


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months, rolling the year as needed."""
    idx = int(year) * 12 + (int(month) - 1) + int(delta)
    return idx // 12, idx % 12 + 1


def prev_month(year: int, month: int) -> tuple[int, int]:
    return shift_month(year, month, -1)


def next_month(year: int, month: int) -> tuple[int, int]:
    return shift_month(year, month, 1)


def coerce_date(value: date | datetime | str) -> date:
    """
    Calendar date of a stored value.

    Accepts date, datetime, or an ISO-8601 string ("2024-03-05",
    "2024-03-05T00:00:00", "2024-03-05T00:00:00+02:00", "...Z").
    The value's own year/month/day are used; an offset is not converted.
    """
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            raise ValueError(f"Invalid date value: {value!r}") from None
        return date(parsed.year, parsed.month, parsed.day)
    raise TypeError(f"Unsupported date value: {type(value).__name__}")
