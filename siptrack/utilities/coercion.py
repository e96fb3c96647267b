"""Value coercion shared by the record boundary and the analytics engine.

Stored data comes from forms, AI output and hand-edited JSON, so any field can
be missing, a string, or garbage. These helpers never raise.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any


def to_number(value: Any, default: float = 0.0) -> float:
    """Return value as a finite float, or default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def to_non_negative(value: Any, default: float = 0.0) -> float:
    number = to_number(value, default)
    return number if number >= 0 else default


def to_quantity(value: Any, default: int = 1) -> int:
    """Whole number of servings, at least 1."""
    number = to_number(value, float(default))
    quantity = int(number)
    return quantity if quantity >= 1 else default


def _local_tz():
    return datetime.now().astimezone().tzinfo


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 value into an aware datetime in local time.

    Naive values are taken to be local already.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_local_tz())
    return dt.astimezone()


def local_day(value: Any) -> date | None:
    """Calendar day (local time) of a timestamp, or None when unparseable."""
    dt = parse_timestamp(value)
    return dt.date() if dt else None


def now_iso() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


def to_tags(value: Any) -> list[str]:
    """Tags as a list of non-empty strings; a comma separated string is split."""
    if isinstance(value, str):
        candidates = value.split(',')
    elif isinstance(value, (list, tuple)):
        candidates = value
    else:
        return []
    return [str(t).strip() for t in candidates if t is not None and str(t).strip()]


__all__ = [
    "to_number", "to_non_negative", "to_quantity", "parse_timestamp",
    "local_day", "now_iso", "to_tags",
]
