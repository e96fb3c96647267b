"""Period bucketing of timestamped records (weekly / monthly) for charting."""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from siptrack.utilities.coercion import parse_timestamp
from siptrack.utilities.config import WEEK_START
from siptrack.utilities.constants import MONTHLY, WEEKLY

logger = logging.getLogger(__name__)

__all__ = [
    "record_value", "record_time", "week_start_day", "bucket_key",
    "bucket_records", "bucket_label",
]

_TIMESTAMP_KEYS = ("timestamp", "date", "logged_at")


def record_value(record: Any, *names: str) -> Any:
    """First present field among names, from a dict or an entity object."""
    for name in names:
        if isinstance(record, dict):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def record_time(record: Any) -> Optional[datetime]:
    return parse_timestamp(record_value(record, *_TIMESTAMP_KEYS))


def week_start_day(day: date, week_start: int = WEEK_START) -> date:
    """First day of the week containing day.

    Day indexes run 0=Sunday .. 6=Saturday; week_start uses the same numbering.
    """
    day_index = (day.weekday() + 1) % 7
    return day - timedelta(days=(day_index - week_start) % 7)


def bucket_key(timestamp: Any, mode: str, week_start: int = WEEK_START) -> Optional[str]:
    """Bucket key for a timestamp: week-start 'YYYY-MM-DD' or 'YYYY-MM'."""
    dt = parse_timestamp(timestamp)
    if dt is None:
        return None
    if mode == WEEKLY:
        return week_start_day(dt.date(), week_start).isoformat()
    if mode == MONTHLY:
        return f"{dt.year:04d}-{dt.month:02d}"
    raise ValueError(f"Unknown period: {mode!r}")


def _sort_key(key: str, mode: str):
    if mode == WEEKLY:
        return date.fromisoformat(key)
    return key


def bucket_records(records: Iterable[Any], mode: str, week_start: int = WEEK_START) -> Dict[str, List[Any]]:
    """Group records by period, keys in ascending chronological order.

    Records without a readable timestamp are left out. Empty input gives an
    empty mapping.
    """
    if mode not in (WEEKLY, MONTHLY):
        raise ValueError(f"Unknown period: {mode!r}")
    groups: Dict[str, List[Any]] = {}
    for record in records:
        key = bucket_key(record_value(record, *_TIMESTAMP_KEYS), mode, week_start)
        if key is None:
            logger.debug("Skipping record without a readable timestamp: %r", record)
            continue
        groups.setdefault(key, []).append(record)
    return {k: groups[k] for k in sorted(groups, key=lambda k: _sort_key(k, mode))}


def bucket_label(key: str, mode: str) -> str:
    """Human label for a bucket key: 'Wk of Jan 1' or 'January 2024'."""
    if mode == WEEKLY:
        d = date.fromisoformat(key)
        return f"Wk of {d.strftime('%b')} {d.day}"
    year, month = key.split("-")
    return date(int(year), int(month), 1).strftime("%B %Y")
