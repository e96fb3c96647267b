"""Trend calculation between two adjacent comparison windows."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, Optional

from siptrack.domain.Reports import TrendResult
from siptrack.logic.reporting.aggregation import average_mood, metrics_for_range
from siptrack.logic.reporting.buckets import record_time
from siptrack.utilities.coercion import parse_timestamp, to_number
from siptrack.utilities.config import HIGHER_IS_BETTER, LOWER_IS_BETTER
from siptrack.utilities.constants import MOOD_TREND_ENTRIES, TREND_WINDOW_DAYS

__all__ = ["calculate_trend", "drink_trends", "mood_trend", "is_favorable"]


def calculate_trend(current, previous) -> TrendResult:
    """Direction and percentage change from previous to current.

    A rise from a zero base is reported as 100% since no real percentage exists.
    """
    current = to_number(current)
    previous = to_number(previous)
    if previous == 0 and current == 0:
        return TrendResult(direction="stable", percent_change=0.0)
    if previous == 0:
        return TrendResult(direction="up", percent_change=100.0)
    if current == previous:
        return TrendResult(direction="stable", percent_change=0.0)
    change = abs(current - previous) / abs(previous) * 100
    return TrendResult(direction="up" if current > previous else "down", percent_change=change)


def drink_trends(records: Iterable[Any], now: datetime,
                 window_days: int = TREND_WINDOW_DAYS) -> Dict[str, TrendResult]:
    """Last `window_days` days against the `window_days` days before them.

    Windows are calendar ranges ending at now: [now-7d, now) vs [now-14d, now-7d).
    """
    records = list(records)
    now = parse_timestamp(now)
    last_start = now - timedelta(days=window_days)
    prev_start = last_start - timedelta(days=window_days)
    last = metrics_for_range(records, last_start, now)
    prev = metrics_for_range(records, prev_start, last_start)
    return {
        'drinks': calculate_trend(last['total_quantity'], prev['total_quantity']),
        'spent': calculate_trend(last['total_spend'], prev['total_spend']),
        'calories': calculate_trend(last['total_calories'], prev['total_calories']),
        'weight_gain': calculate_trend(last['estimated_weight_gain_lbs'], prev['estimated_weight_gain_lbs']),
    }


def mood_trend(moods: Iterable[Any], entries: int = MOOD_TREND_ENTRIES) -> TrendResult:
    """Average of the last `entries` mood entries against the `entries` before them.

    Unlike drink_trends this counts entries, not days: gaps between entries are
    ignored.
    """
    dated = [(record_time(m), m) for m in moods]
    ordered = [m for ts, m in sorted((p for p in dated if p[0] is not None), key=lambda p: p[0])]
    recent = ordered[-entries:]
    previous = ordered[-2 * entries:-entries] if len(ordered) > entries else []
    return calculate_trend(average_mood(recent), average_mood(previous))


def is_favorable(trend: TrendResult, polarity: str = LOWER_IS_BETTER) -> Optional[bool]:
    """Whether a trend is good news under the metric's polarity; None when stable."""
    if trend.direction == "stable":
        return None
    if polarity == HIGHER_IS_BETTER:
        return trend.direction == "up"
    return trend.direction == "down"
