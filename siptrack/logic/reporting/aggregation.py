"""Aggregation of drink and mood records: totals, calorie breakdown, chart series.

Every numeric field goes through to_number before arithmetic, so one corrupt
record adds 0 instead of turning a whole bucket into NaN.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List

from siptrack.domain.MoodEntry import normalize_mood_level
from siptrack.logic.reporting.buckets import bucket_label, bucket_records, record_time, record_value
from siptrack.utilities.coercion import parse_timestamp, to_number, to_tags
from siptrack.utilities.config import WEEK_START
from siptrack.utilities.constants import (
    CALORIES_PER_GRAM_CARB, CALORIES_PER_POUND, MOOD_CHART_DAYS, MOOD_LABELS
)

__all__ = [
    "drink_totals", "calorie_breakdown", "average_mood", "metrics_for_range",
    "spending_series", "health_series", "mood_series", "mood_value",
]


def _quantity(record: Any) -> float:
    return to_number(record_value(record, "quantity"))


def _unit_price(record: Any) -> float:
    return to_number(record_value(record, "unit_price", "price", "cost"))


def mood_value(record: Any) -> float:
    """Mood level clamped to 1..5; unreadable values count as neutral."""
    return float(normalize_mood_level(record_value(record, "mood_level", "mood")))


def drink_totals(records: Iterable[Any]) -> Dict[str, float]:
    """Quantity, spend, calories and the derived weight gain of a record set."""
    total_quantity = total_spend = total_calories = 0.0
    for record in records:
        qty = _quantity(record)
        total_quantity += qty
        total_spend += _unit_price(record) * qty
        total_calories += to_number(record_value(record, "calories")) * qty
    return {
        'total_quantity': total_quantity,
        'total_spend': total_spend,
        'total_calories': total_calories,
        'estimated_weight_gain_lbs': total_calories / CALORIES_PER_POUND,
    }


def calorie_breakdown(records: Iterable[Any]) -> Dict[str, float]:
    """Split calories into sugar, other carbs and alcohol (or other).

    Carbs and sugar count 4 kcal per gram. The alcohol share is clamped at 0 per
    record, so declared carbs exceeding declared calories never go negative.
    """
    sugar_total = other_carb_total = alcohol_total = 0.0
    for record in records:
        qty = _quantity(record)
        sugar_cals = to_number(record_value(record, "sugar_g", "sugar")) * qty * CALORIES_PER_GRAM_CARB
        carb_cals = to_number(record_value(record, "carbs_g", "carbs")) * qty * CALORIES_PER_GRAM_CARB
        calories = to_number(record_value(record, "calories")) * qty
        sugar_total += sugar_cals
        other_carb_total += carb_cals - sugar_cals
        alcohol_total += max(0.0, calories - carb_cals)
    return {
        'sugar_calories': sugar_total,
        'other_carb_calories': other_carb_total,
        'alcohol_or_other_calories': alcohol_total,
    }


def average_mood(moods: Iterable[Any]) -> float:
    """Mean mood level; 0.0 for no entries."""
    values = [mood_value(m) for m in moods]
    if not values:
        return 0.0
    return sum(values) / len(values)


def metrics_for_range(records: Iterable[Any], start: datetime, end: datetime) -> Dict[str, float]:
    """drink_totals over records with start <= timestamp < end."""
    start, end = parse_timestamp(start), parse_timestamp(end)
    selected = []
    for record in records:
        ts = record_time(record)
        if ts is not None and start <= ts < end:
            selected.append(record)
    return drink_totals(selected)


def spending_series(records: Iterable[Any], period: str, week_start: int = WEEK_START) -> List[Dict[str, Any]]:
    series = []
    for key, bucket in bucket_records(records, period, week_start).items():
        series.append({
            'key': key,
            'name': bucket_label(key, period),
            'spending': round(drink_totals(bucket)['total_spend'], 2),
        })
    return series


def health_series(records: Iterable[Any], period: str, week_start: int = WEEK_START) -> List[Dict[str, Any]]:
    series = []
    for key, bucket in bucket_records(records, period, week_start).items():
        parts = calorie_breakdown(bucket)
        series.append({
            'key': key,
            'name': bucket_label(key, period),
            'calories_from_alcohol': round(parts['alcohol_or_other_calories']),
            'calories_from_carbs': round(parts['other_carb_calories']),
            'calories_from_sugar': round(parts['sugar_calories']),
        })
    return series


def mood_series(moods: Iterable[Any], now: datetime, days: int = MOOD_CHART_DAYS) -> List[Dict[str, Any]]:
    """Mood chart points for the last `days` days, oldest first."""
    cutoff = parse_timestamp(now) - timedelta(days=days)
    points = []
    for mood in moods:
        ts = record_time(mood)
        if ts is None or ts < cutoff:
            continue
        level = int(mood_value(mood))
        points.append((ts, {
            'date': f"{ts.strftime('%b')} {ts.day}",
            'mood': level,
            'label': MOOD_LABELS.get(level, 'Unknown'),
            'full_date': ts.isoformat(timespec="seconds"),
            'notes': record_value(mood, "notes"),
            'tags': to_tags(record_value(mood, "tags")),
        }))
    points.sort(key=lambda p: p[0])
    return [p for _, p in points]
