"""Mood on drinking days vs dry days."""
from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable, List

from siptrack.domain.Reports import CorrelationResult
from siptrack.logic.reporting.aggregation import mood_value
from siptrack.logic.reporting.buckets import record_time

__all__ = ["correlate", "daily_mood_averages"]


def daily_mood_averages(moods: Iterable[Any]) -> Dict[Any, float]:
    """One averaged mood value per local calendar day."""
    per_day: Dict[Any, List[float]] = defaultdict(list)
    for mood in moods:
        ts = record_time(mood)
        if ts is None:
            continue
        per_day[ts.date()].append(mood_value(mood))
    return {day: sum(values) / len(values) for day, values in per_day.items()}


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def correlate(drinks: Iterable[Any], moods: Iterable[Any]) -> CorrelationResult:
    """Compare average mood on days with at least one drink against the other days.

    correlation_strength = average_mood_with_drinks - average_mood_without_drinks.
    It is a difference of means on the 1-5 mood scale, not a Pearson coefficient.
    Only days with a mood entry are analyzed.
    """
    moods = list(moods)
    if not moods:
        return CorrelationResult()
    drink_days = set()
    for drink in drinks:
        ts = record_time(drink)
        if ts is not None:
            drink_days.add(ts.date())

    with_drinks: List[float] = []
    without_drinks: List[float] = []
    for day, value in daily_mood_averages(moods).items():
        if day in drink_days:
            with_drinks.append(value)
        else:
            without_drinks.append(value)

    avg_with = _mean(with_drinks)
    avg_without = _mean(without_drinks)
    return CorrelationResult(
        average_mood_with_drinks=avg_with,
        average_mood_without_drinks=avg_without,
        correlation_strength=avg_with - avg_without,
        days_analyzed=len(with_drinks) + len(without_drinks),
    )
