"""Dashboard payload: lifetime totals, 7-day trends, chart series, mood summary, correlation.

Recomputed from the given snapshots on every call; nothing is cached.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from siptrack.logic.reporting.aggregation import (
    average_mood, calorie_breakdown, drink_totals, health_series, mood_series, spending_series
)
from siptrack.logic.reporting.buckets import record_time
from siptrack.logic.reporting.correlation import correlate
from siptrack.logic.reporting.trends import drink_trends, is_favorable, mood_trend
from siptrack.utilities.config import LOWER_IS_BETTER, TREND_POLARITY, WEEK_START
from siptrack.utilities.constants import WEEKLY

__all__ = ["build_dashboard", "todays_mood"]


def todays_mood(moods: Iterable[Any], now: datetime) -> Optional[Any]:
    """Latest mood entry recorded on now's calendar day, if any."""
    today = now.date()
    best = None
    best_ts = None
    for mood in moods:
        ts = record_time(mood)
        if ts is None or ts.date() != today:
            continue
        if best_ts is None or ts >= best_ts:
            best, best_ts = mood, ts
    return best


def _trend_payload(trend, metric: str, polarity: Dict[str, str]) -> Dict[str, Any]:
    rule = polarity.get(metric, LOWER_IS_BETTER)
    return {
        'direction': trend.direction,
        'percent_change': round(trend.percent_change, 1),
        'polarity': rule,
        'favorable': is_favorable(trend, rule),
    }


def build_dashboard(drinks: Iterable[Any], moods: Iterable[Any], now: Optional[datetime] = None,
                    period: str = WEEKLY, polarity: Optional[Dict[str, str]] = None,
                    week_start: int = WEEK_START) -> Dict[str, Any]:
    """Assemble everything the dashboard page renders.

    Args:
        drinks: drink log snapshot (DrinkLog objects or dicts)
        moods: mood entry snapshot
        now: reference instant for the 7-day windows and the 30-day mood chart
        period: 'weekly' or 'monthly' bucketing for the spending/health charts
        polarity: metric -> 'lower_is_better' | 'higher_is_better'; defaults to config
    """
    drinks = list(drinks)
    moods = list(moods)
    now = (now or datetime.now()).astimezone()
    polarity = polarity or TREND_POLARITY

    totals = drink_totals(drinks)
    trends = {metric: _trend_payload(t, metric, polarity) for metric, t in drink_trends(drinks, now).items()}
    trends['mood'] = _trend_payload(mood_trend(moods), 'mood', polarity)

    today = todays_mood(moods, now)
    return {
        'generated_at': now.isoformat(timespec="seconds"),
        'period': period,
        'has_drinks': bool(drinks),
        'has_moods': bool(moods),
        'totals': {
            'drinks': int(totals['total_quantity']),
            'spent': round(totals['total_spend'], 2),
            'calories': round(totals['total_calories']),
            'weight_gain_lbs': round(totals['estimated_weight_gain_lbs'], 2),
        },
        'calorie_breakdown': {k: round(v) for k, v in calorie_breakdown(drinks).items()},
        'trends': trends,
        'charts': {
            'spending': spending_series(drinks, period, week_start),
            'health': health_series(drinks, period, week_start),
            'mood': mood_series(moods, now),
        },
        'mood': {
            'entries': len(moods),
            'average': round(average_mood(moods), 2) if moods else None,
            'today': today.to_dict() if hasattr(today, 'to_dict') else today,
        },
        'correlation': correlate(drinks, moods).model_dump(),
    }
