"""Derived analytics results returned by the reporting logic (never persisted)."""
from typing import Literal

from pydantic import BaseModel, Field

TrendDirection = Literal["up", "down", "stable"]


class TrendResult(BaseModel):
    """Change of one metric between two adjacent comparison windows.

    percent_change is always >= 0; the sign lives in direction.
    """
    direction: TrendDirection = "stable"
    percent_change: float = Field(0.0, ge=0)


class CorrelationResult(BaseModel):
    """Average mood on drinking days vs dry days.

    correlation_strength is the plain difference of the two means
    (with - without), not a statistical correlation coefficient.
    """
    average_mood_with_drinks: float = 0.0
    average_mood_without_drinks: float = 0.0
    correlation_strength: float = 0.0
    days_analyzed: int = 0
