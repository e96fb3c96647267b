"""Event helper utilities: publish record change events on the global bus.

Quick import:
    from siptrack.events.event_helpers import (
        publish_drink_logged, publish_drink_removed, publish_mood_saved, publish_mood_removed
    )
"""
from __future__ import annotations
from typing import Any
from .Event_Bus import (
    publish,
    DRINK_LOGGED, DRINK_REMOVED, MOOD_SAVED, MOOD_REMOVED,
)

__all__ = [
    'publish_drink_logged', 'publish_drink_removed', 'publish_mood_saved', 'publish_mood_removed',
]


def publish_drink_logged(drink: Any):
    publish(DRINK_LOGGED, {'drink': drink})


def publish_drink_removed(log_id: str, user_id: str):
    publish(DRINK_REMOVED, {'id': log_id, 'user_id': user_id})


def publish_mood_saved(mood: Any):
    publish(MOOD_SAVED, {'mood': mood})


def publish_mood_removed(entry_id: str, user_id: str):
    publish(MOOD_REMOVED, {'id': entry_id, 'user_id': user_id})
