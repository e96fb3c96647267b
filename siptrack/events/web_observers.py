"""Web-facing observers for record change events.

Subscribes to the GLOBAL_EVENT_BUS for drink and mood events and keeps a
bounded in-memory buffer of recent activity that the web layer can poll.

Design:
  * Each event gets an auto-increment integer id (cursor) so clients can ask
    only for newer events (since=<last_id_seen>).
  * A Lock guards the buffer; FastAPI runs sync endpoints on a thread pool.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, DRINK_LOGGED, DRINK_REMOVED, MOOD_SAVED, MOOD_REMOVED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(timespec="seconds"),
        }
        if isinstance(payload, dict):
            drink = payload.get('drink')
            if drink is not None:
                evt['user_id'] = getattr(drink, 'user_id', '')
                evt['record_id'] = getattr(drink, 'id', '')
                evt['summary'] = f"{drink.quantity}x {drink.brand} {drink.name}".replace("  ", " ")
            mood = payload.get('mood')
            if mood is not None:
                evt['user_id'] = getattr(mood, 'user_id', '')
                evt['record_id'] = getattr(mood, 'id', '')
                evt['summary'] = f"Mood: {mood.describe()}"
            if 'id' in payload:
                evt['record_id'] = payload['id']
                evt['user_id'] = payload.get('user_id', '')
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (DRINK_LOGGED, DRINK_REMOVED, MOOD_SAVED, MOOD_REMOVED):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.info("Activity observers subscribed")


def get_events(since: int | None = None, user_id: str | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally for one user.

    next_cursor is the largest id seen so the client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    if user_id is not None:
        data = [e for e in data if e.get('user_id') == user_id]
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
