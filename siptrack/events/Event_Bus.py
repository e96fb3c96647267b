"""Simple Event Bus / Observer implementation for record changes.

Event names:
  drink.logged  -> payload {"drink": DrinkLog}
  drink.removed -> payload {"id": str, "user_id": str}
  mood.saved    -> payload {"mood": MoodEntry}
  mood.removed  -> payload {"id": str, "user_id": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
DRINK_LOGGED = "drink.logged"
DRINK_REMOVED = "drink.removed"
MOOD_SAVED = "mood.saved"
MOOD_REMOVED = "mood.removed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except ValueError:
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:  # listener errors stay inside the bus
				logger.exception("Error delivering %s to %r", event_name, cb)


# Shared instance for the application
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
	'DRINK_LOGGED', 'DRINK_REMOVED', 'MOOD_SAVED', 'MOOD_REMOVED'
]
