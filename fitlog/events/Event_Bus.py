"""Simple Event Bus / Observer implementation for adherence events.

Event names used so far:
  nutrition.item_toggled -> payload {"user_id", "log_date", "day_index", "item_index", "checked", "totals"}
  workout.exercise_toggled -> payload {"user_id", "log_date", "day_index", "item_index", "checked"}
  workout.session_finished -> payload {"user_id", "session_id", "sets_recorded", "dropped"}
  persistence.failed -> payload {"collection", "user_id", "log_date", "error"}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
NUTRITION_ITEM_TOGGLED = "nutrition.item_toggled"
WORKOUT_EXERCISE_TOGGLED = "workout.exercise_toggled"
WORKOUT_SESSION_FINISHED = "workout.session_finished"
PERSISTENCE_FAILED = "persistence.failed"

ALL_EVENTS = (
	NUTRITION_ITEM_TOGGLED, WORKOUT_EXERCISE_TOGGLED, WORKOUT_SESSION_FINISHED, PERSISTENCE_FAILED,
)


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %s", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'ALL_EVENTS',
	'NUTRITION_ITEM_TOGGLED', 'WORKOUT_EXERCISE_TOGGLED', 'WORKOUT_SESSION_FINISHED', 'PERSISTENCE_FAILED',
]
