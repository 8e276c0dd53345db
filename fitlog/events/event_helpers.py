"""Event helper utilities.

Thin publishing helpers so trackers do not build payload dicts inline.

Quick import:
    from fitlog.events.event_helpers import (
        publish_item_toggled, publish_session_finished, publish_persistence_failed
    )
"""
from __future__ import annotations
from typing import Any, List, Optional

from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    NUTRITION_ITEM_TOGGLED, WORKOUT_EXERCISE_TOGGLED, WORKOUT_SESSION_FINISHED, PERSISTENCE_FAILED,
)

__all__ = [
    'publish_item_toggled', 'publish_session_finished', 'publish_persistence_failed',
]


def publish_item_toggled(log: Any, key: Any, checked: bool, *, workout: bool = False,
                         bus: Optional[EventBus] = None):
    """Publish a nutrition.item_toggled or workout.exercise_toggled event."""
    payload = {
        'user_id': log.user_id,
        'log_date': log.log_date,
        'day_index': key.day_index,
        'item_index': key.item_index,
        'checked': checked,
    }
    if not workout:
        payload['totals'] = {'calories': log.totals.calories, 'protein': log.totals.protein}
    (bus or GLOBAL_EVENT_BUS).publish(WORKOUT_EXERCISE_TOGGLED if workout else NUTRITION_ITEM_TOGGLED, payload)


def publish_session_finished(user_id: str, session_id: str, sets_recorded: int, dropped: List[str],
                             bus: Optional[EventBus] = None):
    """Publish a workout.session_finished event."""
    (bus or GLOBAL_EVENT_BUS).publish(WORKOUT_SESSION_FINISHED, {
        'user_id': user_id,
        'session_id': session_id,
        'sets_recorded': sets_recorded,
        'dropped': list(dropped),
    })


def publish_persistence_failed(collection: str, user_id: str, log_date: str, error: Exception,
                               bus: Optional[EventBus] = None):
    """Publish a persistence.failed event for a write that was logged and skipped."""
    (bus or GLOBAL_EVENT_BUS).publish(PERSISTENCE_FAILED, {
        'collection': collection,
        'user_id': user_id,
        'log_date': log_date,
        'error': str(error),
    })
