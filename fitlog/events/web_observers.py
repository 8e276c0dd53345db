"""Web-facing observers for adherence events.

This module subscribes to the GLOBAL_EVENT_BUS for every adherence event
and stores a lightweight in-memory ring buffer of recent ones that the web
layer can poll (``GET /api/events?since=<cursor>``).

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events.
  * A Lock guards the buffer; with several worker processes each keeps its
    own buffer.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime

from fitlog.utilities.config import MAX_EVENTS
from .Event_Bus import GLOBAL_EVENT_BUS, ALL_EVENTS

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.utcnow().isoformat() + 'Z'
        }
        if isinstance(payload, dict):
            for k in ('user_id', 'log_date', 'day_index', 'item_index', 'checked', 'totals',
                      'session_id', 'sets_recorded', 'dropped', 'collection', 'error'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in ALL_EVENTS:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.info("Web observers subscribed to %s event types", len(ALL_EVENTS))


def get_events(since: Optional[int] = None, user_id: Optional[str] = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally for one user.

    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        data = [e for e in _events if since is None or e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    if user_id is not None:
        data = [e for e in data if e.get('user_id') in (None, user_id)]
    return {'events': data, 'next_cursor': next_cursor}


def clear():
    """Drop buffered events (cursor keeps increasing)."""
    with _lock:
        _events.clear()


__all__ = ['start', 'get_events', 'clear']
