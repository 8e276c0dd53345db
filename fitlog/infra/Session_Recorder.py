"""Workout session recorder: sessions, their sets, and the exercise catalog.

Set records name their exercise in free text; they are matched against the
canonical catalog by case-insensitive exact name. Sets whose exercise
cannot be found are dropped with a warning, so a stored session may hold
fewer sets than were completed.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

from fitlog.domain.Session import SessionMeta, SessionResult, SetRecord
from fitlog.infra.Json_Store import JsonStore
from fitlog.utilities.constants import EXERCISES, WORKOUT_SESSIONS, WORKOUT_SETS
from fitlog.utilities.errors import PersistenceError

logger = logging.getLogger(__name__)


def _normalize(name: str) -> str:
    return (name or '').strip().lower()


class SessionRecorder:
    def __init__(self, store: JsonStore):
        self.store = store

    def seed_catalog(self, exercises: Iterable[Dict]) -> int:
        '''Add catalog exercises whose name is not already present.'''
        known = {_normalize(e.get('name', '')) for e in self.store.select(EXERCISES)}
        fresh = []
        for ex in exercises:
            key = _normalize(ex.get('name', ''))
            if key and key not in known:
                known.add(key)
                fresh.append({k: v for k, v in ex.items() if k != 'id'})
        self.store.insert_many(EXERCISES, fresh)
        return len(fresh)

    def catalog(self) -> List[Dict]:
        return sorted(self.store.select(EXERCISES), key=lambda e: _normalize(e.get('name', '')))

    def resolve_exercise_id(self, name: str, catalog: Optional[List[Dict]] = None) -> Optional[str]:
        key = _normalize(name)
        if not key:
            return None
        for ex in catalog if catalog is not None else self.store.select(EXERCISES):
            if _normalize(ex.get('name', '')) == key:
                return ex.get('id')
        return None

    def create_session(self, meta: SessionMeta) -> str:
        record = meta.to_dict()
        record["id"] = uuid4().hex
        record["created_at"] = datetime.utcnow().isoformat() + "Z"
        self.store.insert_many(WORKOUT_SESSIONS, [record])
        return record["id"]

    def bulk_insert_sets(self, session_id: str, sets: List[Dict]) -> None:
        self.store.insert_many(WORKOUT_SETS, [{**s, "session_id": session_id} for s in sets])

    def record_session(self, meta: SessionMeta, sets: List[SetRecord]) -> SessionResult:
        """Create the session, resolve every set's exercise and store the resolved sets.

        Raises PersistenceError if the session or its sets cannot be written.
        """
        # One catalog read for the whole session instead of one per set
        catalog = self.store.select(EXERCISES)
        rows, dropped = self._resolve_sets(sets, catalog)
        session_id = self.create_session(meta)
        if rows:
            try:
                self.bulk_insert_sets(session_id, rows)
            except PersistenceError:
                self._discard_session(session_id)
                raise
        logger.info("Session %s stored for %s: %s set(s), %s dropped",
                    session_id, meta.user_id, len(rows), len(dropped))
        return SessionResult(session_id, len(rows), dropped)

    def _resolve_sets(self, sets: List[SetRecord], catalog: List[Dict]) -> Tuple[List[Dict], List[str]]:
        rows: List[Dict] = []
        dropped: List[str] = []
        for s in sets:
            exercise_id = self.resolve_exercise_id(s.exercise_name, catalog)
            if exercise_id is None:
                logger.warning("Exercise not found in catalog: %s", s.exercise_name)
                if s.exercise_name not in dropped:
                    dropped.append(s.exercise_name)
                continue
            rows.append({
                "exercise_id": exercise_id,
                "set_order": len(rows) + 1,
                "reps": s.reps,
                "weight_kg": s.weight,
                "rpe": s.rpe,
            })
        return rows, dropped

    def _discard_session(self, session_id: str) -> None:
        # Its sets were not stored
        try:
            self.store.delete(WORKOUT_SESSIONS, {"id": session_id})
        except PersistenceError as e:
            logger.error("Could not remove incomplete session %s: %s", session_id, e)

    def sessions_for(self, user_id: str) -> List[Dict]:
        return self.store.select(WORKOUT_SESSIONS, {"user_id": user_id})


__all__ = ["SessionRecorder"]
