"""Daily workout tracker.

Exercise completion flags live in today's workout log keyed by
(day index, exercise index). Unlike the nutrition tracker there is no
today-only check on toggles and no stored aggregate: the completed count
is derived from the flags when read.

Finishing a session expands every completed exercise into one set record
per planned set and hands them to the SessionRecorder.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from fitlog.domain.DailyLog import DailyLog, ItemKey
from fitlog.domain.Plan import ExerciseItem, WeeklyPlan
from fitlog.domain.Session import SessionMeta, SessionResult, SetRecord
from fitlog.events.Event_Bus import EventBus
from fitlog.events.event_helpers import (
    publish_item_toggled, publish_persistence_failed, publish_session_finished,
)
from fitlog.infra.Json_Store import JsonStore
from fitlog.infra.Session_Recorder import SessionRecorder
from fitlog.utilities.config import DEFAULT_RPE
from fitlog.utilities.constants import DAILY_LOG_KEY, PLACEHOLDER_WEIGHT, WORKOUT_LOGS
from fitlog.utilities.dates import Clock, format_date
from fitlog.utilities.errors import EmptySessionError, PersistenceError

logger = logging.getLogger(__name__)


def completed_exercises(plan: Optional[WeeklyPlan], day_idx: int, log: DailyLog) -> List[ExerciseItem]:
    day = plan.day(day_idx) if plan is not None else None
    if day is None:
        return []
    return [item for i, item in enumerate(day.items)
            if isinstance(item, ExerciseItem) and log.is_checked(ItemKey(day_idx, i))]


def expand_sets(exercises: List[ExerciseItem], rpe: int = DEFAULT_RPE) -> List[SetRecord]:
    '''One SetRecord per planned set of each exercise, weight left at the placeholder.'''
    sets: List[SetRecord] = []
    for ex in exercises:
        for _ in range(ex.parsed_sets):
            sets.append(SetRecord(ex.name, ex.parsed_reps, weight=PLACEHOLDER_WEIGHT, rpe=rpe))
    return sets


class DailyWorkoutTracker:
    def __init__(self, store: JsonStore, recorder: SessionRecorder, today: Clock = date.today,
                 bus: Optional[EventBus] = None, rpe: int = DEFAULT_RPE):
        self.store = store
        self.recorder = recorder
        self.today = today
        self.bus = bus
        self.rpe = rpe
        # Today's log per user; a new day replaces the previous entry
        self._logs: Dict[str, DailyLog] = {}

    def load_day(self, user_id: str, log_date: Optional[date] = None) -> DailyLog:
        today = self.today()
        log = self._fetch(user_id, log_date or today)
        if log.log_date == format_date(today):
            self._logs[user_id] = log
        return log.copy()

    def _fetch(self, user_id: str, day: date) -> DailyLog:
        date_str = format_date(day)
        try:
            record = self.store.get(WORKOUT_LOGS, {"user_id": user_id, "log_date": date_str})
        except PersistenceError as e:
            logger.error("Loading workout log %s/%s failed: %s", user_id, date_str, e)
            record = None
        return DailyLog.from_record(record, user_id, date_str)

    def _local(self, user_id: str, today: Optional[date] = None) -> DailyLog:
        today = today or self.today()
        log = self._logs.get(user_id)
        if log is None or log.log_date != format_date(today):
            log = self._logs[user_id] = self._fetch(user_id, today)
        return log

    def toggle_exercise(self, user_id: str, day_idx: int, ex_idx: int) -> DailyLog:
        # Any plan day is editable here; nutrition toggles are limited to today.
        log = self._local(user_id)
        key = ItemKey(day_idx, ex_idx)
        checked = log.flip(key)
        self._persist(log)
        publish_item_toggled(log, key, checked, workout=True, bus=self.bus)
        return log.copy()

    def set_note(self, user_id: str, note: str) -> DailyLog:
        log = self._local(user_id)
        log.note = note
        self._persist(log)
        return log.copy()

    def completed_count(self, user_id: str, day_idx: Optional[int] = None) -> int:
        return self._local(user_id).completed_count(day_idx)

    def finish_session(self, user_id: str, day_idx: int, plan: Optional[WeeklyPlan],
                       duration_seconds: int = 0, name: Optional[str] = None) -> SessionResult:
        """Record today's session for plan day ``day_idx``.

        Raises EmptySessionError before touching the recorder when no
        exercise of that day is complete. PersistenceError from the recorder
        propagates: this is a user-initiated submit.
        """
        log = self._local(user_id)
        exercises = completed_exercises(plan, day_idx, log)
        if not exercises:
            raise EmptySessionError(day_idx)

        day = plan.day(day_idx)
        meta = SessionMeta(
            user_id=user_id,
            name=name or day.focus or day.label,
            log_date=log.log_date,
            duration_seconds=duration_seconds,
            notes=log.note,
        )
        result = self.recorder.record_session(meta, expand_sets(exercises, self.rpe))
        if result.dropped:
            logger.warning("Session %s stored without %s", result.session_id, ", ".join(result.dropped))
        publish_session_finished(user_id, result.session_id, result.sets_recorded, result.dropped, bus=self.bus)
        return result

    def _persist(self, log: DailyLog) -> bool:
        try:
            self.store.upsert(WORKOUT_LOGS, log.to_record(include_totals=False), DAILY_LOG_KEY)
            return True
        except PersistenceError as e:
            logger.error("Saving workout log %s/%s failed: %s", log.user_id, log.log_date, e)
            publish_persistence_failed(WORKOUT_LOGS, log.user_id, log.log_date, e, bus=self.bus)
            return False


__all__ = ['DailyWorkoutTracker', 'completed_exercises', 'expand_sets']
